from .genutil import (
    camel_to_lower,
    get_by_path,
    invalid_keys,
    load_class,
    load_string,
    load_yaml,
    merge_recursive,
    set_by_path,
    unset_by_path,
)

from .registry import ClassRegistry
