import importlib
import re

from copy import deepcopy
from typing import Any, Iterable, Mapping, Optional

import yaml


RX_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')
PATH_SEPARATOR = '.'


def camel_to_lower(name: str, sep: str = '-') -> str:
    return RX_CAMEL_BOUNDARY.sub(sep, name).lower()


def load_string(path: str) -> Any:
    ''' Import the object referenced by a dotted path, e.g. `package.module.ClassName` '''
    module_name, _, attr = path.rpartition('.')
    if not module_name:
        raise ImportError(f"Invalid object path: {path}")

    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError:
        raise ImportError(f"Module [{module_name}] has no attribute [{attr}]") from None


def load_class(name_or_class, registry=None) -> type:
    ''' Resolve a class from a registry key, a dotted path or the class itself '''
    if isinstance(name_or_class, type):
        return name_or_class

    if not isinstance(name_or_class, str) or not name_or_class:
        raise ImportError(f"Cannot load class from: {name_or_class!r}")

    if registry is not None and name_or_class in registry.keys():
        return registry.get(name_or_class)

    cls = load_string(name_or_class)
    if not isinstance(cls, type):
        raise ImportError(f"Object [{name_or_class}] is not a class")

    return cls


def load_yaml(path) -> dict:
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def merge_recursive(base: Optional[Mapping], override: Optional[Mapping]) -> dict:
    ''' Merge `override` into a copy of `base`. Nested mappings are merged,
        any other value (lists included) is replaced. '''
    result = deepcopy(dict(base or {}))
    for key, value in (override or {}).items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = merge_recursive(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


def _split(path) -> list:
    if isinstance(path, (list, tuple)):
        return list(path)

    return str(path).split(PATH_SEPARATOR)


def get_by_path(data: Mapping, path, default=None) -> Any:
    current = data
    for segment in _split(path):
        if not isinstance(current, Mapping) or segment not in current:
            return default
        current = current[segment]

    return current


def set_by_path(data: dict, path, value) -> dict:
    segments = _split(path)
    current = data
    for segment in segments[:-1]:
        if not isinstance(current.get(segment), dict):
            current[segment] = {}
        current = current[segment]

    current[segments[-1]] = value
    return data


def unset_by_path(data: dict, path) -> dict:
    segments = _split(path)
    current = data
    for segment in segments[:-1]:
        current = current.get(segment)
        if not isinstance(current, dict):
            return data

    current.pop(segments[-1], None)
    return data


def invalid_keys(data: Mapping, allowed: Iterable[str]) -> list:
    allowed = set(allowed)
    return [key for key in data.keys() if key not in allowed]
