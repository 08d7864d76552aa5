from typing import Dict

from formdef.error import TypeDefinitionNotFoundError
from formdef.helper import merge_recursive


class SupertypeResolver(object):
    """
    Resolves a type definition by merging the definitions of all its enabled
    super types (recursively, in declaration order) below its own keys.

        Formdef:SingleLineText:
          superTypes:
            Formdef:FormElement: true
          properties: ...
    """

    def __init__(self, configuration: Dict[str, dict]):
        self._configuration = dict(configuration or {})

    @property
    def type_names(self):
        return tuple(self._configuration.keys())

    def has_type(self, type_name: str) -> bool:
        return type_name in self._configuration

    def get_merged_type_definition(self, type_name: str, show_hidden_properties: bool = False, _seen=()) -> dict:
        if type_name not in self._configuration:
            raise TypeDefinitionNotFoundError(
                "T01.402", f"Type [{type_name}] not found. Probably some configuration is missing."
            )

        if type_name in _seen:
            raise TypeDefinitionNotFoundError(
                "T01.403", f"Circular super type reference detected for [{type_name}].", list(_seen)
            )

        definition = dict(self._configuration[type_name] or {})
        merged = {}
        for super_type, enabled in (definition.pop('superTypes', None) or {}).items():
            if enabled:
                merged = merge_recursive(
                    merged,
                    self.get_merged_type_definition(super_type, True, _seen + (type_name,))
                )

        merged = merge_recursive(merged, definition)

        if not show_hidden_properties and isinstance(merged.get('properties'), dict):
            merged['properties'] = {
                key: value for key, value in merged['properties'].items()
                if not key.startswith('_')
            }

        return merged
