import re

from typing import Any, Dict, List, Optional

from formdef.error import FormDefinitionConsistencyError
from formdef.validation import AbstractValidator, NotEmptyValidator

from .renderable import AbstractRenderable


RX_UNIQUE_IDENTIFIER = re.compile(r'[^a-zA-Z0-9\-_]')


class FormElementInterface(object):
    """
    Marker base for everything that carries a value inside a form.

    Implementation classes named in a type definition must derive from it.
    """

    def initialize_form_element(self):
        ''' Called once the element is attached and its type definition applied '''
        pass

    def on_submit(self, runtime, value: Any) -> Any:
        ''' Called with the raw submitted value before it is mapped and validated.
            Returns the (possibly altered) value. '''
        return value


class AbstractFormElement(FormElementInterface, AbstractRenderable):
    def __init__(self, identifier: str, type: Optional[str] = None):
        super().__init__(identifier, type)
        self._properties: Dict[str, Any] = {}
        self._default_value = None

    @property
    def unique_identifier(self) -> str:
        form_identifier = self.get_root_form().identifier
        return RX_UNIQUE_IDENTIFIER.sub('-', f'{form_identifier}-{self._identifier}')

    @property
    def properties(self) -> Dict[str, Any]:
        return dict(self._properties)

    def set_property(self, key: str, value: Any):
        self._properties[key] = value

    def _find_root_form(self):
        try:
            return self.get_root_form()
        except FormDefinitionConsistencyError:
            return None

    @property
    def default_value(self) -> Any:
        form_definition = self._find_root_form()
        if form_definition is None:
            return self._default_value

        return form_definition.get_element_default_value_by_identifier(self._identifier)

    @default_value.setter
    def default_value(self, default_value: Any):
        self._default_value = default_value
        form_definition = self._find_root_form()
        if form_definition is not None:
            form_definition.add_element_default_value(self._identifier, default_value)

    def register_in_form_if_possible(self):
        super().register_in_form_if_possible()
        form_definition = self._find_root_form()
        if form_definition is not None and self._default_value is not None:
            form_definition.add_element_default_value(self._identifier, self._default_value)

    def set_data_type(self, data_type):
        self._get_processing_rule().data_type = data_type

    def add_validator(self, validator: AbstractValidator):
        self._get_processing_rule().add_validator(validator)

    def get_validators(self) -> List[AbstractValidator]:
        return self._get_processing_rule().get_validators()

    def is_required(self) -> bool:
        return any(isinstance(v, NotEmptyValidator) for v in self.get_validators())

    def _get_processing_rule(self):
        return self.get_root_form().get_processing_rule(self._identifier)
