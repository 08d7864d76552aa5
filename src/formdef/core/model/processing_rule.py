"""
Processing rules

A processing rule belongs to one property path of the form values. It
converts the submitted raw value into the configured data type and runs the
validators registered for that path.
"""
import datetime

from typing import Any, List

from pydantic import TypeAdapter, ValidationError

from formdef import logger
from formdef.datadef import FileResource
from formdef.helper import load_class
from formdef.validation import AbstractValidator, ConjunctionValidator, Error, Result


DATA_TYPES = {
    'string': str,
    'integer': int,
    'float': float,
    'boolean': bool,
    'array': list,
    'date': datetime.date,
    'datetime': datetime.datetime,
    'file': FileResource,
}


def resolve_data_type(data_type) -> type:
    if isinstance(data_type, type):
        return data_type

    if data_type in DATA_TYPES:
        return DATA_TYPES[data_type]

    return load_class(data_type)


class ProcessingRule(object):
    def __init__(self, property_path: str = None):
        self._property_path = property_path
        self._data_type = None
        self._adapter = None
        self._validator = ConjunctionValidator()
        self._processing_messages = Result()

    @property
    def property_path(self) -> str:
        return self._property_path

    @property
    def data_type(self):
        return self._data_type

    @data_type.setter
    def data_type(self, data_type):
        self._data_type = data_type
        self._adapter = None if data_type is None else TypeAdapter(resolve_data_type(data_type))

    @property
    def data_type_name(self) -> str:
        if isinstance(self._data_type, type):
            return self._data_type.__name__

        return str(self._data_type)

    @property
    def processing_messages(self) -> Result:
        return self._processing_messages

    def reset_messages(self):
        self._processing_messages = Result()

    def add_validator(self, validator: AbstractValidator):
        self._validator.add_validator(validator)

    def remove_validator(self, validator: AbstractValidator):
        self._validator.remove_validator(validator)

    def get_validators(self) -> List[AbstractValidator]:
        return self._validator.get_validators()

    def convert(self, value: Any, messages: Result) -> Any:
        if self._adapter is None or value is None or value == '':
            return value

        try:
            return self._adapter.validate_python(value)
        except ValidationError as e:
            for item in e.errors():
                messages.add_error(Error(
                    message='The value could not be converted to %s: %s',
                    code=3001,
                    arguments=(self.data_type_name, item['msg']),
                ))

            logger.debug('Conversion of [%s] to %s failed: %s', self._property_path, self._data_type, e)
            return value

    def process(self, value: Any) -> Any:
        messages = Result()
        value = self.convert(value, messages)
        if not messages.has_errors():
            messages.merge(self._validator.validate(value))

        self._processing_messages.merge(messages)
        return value
