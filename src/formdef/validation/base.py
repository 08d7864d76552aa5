from typing import Any, Dict, List, Optional, Tuple

from formdef import logger
from formdef.error import InvalidValidationOptionsError
from formdef.helper import ClassRegistry

from .result import Error, Result


class AbstractValidator(object):
    """
    Base class for all validators.

    `supported_options` maps an option name to a tuple of
    `(default, description, type[, required])`. Options not listed there are
    rejected, and options flagged as required must be passed in.
    """
    supported_options: Dict[str, Tuple] = {}
    accepts_empty_values = True

    def __init__(self, options: Optional[dict] = None):
        options = dict(options or {})

        unsupported = [key for key in options if key not in self.supported_options]
        if unsupported:
            raise InvalidValidationOptionsError(
                "V01.401",
                f"Unsupported validation option(s) found for [{type(self).__name__}]: {', '.join(unsupported)}",
                unsupported
            )

        missing = [
            key for key, spec in self.supported_options.items()
            if len(spec) > 3 and spec[3] and key not in options
        ]
        if missing:
            raise InvalidValidationOptionsError(
                "V01.402",
                f"Required validation option(s) not set for [{type(self).__name__}]: {', '.join(missing)}",
                missing
            )

        self._options = {
            key: options.get(key, spec[0])
            for key, spec in self.supported_options.items()
        }
        self._result = None

    @property
    def options(self) -> dict:
        return dict(self._options)

    def validate(self, value: Any) -> Result:
        self._result = Result()
        if self.accepts_empty_values and self.is_empty(value):
            return self._result

        self.is_valid(value)
        return self._result

    def is_valid(self, value: Any):
        raise NotImplementedError(f"{type(self).__name__}.is_valid")

    def add_error(self, message: str, code: int = 0, arguments: Tuple = ()):
        self._result.add_error(Error(message=message, code=code, arguments=tuple(arguments)))

    @staticmethod
    def is_empty(value: Any) -> bool:
        return value is None or value == ''

    def __repr__(self):
        return f'<{type(self).__name__} {self._options!r}>'


ValidatorRegistry = ClassRegistry(AbstractValidator)


@ValidatorRegistry.register('conjunction')
class ConjunctionValidator(AbstractValidator):
    ''' Runs all child validators in order and merges their results '''
    accepts_empty_values = False

    def __init__(self, options: Optional[dict] = None, validators=None):
        super().__init__(options)
        self._validators: List[AbstractValidator] = list(validators or [])

    def add_validator(self, validator: AbstractValidator):
        if validator not in self._validators:
            self._validators.append(validator)

    def remove_validator(self, validator: AbstractValidator):
        try:
            self._validators.remove(validator)
        except ValueError:
            raise InvalidValidationOptionsError(
                "V01.403", f"Cannot remove validator [{validator!r}] because it is not in the conjunction."
            ) from None

    def get_validators(self) -> List[AbstractValidator]:
        return list(self._validators)

    def validate(self, value: Any) -> Result:
        result = Result()
        for validator in self._validators:
            result.merge(validator.validate(value))

        if result.has_errors():
            logger.debug('Validation of value %r failed: %s', value, result.flattened_errors())

        return result

    def __len__(self):
        return len(self._validators)

    def __iter__(self):
        return iter(self._validators)
