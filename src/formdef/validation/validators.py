import datetime
import fnmatch
import re
import sys

from collections.abc import Sized

from formdef.datadef import FileResource
from formdef.error import InvalidValidationOptionsError

from .base import AbstractValidator, ValidatorRegistry


RX_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s.]+$")
RX_HTML_TAG = re.compile(r"<[^>]*>")
RX_INTEGER = re.compile(r"^[+-]?\d+$")


def _to_number(value):
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return value

    if isinstance(value, str):
        try:
            return float(value) if not RX_INTEGER.match(value.strip()) else int(value)
        except ValueError:
            return None

    return None


def _to_datetime(value):
    if isinstance(value, datetime.datetime):
        return value

    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time())

    if isinstance(value, str) and value:
        return datetime.datetime.fromisoformat(value)

    return None


@ValidatorRegistry.register('not-empty')
class NotEmptyValidator(AbstractValidator):
    accepts_empty_values = False

    def is_valid(self, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            self.add_error('This property is required.', 1001)
            return

        if isinstance(value, Sized) and not isinstance(value, str) and len(value) == 0:
            self.add_error('This property is required.', 1002)


@ValidatorRegistry.register('string-length')
class StringLengthValidator(AbstractValidator):
    supported_options = {
        'minimum': (0, 'Minimum length for a valid string', 'integer'),
        'maximum': (sys.maxsize, 'Maximum length for a valid string', 'integer'),
    }

    def __init__(self, options=None):
        super().__init__(options)
        if self._options['maximum'] < self._options['minimum']:
            raise InvalidValidationOptionsError(
                "V01.404",
                "The 'maximum' is shorter than the 'minimum' in the StringLengthValidator."
            )

    def is_valid(self, value):
        if not isinstance(value, str):
            self.add_error('The given value was not a valid string.', 1101)
            return

        minimum, maximum = self._options['minimum'], self._options['maximum']
        length = len(value)
        if minimum <= length <= maximum:
            return

        if maximum == sys.maxsize:
            self.add_error('The length of this text must be at least %d characters.', 1102, (minimum,))
        elif minimum > 0:
            self.add_error('The length of this text must be between %d and %d characters.', 1103, (minimum, maximum))
        else:
            self.add_error('This text may not exceed %d characters.', 1104, (maximum,))


@ValidatorRegistry.register('integer')
class IntegerValidator(AbstractValidator):
    def is_valid(self, value):
        if isinstance(value, bool):
            self.add_error('A valid integer number is expected.', 1201)
        elif isinstance(value, int):
            return
        elif not (isinstance(value, str) and RX_INTEGER.match(value.strip())):
            self.add_error('A valid integer number is expected.', 1201)


@ValidatorRegistry.register('float')
class FloatValidator(AbstractValidator):
    def is_valid(self, value):
        if _to_number(value) is None:
            self.add_error('A valid float number is expected.', 1301)


@ValidatorRegistry.register('number-range')
class NumberRangeValidator(AbstractValidator):
    supported_options = {
        'minimum': (0, 'The minimum value to accept', 'integer'),
        'maximum': (sys.maxsize, 'The maximum value to accept', 'integer'),
    }

    def is_valid(self, value):
        number = _to_number(value)
        if number is None:
            self.add_error('A valid number is expected.', 1401)
            return

        minimum, maximum = self._options['minimum'], self._options['maximum']
        if minimum > maximum:
            minimum, maximum = maximum, minimum

        if not minimum <= number <= maximum:
            self.add_error('Please enter a valid number between %s and %s.', 1402, (minimum, maximum))


@ValidatorRegistry.register('regular-expression')
class RegularExpressionValidator(AbstractValidator):
    supported_options = {
        'regularExpression': ('', 'The regular expression to use for validation', 'string', True),
    }

    def __init__(self, options=None):
        super().__init__(options)
        try:
            self._pattern = re.compile(self._options['regularExpression'])
        except re.error as e:
            raise InvalidValidationOptionsError(
                "V01.405", "The regular expression is invalid.", str(e)
            ) from e

    def is_valid(self, value):
        if not self._pattern.search(str(value)):
            self.add_error('The given subject did not match the pattern.', 1501)


@ValidatorRegistry.register('email-address')
class EmailAddressValidator(AbstractValidator):
    def is_valid(self, value):
        if not isinstance(value, str) or not RX_EMAIL.match(value):
            self.add_error('Please specify a valid email address.', 1601)


@ValidatorRegistry.register('alphanumeric')
class AlphanumericValidator(AbstractValidator):
    def is_valid(self, value):
        if not isinstance(value, str) or not value.isalnum():
            self.add_error('Only regular characters (a to z, umlauts, ...) and numbers are allowed.', 1701)


@ValidatorRegistry.register('text')
class TextValidator(AbstractValidator):
    ''' Rejects values containing XML/HTML tags '''

    def is_valid(self, value):
        if not isinstance(value, str) or RX_HTML_TAG.search(value):
            self.add_error('Valid text without any XML tags is expected.', 1801)


@ValidatorRegistry.register('count')
class CountValidator(AbstractValidator):
    supported_options = {
        'minimum': (0, 'The minimum count to accept', 'integer'),
        'maximum': (sys.maxsize, 'The maximum count to accept', 'integer'),
    }

    def is_valid(self, value):
        if isinstance(value, str) or not isinstance(value, Sized):
            self.add_error('The given subject was not countable.', 1901)
            return

        minimum, maximum = self._options['minimum'], self._options['maximum']
        if not minimum <= len(value) <= maximum:
            self.add_error('The count must be between %d and %d.', 1902, (minimum, maximum))


@ValidatorRegistry.register('date-time-range')
class DateTimeRangeValidator(AbstractValidator):
    supported_options = {
        'latestDate': (None, 'The latest date to accept', 'string'),
        'earliestDate': (None, 'The earliest date to accept', 'string'),
    }

    def is_valid(self, value):
        if not isinstance(value, (datetime.date, datetime.datetime)):
            self.add_error('The given value was not a valid date.', 2001)
            return

        value = _to_datetime(value)
        earliest = _to_datetime(self._options['earliestDate'])
        latest = _to_datetime(self._options['latestDate'])

        if earliest is not None and latest is not None:
            if not earliest <= value <= latest:
                self.add_error('The given date must be between %s and %s', 2002, (earliest.isoformat(), latest.isoformat()))
        elif earliest is not None and value < earliest:
            self.add_error('The given date must be after %s', 2003, (earliest.isoformat(),))
        elif latest is not None and value > latest:
            self.add_error('The given date must be before %s', 2004, (latest.isoformat(),))


@ValidatorRegistry.register('file-type')
class FileTypeValidator(AbstractValidator):
    supported_options = {
        'allowedExtensions': ([], 'Array of allowed file extensions', 'array', True),
    }

    def is_valid(self, value):
        if not isinstance(value, FileResource):
            self.add_error('The given value was not a file resource.', 2101)
            return

        allowed = [ext.lower() for ext in self._options['allowedExtensions'] or ()]
        if value.file_extension not in allowed:
            self.add_error('The file extension "%s" is not allowed.', 2102, (value.file_extension,))


@ValidatorRegistry.register('media-type')
class MediaTypeValidator(AbstractValidator):
    ''' Accepts file resources whose media type matches one of the allowed patterns (e.g. `image/*`) '''
    supported_options = {
        'allowedMediaTypes': ([], 'Array of allowed media types, wildcards allowed', 'array', True),
    }

    def is_valid(self, value):
        if not isinstance(value, FileResource):
            self.add_error('The given value was not a file resource.', 2201)
            return

        media_type = (value.media_type or '').lower()
        if not any(fnmatch.fnmatch(media_type, p.lower()) for p in self._options['allowedMediaTypes']):
            self.add_error('The media type "%s" is not allowed.', 2202, (media_type,))
