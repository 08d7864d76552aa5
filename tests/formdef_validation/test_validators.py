import datetime
import sys

import pytest

from formdef.datadef import FileResource
from formdef.error import InvalidValidationOptionsError
from formdef.validation import (
    AlphanumericValidator,
    ConjunctionValidator,
    CountValidator,
    DateTimeRangeValidator,
    EmailAddressValidator,
    FileTypeValidator,
    FloatValidator,
    IntegerValidator,
    MediaTypeValidator,
    NotEmptyValidator,
    NumberRangeValidator,
    RegularExpressionValidator,
    Result,
    StringLengthValidator,
    TextValidator,
    ValidatorRegistry,
)
from formdef.validation.result import Error


def is_valid(validator, value):
    return not validator.validate(value).has_errors()


class TestResult:
    def test_errors_per_property_path(self):
        result = Result()
        result.for_property('address.city').add_error(Error(message='City is required'))
        result.add_error(Error(message='Global'))

        assert result.has_errors()
        assert [e.message for e in result.for_property('address').for_property('city').get_errors()] == ['City is required']
        assert set(result.flattened_errors().keys()) == {'', 'address.city'}

    def test_merge(self):
        first, second = Result(), Result()
        second.for_property('name').add_error(Error(message='Too short %d', arguments=(3,)))
        first.merge(second)

        assert first.for_property('name').get_first_error().render() == 'Too short 3'
        assert not Result().has_errors()


class TestAbstractValidator:
    def test_unsupported_option(self):
        with pytest.raises(InvalidValidationOptionsError):
            StringLengthValidator({'foo': 1})

    def test_missing_required_option(self):
        with pytest.raises(InvalidValidationOptionsError):
            RegularExpressionValidator()

    def test_invalid_regular_expression_is_rejected_on_construction(self):
        with pytest.raises(InvalidValidationOptionsError):
            RegularExpressionValidator({'regularExpression': '(unclosed'})

    def test_defaults_are_filled_in(self):
        assert StringLengthValidator().options == {'minimum': 0, 'maximum': sys.maxsize}

    def test_empty_values_are_accepted(self):
        assert is_valid(StringLengthValidator({'minimum': 5}), '')
        assert is_valid(EmailAddressValidator(), None)

    def test_registry(self):
        assert ValidatorRegistry.get('not-empty') is NotEmptyValidator
        assert isinstance(ValidatorRegistry.construct('string-length', {'minimum': 1}), StringLengthValidator)


def test_not_empty_validator():
    validator = NotEmptyValidator()
    for value in (None, '', '   ', [], {}):
        assert not is_valid(validator, value), value

    for value in ('a', 0, [1], False):
        assert is_valid(validator, value), value


def test_string_length_validator():
    validator = StringLengthValidator({'minimum': 2, 'maximum': 4})
    assert is_valid(validator, 'abc')
    assert not is_valid(validator, 'a')
    assert not is_valid(validator, 'abcde')
    assert not is_valid(validator, 42)

    with pytest.raises(InvalidValidationOptionsError):
        StringLengthValidator({'minimum': 5, 'maximum': 1})


def test_string_length_error_message():
    result = StringLengthValidator({'minimum': 10}).validate('short')
    assert result.get_first_error().render() == 'The length of this text must be at least 10 characters.'


@pytest.mark.parametrize("validator, valid, invalid", [
    (IntegerValidator(), [1, '42', '-3'], [1.5, 'abc', True]),
    (FloatValidator(), [1.5, '3.14', 2], ['abc', True]),
    (NumberRangeValidator({'minimum': 1, 'maximum': 10}), [1, '5', 10], [0, 11, 'x']),
    (RegularExpressionValidator({'regularExpression': r'^\d{3}$'}), ['123'], ['12', 'abc']),
    (EmailAddressValidator(), ['john@example.com'], ['john', 'john@', '@example.com']),
    (AlphanumericValidator(), ['abc123', 'Ümlaut'], ['abc 123', 'a-b']),
    (TextValidator(), ['plain text'], ['<b>bold</b>']),
    (CountValidator({'minimum': 1, 'maximum': 2}), [[1], {'a': 1, 'b': 2}], [[1, 2, 3], 'ab']),
])
def test_simple_validators(validator, valid, invalid):
    for value in valid:
        assert is_valid(validator, value), value

    for value in invalid:
        assert not is_valid(validator, value), value


def test_date_time_range_validator():
    validator = DateTimeRangeValidator({'earliestDate': '2024-01-01', 'latestDate': '2024-12-31'})
    assert is_valid(validator, datetime.date(2024, 6, 1))
    assert not is_valid(validator, datetime.datetime(2025, 1, 1))
    assert not is_valid(validator, '2024-06-01')

    assert not is_valid(DateTimeRangeValidator({'earliestDate': '2024-01-01'}), datetime.date(2023, 1, 1))
    assert not is_valid(DateTimeRangeValidator({'latestDate': '2024-01-01'}), datetime.date(2025, 1, 1))


def test_file_type_validator():
    validator = FileTypeValidator({'allowedExtensions': ['pdf', 'DOC']})
    assert is_valid(validator, FileResource(filename='cv.PDF'))
    assert is_valid(validator, FileResource(filename='cv.doc'))
    assert not is_valid(validator, FileResource(filename='cv.exe'))
    assert not is_valid(validator, FileResource(filename='README'))
    assert not is_valid(validator, 'cv.pdf')


def test_media_type_validator():
    validator = MediaTypeValidator({'allowedMediaTypes': ['image/*']})
    assert is_valid(validator, FileResource(filename='a.png', media_type='image/png'))
    assert not is_valid(validator, FileResource(filename='a.txt', media_type='text/plain'))


def test_conjunction_validator_merges_results():
    conjunction = ConjunctionValidator()
    not_empty = NotEmptyValidator()
    length = StringLengthValidator({'minimum': 3})
    conjunction.add_validator(not_empty)
    conjunction.add_validator(length)
    conjunction.add_validator(length)

    assert conjunction.get_validators() == [not_empty, length]
    assert len(conjunction.validate('').get_errors()) == 1
    assert len(conjunction.validate('ab').get_errors()) == 1
    assert not conjunction.validate('abc').has_errors()

    conjunction.remove_validator(length)
    assert len(conjunction) == 1
    with pytest.raises(InvalidValidationOptionsError):
        conjunction.remove_validator(length)
