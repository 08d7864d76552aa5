from .result import Error, Result
from .base import AbstractValidator, ConjunctionValidator, ValidatorRegistry
from .validators import (
    AlphanumericValidator,
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
    StringLengthValidator,
    TextValidator,
)

__all__ = (
    "AbstractValidator",
    "AlphanumericValidator",
    "ConjunctionValidator",
    "CountValidator",
    "DateTimeRangeValidator",
    "EmailAddressValidator",
    "Error",
    "FileTypeValidator",
    "FloatValidator",
    "IntegerValidator",
    "MediaTypeValidator",
    "NotEmptyValidator",
    "NumberRangeValidator",
    "RegularExpressionValidator",
    "Result",
    "StringLengthValidator",
    "TextValidator",
    "ValidatorRegistry",
)
