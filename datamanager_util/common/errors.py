from __future__ import annotations


class FormatterError(ValueError):
    """Base class for rejected user data values. Callers may skip and continue."""


class EmptyInputError(FormatterError):
    pass


class InvalidFormatError(FormatterError):
    pass


class EmptyLocalPartError(FormatterError):
    pass


class EmptyDomainError(FormatterError):
    pass


class EmptyLocalPartAfterNormalizationError(FormatterError):
    pass


class NoDigitsError(FormatterError):
    pass


class InvalidLengthError(FormatterError):
    pass


class InvalidCharactersError(FormatterError):
    pass


class ConsistsSolelyOfPrefixError(FormatterError):
    pass


class ConsistsSolelyOfSuffixError(FormatterError):
    pass


class DataFileError(ValueError):
    """Raised when an input data file cannot be read or parsed."""


__all__ = [
    "ConsistsSolelyOfPrefixError",
    "ConsistsSolelyOfSuffixError",
    "DataFileError",
    "EmptyDomainError",
    "EmptyInputError",
    "EmptyLocalPartAfterNormalizationError",
    "EmptyLocalPartError",
    "FormatterError",
    "InvalidCharactersError",
    "InvalidFormatError",
    "InvalidLengthError",
    "NoDigitsError",
]
