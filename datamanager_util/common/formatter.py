"""Normalization of user-provided identifiers before hashing.

Each ``format_*`` function returns the canonical, non-empty form of a raw value
or raises a :class:`~datamanager_util.common.errors.FormatterError` subclass.
The ``process_*`` functions chain format, SHA256 and encoding so the result
can be placed directly in an ingestion request.

Trimming and case folding use Python's Unicode-aware ``str.strip``,
``str.lower`` and ``str.upper``. Non-ASCII whitespace (such as a no-break space)
is trimmed and non-ASCII letters are folded, so such input can hash
differently from implementations that only handle ASCII.
"""

from __future__ import annotations

import re

from datamanager_util.common.errors import (
    ConsistsSolelyOfPrefixError,
    ConsistsSolelyOfSuffixError,
    EmptyDomainError,
    EmptyInputError,
    EmptyLocalPartAfterNormalizationError,
    EmptyLocalPartError,
    InvalidCharactersError,
    InvalidFormatError,
    InvalidLengthError,
    NoDigitsError,
)
from datamanager_util.common.hashing import Encoding, hash_and_encode

GMAIL_DOMAINS = frozenset({"gmail.com", "googlemail.com"})

_WHITESPACE_RE = re.compile(r"\s")
_NON_DIGIT_RE = re.compile(r"[^0-9]")
_REGION_CODE_RE = re.compile(r"^[A-Z]+$")
_NAME_PREFIX_RE = re.compile(r"(?:mr|mrs|ms|dr)\.(?:\s|$)", re.IGNORECASE)
_NAME_SUFFIX_RE = re.compile(
    r"(?:,\s*|\s+)(?:jr\.|sr\.|2nd|3rd|ii|iii|iv|v|vi|cpa|dc|dds|vm|jd|md|phd)\s?$",
    re.IGNORECASE,
)


def _require_str(value: str, field: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{field} must be a str, got {type(value).__name__}")
    return value


def format_email_address(email: str) -> str:
    email = _require_str(email, "email").strip()
    if not email:
        raise EmptyInputError("Email address is blank or empty.")
    if _WHITESPACE_RE.search(email):
        raise InvalidFormatError("Email address contains intermediate whitespace.")

    parts = email.lower().split("@")
    if len(parts) != 2:
        raise InvalidFormatError("Email is not of the form user@domain.")
    user, domain = parts
    if not user:
        raise EmptyLocalPartError("Email address without the domain is empty.")
    if not domain:
        raise EmptyDomainError("Domain of email address is empty.")

    if domain in GMAIL_DOMAINS:
        # Gmail ignores periods in the user part.
        user = user.replace(".", "")
        if not user:
            raise EmptyLocalPartAfterNormalizationError(
                "Email address without the domain is empty after normalization."
            )
    return f"{user}@{domain}"


def format_phone_number(phone: str) -> str:
    # Only plain spaces are removed here; any other character goes with the non-digits.
    phone = _require_str(phone, "phone").replace(" ", "")
    if not phone:
        raise EmptyInputError("Phone number is blank or empty.")
    digits = _NON_DIGIT_RE.sub("", phone)
    if not digits:
        raise NoDigitsError("Phone number contains no digits.")
    return f"+{digits}"


def format_region_code(region_code: str) -> str:
    region_code = _require_str(region_code, "region_code").strip().upper()
    if len(region_code) != 2:
        raise InvalidLengthError("Region code must be two characters.")
    if not _REGION_CODE_RE.match(region_code):
        raise InvalidCharactersError("Region code contains characters other than A-Z.")
    return region_code


def format_given_name(given_name: str) -> str:
    given_name = _require_str(given_name, "given_name").strip().lower()
    if not given_name:
        raise EmptyInputError("Given name is blank or empty.")
    # Single substitution pass; a prefix needs its trailing period to match.
    given_name = _NAME_PREFIX_RE.sub("", given_name).strip()
    if not given_name:
        raise ConsistsSolelyOfPrefixError("Given name consists solely of a prefix.")
    return given_name


def format_family_name(family_name: str) -> str:
    family_name = _require_str(family_name, "family_name").strip().lower()
    if not family_name:
        raise EmptyInputError("Family name is blank or empty.")
    # Suffixes may be chained, e.g. "quinn, jr., dds".
    while _NAME_SUFFIX_RE.search(family_name):
        family_name = _NAME_SUFFIX_RE.sub("", family_name)
    if not family_name:
        raise ConsistsSolelyOfSuffixError("Family name consists solely of a suffix.")
    return family_name


def process_email_address(email: str, encoding: Encoding | str) -> str:
    return hash_and_encode(format_email_address(email), encoding)


def process_phone_number(phone: str, encoding: Encoding | str) -> str:
    return hash_and_encode(format_phone_number(phone), encoding)


def process_given_name(given_name: str, encoding: Encoding | str) -> str:
    return hash_and_encode(format_given_name(given_name), encoding)


def process_family_name(family_name: str, encoding: Encoding | str) -> str:
    return hash_and_encode(format_family_name(family_name), encoding)


def process_region_code(region_code: str) -> str:
    """Region codes are sent in clear text, so this only formats."""
    return format_region_code(region_code)


__all__ = [
    "GMAIL_DOMAINS",
    "format_email_address",
    "format_family_name",
    "format_given_name",
    "format_phone_number",
    "format_region_code",
    "process_email_address",
    "process_family_name",
    "process_given_name",
    "process_phone_number",
    "process_region_code",
]
