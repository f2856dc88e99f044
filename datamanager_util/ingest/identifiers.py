from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from datamanager_util.common.errors import FormatterError
from datamanager_util.common.formatter import (
    process_email_address,
    process_family_name,
    process_given_name,
    process_phone_number,
    process_region_code,
)
from datamanager_util.common.hashing import Encoding
from datamanager_util.common.schema import AddressInfo, UserIdentifier

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = ("given_name", "family_name", "region_code", "postal_code")


def build_address_identifier(
    address: Mapping[str, str],
    encoding: Encoding | str,
) -> UserIdentifier | None:
    if not address:
        return None
    missing = [name for name in ADDRESS_FIELDS if not address.get(name, "").strip()]
    if missing:
        logger.warning("Skipping incomplete address, missing: %s", ", ".join(missing))
        return None
    try:
        info = AddressInfo(
            given_name=process_given_name(address["given_name"], encoding),
            family_name=process_family_name(address["family_name"], encoding),
            region_code=process_region_code(address["region_code"]),
            postal_code=address["postal_code"].strip(),
        )
    except FormatterError as exc:
        logger.warning("Skipping invalid address: %s", exc)
        return None
    return UserIdentifier(address=info)


def build_user_identifiers(
    emails: Iterable[str],
    phone_numbers: Iterable[str],
    encoding: Encoding | str,
    address: Mapping[str, str] | None = None,
) -> list[UserIdentifier]:
    """Process raw identifiers, dropping the ones that fail validation."""
    identifiers: list[UserIdentifier] = []
    for email in emails:
        try:
            identifiers.append(UserIdentifier(email_address=process_email_address(email, encoding)))
        except FormatterError as exc:
            logger.warning("Skipping invalid email: %s", exc)

    for phone in phone_numbers:
        try:
            identifiers.append(UserIdentifier(phone_number=process_phone_number(phone, encoding)))
        except FormatterError as exc:
            logger.warning("Skipping invalid phone number: %s", exc)

    address_identifier = build_address_identifier(address or {}, encoding)
    if address_identifier is not None:
        identifiers.append(address_identifier)
    return identifiers


__all__ = ["ADDRESS_FIELDS", "build_address_identifier", "build_user_identifiers"]
