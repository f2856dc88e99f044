from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from datamanager_util.common.hashing import Encoding
from datamanager_util.common.io import read_csv_rows
from datamanager_util.common.schema import (
    AudienceMember,
    Destination,
    IngestAudienceMembersRequest,
    UserData,
    request_encoding,
)
from datamanager_util.ingest.identifiers import ADDRESS_FIELDS, build_user_identifiers

logger = logging.getLogger(__name__)

EMAIL_PREFIX = "email_"
PHONE_PREFIX = "phone_"


@dataclass
class MemberRecord:
    line_num: int
    emails: list[str] = field(default_factory=list)
    phone_numbers: list[str] = field(default_factory=list)
    address: dict[str, str] = field(default_factory=dict)

    def has_data(self) -> bool:
        return bool(self.emails or self.phone_numbers or self.address)


def read_member_data_file(path: str | Path) -> list[MemberRecord]:
    """Read one audience member per CSV row.

    Headers of the form ``email_...`` and ``phone_...`` hold emails and phone
    numbers; ``given_name``, ``family_name``, ``region_code`` and
    ``postal_code`` together form an address. Blank values are ignored.
    """
    _, rows = read_csv_rows(path)
    ignored_fields: set[str] = set()
    members: list[MemberRecord] = []

    for line_num, row in enumerate(rows, start=1):
        member = MemberRecord(line_num=line_num)
        for field_name, field_value in row.items():
            # Trailing fields without a header land under the None key.
            if not field_name or field_value is None:
                continue
            field_value = field_value.strip()
            if not field_value:
                continue

            if field_name.startswith(EMAIL_PREFIX):
                member.emails.append(field_value)
            elif field_name.startswith(PHONE_PREFIX):
                member.phone_numbers.append(field_value)
            elif field_name in ADDRESS_FIELDS:
                member.address[field_name] = field_value
            elif field_name not in ignored_fields:
                ignored_fields.add(field_name)
                logger.warning("Ignoring unrecognized field: %s", field_name)

        if member.has_data():
            members.append(member)
        else:
            logger.warning("Ignoring line #%d. No data.", line_num)
    return members


def build_audience_members(
    records: Iterable[MemberRecord],
    encoding: Encoding | str,
) -> list[AudienceMember]:
    members: list[AudienceMember] = []
    for record in records:
        identifiers = build_user_identifiers(
            record.emails,
            record.phone_numbers,
            encoding,
            address=record.address,
        )
        if not identifiers:
            logger.warning("Skipping line #%d. No valid identifiers.", record.line_num)
            continue
        members.append(AudienceMember(user_data=UserData(user_identifiers=identifiers)))
    return members


def build_audience_members_request(
    destination: Destination,
    members: list[AudienceMember],
    *,
    encoding: Encoding | str,
    validate_only: bool = True,
) -> IngestAudienceMembersRequest:
    return IngestAudienceMembersRequest(
        destinations=[destination],
        audience_members=members,
        encoding=request_encoding(encoding),
        validate_only=validate_only,
    )


__all__ = [
    "MemberRecord",
    "build_audience_members",
    "build_audience_members_request",
    "read_member_data_file",
]
