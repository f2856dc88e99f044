from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from datamanager_util.common.hashing import Encoding

AccountType = Literal[
    "GOOGLE_ADS",
    "DISPLAY_VIDEO_PARTNER",
    "DISPLAY_VIDEO_ADVERTISER",
    "DATA_PARTNER",
]
ACCOUNT_TYPES: tuple[str, ...] = get_args(AccountType)

EventSource = Literal["WEB", "APP", "IN_STORE", "PHONE", "OTHER"]
EVENT_SOURCES: tuple[str, ...] = get_args(EventSource)

ConsentStatus = Literal["CONSENT_GRANTED", "CONSENT_DENIED"]
RequestEncoding = Literal["HEX", "BASE64"]


class ApiModel(BaseModel):
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ProductAccount(ApiModel):
    account_type: AccountType
    account_id: str = Field(min_length=1)


class Destination(ApiModel):
    operating_account: ProductAccount
    login_account: ProductAccount | None = None
    linked_account: ProductAccount | None = None
    product_destination_id: str = Field(min_length=1)


class AddressInfo(ApiModel):
    given_name: str
    family_name: str
    region_code: str
    postal_code: str


class UserIdentifier(ApiModel):
    email_address: str | None = None
    phone_number: str | None = None
    address: AddressInfo | None = None

    @model_validator(mode="after")
    def validate_single_identifier(self) -> "UserIdentifier":
        populated = [
            value
            for value in (self.email_address, self.phone_number, self.address)
            if value is not None
        ]
        if len(populated) != 1:
            raise ValueError(
                "exactly one of email_address, phone_number or address must be set"
            )
        return self


class UserData(ApiModel):
    user_identifiers: list[UserIdentifier] = Field(min_length=1)


class AudienceMember(ApiModel):
    user_data: UserData


class Consent(ApiModel):
    ad_user_data: ConsentStatus = "CONSENT_GRANTED"
    ad_personalization: ConsentStatus = "CONSENT_GRANTED"


class TermsOfService(ApiModel):
    customer_match_terms_of_service_status: Literal["ACCEPTED", "REJECTED"] = "ACCEPTED"


class AdIdentifiers(ApiModel):
    gclid: str | None = None


class Event(ApiModel):
    event_timestamp: datetime
    transaction_id: str = Field(min_length=1)
    event_source: EventSource | None = None
    ad_identifiers: AdIdentifiers | None = None
    currency: str | None = None
    conversion_value: float | None = None
    user_data: UserData | None = None


class IngestAudienceMembersRequest(ApiModel):
    destinations: list[Destination] = Field(min_length=1)
    audience_members: list[AudienceMember]
    consent: Consent = Field(default_factory=Consent)
    terms_of_service: TermsOfService = Field(default_factory=TermsOfService)
    encoding: RequestEncoding = "HEX"
    validate_only: bool = True


class IngestEventsRequest(ApiModel):
    destinations: list[Destination] = Field(min_length=1)
    events: list[Event]
    consent: Consent = Field(default_factory=Consent)
    encoding: RequestEncoding = "HEX"
    validate_only: bool = True


def request_encoding(encoding: Encoding | str) -> RequestEncoding:
    return "HEX" if Encoding(encoding) is Encoding.HEX else "BASE64"


def build_destination(
    operating_account_type: str,
    operating_account_id: str,
    product_destination_id: str,
    *,
    login_account_type: str | None = None,
    login_account_id: str | None = None,
    linked_account_type: str | None = None,
    linked_account_id: str | None = None,
) -> Destination:
    login_account = None
    if login_account_type is not None and login_account_id is not None:
        login_account = ProductAccount(account_type=login_account_type, account_id=login_account_id)
    linked_account = None
    if linked_account_type is not None and linked_account_id is not None:
        linked_account = ProductAccount(
            account_type=linked_account_type, account_id=linked_account_id
        )
    return Destination(
        operating_account=ProductAccount(
            account_type=operating_account_type, account_id=operating_account_id
        ),
        login_account=login_account,
        linked_account=linked_account,
        product_destination_id=product_destination_id,
    )


__all__ = [
    "ACCOUNT_TYPES",
    "EVENT_SOURCES",
    "AccountType",
    "AdIdentifiers",
    "AddressInfo",
    "AudienceMember",
    "Consent",
    "Destination",
    "Event",
    "EventSource",
    "IngestAudienceMembersRequest",
    "IngestEventsRequest",
    "ProductAccount",
    "TermsOfService",
    "UserData",
    "UserIdentifier",
    "build_destination",
    "request_encoding",
]
