"""Request parameter records for the Dwolla actions.

Fields use snake_case in Python and serialize to Dwolla's camelCase keys.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydwolla_sdk.types import BankAccountType, CustomerType


class DwollaPayload(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class NewDwollaCustomerParams(DwollaPayload):
    first_name: str
    last_name: str
    email: str
    type: CustomerType | None = None
    address1: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    date_of_birth: str | None = None
    ssn: str | None = None


class CreateUnverifiedCustomerOptions(DwollaPayload):
    first_name: str
    last_name: str
    email: str


class CreateFundingSourceOptions(BaseModel):
    customer_id: str
    funding_source_name: str
    plaid_token: str
    on_demand_authorization_url: str | None = None


class AddFundingSourceParams(BaseModel):
    dwolla_customer_id: str
    processor_token: str
    bank_name: str


class TransferParams(BaseModel):
    source_funding_source_url: str
    destination_funding_source_url: str
    amount: str


class CreateExchangeOptions(BaseModel):
    customer_id: str
    exchange_partner_href: str
    token: str


class CreateExchangeFundingSourceOptions(BaseModel):
    customer_id: str
    exchange_url: str
    name: str
    type: BankAccountType
