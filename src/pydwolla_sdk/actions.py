"""Customer, funding source and transfer operations.

Each function issues one Dwolla request and returns a single field of the
response: the ``Location`` of the created resource, or a ``_links`` object.
Failures are logged and swallowed; the function then returns ``None`` and
the caller must treat that as failure.
"""

import logging
import threading
from collections.abc import Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from pydwolla_sdk.client import DwollaClient, create_client
from pydwolla_sdk.exceptions import ConfigurationError, DwollaError
from pydwolla_sdk.models import (
    AddFundingSourceParams,
    CreateExchangeFundingSourceOptions,
    CreateExchangeOptions,
    CreateFundingSourceOptions,
    CreateUnverifiedCustomerOptions,
    NewDwollaCustomerParams,
    TransferParams,
)


log = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

PLAID_PARTNER_NAME = "plaid"

_default_client: DwollaClient | None = None
_default_client_lock = threading.Lock()


def get_dwolla_client() -> DwollaClient:
    """Return the process-wide client, creating it from the environment once."""

    global _default_client

    with _default_client_lock:
        if _default_client is None:
            _default_client = create_client()

        return _default_client


def set_dwolla_client(client: DwollaClient | None) -> None:
    """Replace (or with ``None``, reset) the process-wide client."""

    global _default_client

    with _default_client_lock:
        _default_client = client


def logs_failure(message: str) -> Callable[[Callable[P, R]], Callable[P, R | None]]:
    """Log any Dwolla failure under ``message`` and return ``None`` instead."""

    def decorator(f: Callable[P, R]) -> Callable[P, R | None]:
        @wraps(f)
        def inner(*args: P.args, **kwargs: P.kwargs) -> R | None:
            try:
                return f(*args, **kwargs)

            except ConfigurationError:
                raise

            except DwollaError as exc:
                log.error("%s: %s", message, exc)
                return None

        return inner

    return decorator


# -- customers -------------------------------------------------------------


@logs_failure("Creating a Dwolla Customer Failed")
def create_dwolla_customer(
    new_customer: NewDwollaCustomerParams, *, client: DwollaClient | None = None
) -> str | None:
    client = client or get_dwolla_client()

    return client.post("customers", new_customer.to_body()).location


@logs_failure("Creating an Unverified Customer Failed")
def create_unverified_customer(
    options: CreateUnverifiedCustomerOptions, *, client: DwollaClient | None = None
) -> str | None:
    client = client or get_dwolla_client()

    return client.post("customers", options.to_body()).location


# -- funding sources -------------------------------------------------------


@logs_failure("Creating a Funding Source Failed")
def create_funding_source(
    options: CreateFundingSourceOptions, *, client: DwollaClient | None = None
) -> str | None:
    """Create a funding source from a Plaid processor token."""

    client = client or get_dwolla_client()

    body: dict[str, Any] = {
        "name": options.funding_source_name,
        "plaidToken": options.plaid_token,
    }

    if options.on_demand_authorization_url:
        body["_links"] = {
            "on-demand-authorization": {"href": options.on_demand_authorization_url}
        }

    return client.post(f"customers/{options.customer_id}/funding-sources", body).location


@logs_failure("Creating an On Demand Authorization Failed")
def create_on_demand_authorization(
    *, client: DwollaClient | None = None
) -> dict[str, Any] | None:
    client = client or get_dwolla_client()

    return client.post("on-demand-authorizations").body.get("_links")


@logs_failure("Adding a Funding Source Failed")
def add_funding_source(
    params: AddFundingSourceParams, *, client: DwollaClient | None = None
) -> str | None:
    """Authorize on-demand transfers, then attach the bank to the customer."""

    client = client or get_dwolla_client()

    auth_links = create_on_demand_authorization(client=client) or {}

    options = CreateFundingSourceOptions(
        customer_id=params.dwolla_customer_id,
        funding_source_name=params.bank_name,
        plaid_token=params.processor_token,
        on_demand_authorization_url=auth_links.get("self", {}).get("href"),
    )

    return create_funding_source(options, client=client)


# -- exchanges -------------------------------------------------------------


@logs_failure("Looking up the Plaid Exchange Partner Failed")
def get_exchange_href(*, client: DwollaClient | None = None) -> str | None:
    """Return Plaid's exchange partner href within Dwolla."""

    client = client or get_dwolla_client()

    resp = client.get("exchange-partners")
    partners = resp.body.get("_embedded", {}).get("exchange-partners", [])

    for partner in partners:
        if partner.get("name", "").lower() == PLAID_PARTNER_NAME:
            return partner["_links"]["self"]["href"]

    log.warning("No Plaid partner among %d exchange partners", len(partners))

    return None


@logs_failure("Creating an Exchange Failed")
def create_exchange(
    options: CreateExchangeOptions, *, client: DwollaClient | None = None
) -> str | None:
    """Create a customer exchange from a token issued by Plaid."""

    client = client or get_dwolla_client()

    body = {
        "_links": {"exchange-partner": {"href": options.exchange_partner_href}},
        "token": options.token,
    }

    return client.post(f"customers/{options.customer_id}/exchanges", body).location


@logs_failure("Creating an Exchange Funding Source Failed")
def create_exchange_funding_source(
    options: CreateExchangeFundingSourceOptions, *, client: DwollaClient | None = None
) -> str | None:
    client = client or get_dwolla_client()

    body = {
        "_links": {"exchange": {"href": options.exchange_url}},
        "bankAccountType": str(options.type),
        "name": options.name,
    }

    return client.post(f"customers/{options.customer_id}/funding-sources", body).location


# -- transfers -------------------------------------------------------------


@logs_failure("Transfer fund failed")
def create_transfer(
    params: TransferParams, *, client: DwollaClient | None = None
) -> str | None:
    client = client or get_dwolla_client()

    body = {
        "_links": {
            "source": {"href": params.source_funding_source_url},
            "destination": {"href": params.destination_funding_source_url},
        },
        "amount": {"currency": "USD", "value": params.amount},
    }

    return client.post("transfers", body).location
