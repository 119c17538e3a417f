from pydwolla_sdk.actions import (
    add_funding_source,
    create_dwolla_customer,
    create_exchange,
    create_exchange_funding_source,
    create_funding_source,
    create_on_demand_authorization,
    create_transfer,
    create_unverified_customer,
    get_dwolla_client,
    get_exchange_href,
    set_dwolla_client,
)
from pydwolla_sdk.auth import AuthTokens, TokenProvider
from pydwolla_sdk.client import DwollaClient, DwollaResponse, create_client
from pydwolla_sdk.config import DwollaCredentials, get_credentials, get_environment
from pydwolla_sdk.exceptions import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    DwollaError,
    TransportError,
)
from pydwolla_sdk.models import (
    AddFundingSourceParams,
    CreateExchangeFundingSourceOptions,
    CreateExchangeOptions,
    CreateFundingSourceOptions,
    CreateUnverifiedCustomerOptions,
    NewDwollaCustomerParams,
    TransferParams,
)
from pydwolla_sdk.types import BankAccountType, CustomerType, DwollaEnvironment
