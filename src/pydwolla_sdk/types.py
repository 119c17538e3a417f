from enum import StrEnum


class DwollaEnvironment(StrEnum):
    SANDBOX = "sandbox"
    PRODUCTION = "production"


class BankAccountType(StrEnum):
    CHECKING = "checking"
    SAVINGS = "savings"


class CustomerType(StrEnum):
    PERSONAL = "personal"
    BUSINESS = "business"
    RECEIVE_ONLY = "receive-only"
