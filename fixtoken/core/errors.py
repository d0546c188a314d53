# fixtoken/core/errors.py
"""
Error taxonomy for ledger transactions.

Kinds are named by what went wrong. Several kinds share a legacy numeric code
(e.g. insufficient balance reports 102 like an invalid amount); the numeric code
is only looked up at the result boundary via ErrorKind.code.
"""

from enum import Enum
from typing import Dict


class ErrorKind(Enum):
    UNAUTHORIZED = "unauthorized"
    PAUSED = "paused"
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    METADATA_TOO_LONG = "metadata_too_long"
    INVALID_EXPIRY = "invalid_expiry"
    INVALID_RECIPIENT = "invalid_recipient"
    INVALID_MINTER = "invalid_minter"
    ALREADY_REGISTERED = "already_registered"
    VESTING_NOT_FOUND = "vesting_not_found"
    DELEGATION_NOT_FOUND = "delegation_not_found"
    VESTING_LOCKED = "vesting_locked"
    DELEGATION_ACTIVE = "delegation_active"
    MAX_SUPPLY_REACHED = "max_supply_reached"

    @property
    def code(self) -> int:
        return LEGACY_CODES[self]


LEGACY_CODES: Dict[ErrorKind, int] = {
    ErrorKind.UNAUTHORIZED: 100,
    ErrorKind.PAUSED: 101,
    ErrorKind.INVALID_AMOUNT: 102,
    ErrorKind.INSUFFICIENT_BALANCE: 102,
    ErrorKind.METADATA_TOO_LONG: 102,
    ErrorKind.INVALID_EXPIRY: 102,
    ErrorKind.INVALID_RECIPIENT: 103,
    ErrorKind.INVALID_MINTER: 104,
    ErrorKind.ALREADY_REGISTERED: 105,
    ErrorKind.VESTING_NOT_FOUND: 106,
    ErrorKind.DELEGATION_NOT_FOUND: 106,
    ErrorKind.VESTING_LOCKED: 107,
    ErrorKind.DELEGATION_ACTIVE: 108,
    ErrorKind.MAX_SUPPLY_REACHED: 109,
}


class LedgerError(Exception):
    """Base for every rejected transaction. Raised before any state is touched."""
    kind: ErrorKind = ErrorKind.INVALID_AMOUNT

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind.value)

    @property
    def code(self) -> int:
        return self.kind.code


class UnauthorizedError(LedgerError):
    kind = ErrorKind.UNAUTHORIZED


class PausedError(LedgerError):
    kind = ErrorKind.PAUSED


class InvalidAmountError(LedgerError):
    kind = ErrorKind.INVALID_AMOUNT


class InsufficientBalanceError(LedgerError):
    kind = ErrorKind.INSUFFICIENT_BALANCE


class MetadataTooLongError(LedgerError):
    kind = ErrorKind.METADATA_TOO_LONG


class InvalidExpiryError(LedgerError):
    kind = ErrorKind.INVALID_EXPIRY


class InvalidRecipientError(LedgerError):
    kind = ErrorKind.INVALID_RECIPIENT


class InvalidMinterError(LedgerError):
    kind = ErrorKind.INVALID_MINTER


class AlreadyRegisteredError(LedgerError):
    kind = ErrorKind.ALREADY_REGISTERED


class VestingNotFoundError(LedgerError):
    kind = ErrorKind.VESTING_NOT_FOUND


class DelegationNotFoundError(LedgerError):
    kind = ErrorKind.DELEGATION_NOT_FOUND


class VestingLockedError(LedgerError):
    kind = ErrorKind.VESTING_LOCKED


class DelegationActiveError(LedgerError):
    kind = ErrorKind.DELEGATION_ACTIVE


class MaxSupplyReachedError(LedgerError):
    kind = ErrorKind.MAX_SUPPLY_REACHED


_ERRORS_BY_KIND: Dict[ErrorKind, type] = {
    cls.kind: cls for cls in LedgerError.__subclasses__()
}


def error_for(kind: ErrorKind, message: str = "") -> LedgerError:
    """Build the exception matching an error kind."""
    return _ERRORS_BY_KIND[kind](message)
