# fixtoken/core/types.py
from dataclasses import dataclass, field, asdict
from typing import Dict, Generic, Optional, TypeVar

from fixtoken.core.errors import ErrorKind, error_for

T = TypeVar("T")


@dataclass(frozen=True)
class MintRecord:
    """Immutable audit entry written by every successful mint."""
    amount: int
    recipient: str
    metadata: str
    timestamp: int                  # block height at creation

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class VestingSchedule:
    """Linear unlock of total_amount over duration_blocks starting at start_block."""
    start_block: int
    duration_blocks: int
    total_amount: int
    claimed_amount: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Delegation:
    delegatee: str
    until_block: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Uniform outcome of every ledger call.
    Success carries a value (possibly None for "not found" queries),
    failure carries an ErrorKind whose legacy numeric code is exposed as .code.
    """
    ok: bool
    value: Optional[T] = None
    error: Optional[ErrorKind] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> "Result[T]":
        return cls(ok=False, error=error)

    @property
    def code(self) -> Optional[int]:
        """Legacy numeric error code, None on success."""
        return self.error.code if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value or raise the matching LedgerError."""
        if not self.ok:
            raise error_for(self.error)
        return self.value

    def __bool__(self):
        return self.ok

    def __str__(self):
        if self.ok:
            return f"ok({self.value!r})"
        return f"err({self.code} {self.error.value})"


@dataclass
class LedgerState:
    """
    All mutable ledger data in one place.
    Owned by a single Ledger and handed to the transition functions by reference.
    """
    admin: str
    block_height: int
    balances: Dict[str, int] = field(default_factory=dict)
    minters: Dict[str, bool] = field(default_factory=dict)
    mint_records: Dict[int, MintRecord] = field(default_factory=dict)
    vesting_schedules: Dict[str, VestingSchedule] = field(default_factory=dict)
    delegations: Dict[str, Delegation] = field(default_factory=dict)
    total_minted: int = 0
    paused: bool = False
    mint_counter: int = 0

    def balance(self, account: str) -> int:
        return self.balances.get(account, 0)

    def to_dict(self) -> dict:
        """Plain JSON-compatible view (map keys as strings) for canonicalization."""
        return {
            "admin": self.admin,
            "block_height": self.block_height,
            "balances": dict(self.balances),
            "minters": dict(self.minters),
            "mint_records": {str(k): v.to_dict() for k, v in self.mint_records.items()},
            "vesting_schedules": {k: v.to_dict() for k, v in self.vesting_schedules.items()},
            "delegations": {k: v.to_dict() for k, v in self.delegations.items()},
            "total_minted": self.total_minted,
            "paused": self.paused,
            "mint_counter": self.mint_counter,
        }
