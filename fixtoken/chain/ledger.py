# fixtoken/chain/ledger.py
import copy
import logging
import threading
from typing import Any, Callable, Optional

from fixtoken.core.canon import state_digest
from fixtoken.core.config import LedgerConfig
from fixtoken.core.constants import TOKEN_DECIMALS, TOKEN_NAME, TOKEN_SYMBOL
from fixtoken.core.errors import LedgerError
from fixtoken.core.types import Delegation, LedgerState, MintRecord, Result, VestingSchedule
from fixtoken.chain import transitions
from fixtoken.chain.vesting import pending_vesting

logger = logging.getLogger(__name__)


class Ledger:
    """
    The FixToken ledger.
    Owns one LedgerState and exposes read-only queries plus transactions,
    all returning a Result. A transaction either applies completely or is
    rejected with an ErrorKind and leaves the state untouched.

    Every call runs under a single non-reentrant lock, so the ledger can be
    shared by threads as long as each call is treated as one transaction.
    """

    # Names the harness may dispatch by string
    TRANSACTIONS = (
        "transfer", "mint", "burn",
        "add_minter", "remove_minter", "pause", "unpause", "set_admin",
        "set_vesting_schedule", "claim_vesting",
        "delegate", "revoke_delegation",
    )
    QUERIES = (
        "name", "symbol", "decimals", "total_supply", "balance_of", "mint_record",
        "is_minter", "is_paused", "vesting_schedule_of", "delegation_of",
        "effective_balance", "block_height",
    )

    def __init__(self, config: Optional[LedgerConfig] = None):
        config = config or LedgerConfig()
        self._state = LedgerState(admin=config.admin, block_height=config.start_block)
        self._state.minters[config.admin] = True
        for minter in config.extra_minters:
            self._state.minters[minter] = True
        self._lock = threading.Lock()

    @property
    def state(self) -> LedgerState:
        """Live state without locking, for single-threaded inspection. Other threads use state_copy()."""
        return self._state

    def state_copy(self) -> LedgerState:
        """Independent copy of the whole state, taken under the lock."""
        with self._lock:
            return copy.deepcopy(self._state)

    def _apply(self, name: str, fn: Callable[..., Any], *args) -> Result:
        with self._lock:
            try:
                value = fn(self._state, *args)
            except LedgerError as e:
                logger.debug("%s rejected: %s (code %d): %s", name, e.kind.value, e.code, e)
                return Result.failure(e.kind)
        logger.debug("%s accepted -> %r", name, value)
        return Result.success(value)

    def _query(self, fn: Callable[[LedgerState], Any]) -> Result:
        with self._lock:
            return Result.success(fn(self._state))

    # ------------------------------------------------------------------
    # Harness clock
    # ------------------------------------------------------------------

    def advance_block(self, n: int = 1) -> None:
        """Move the block height forward by n (n >= 0). Only the harness calls this."""
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise ValueError(f"advance_block expects a non-negative integer, got {n!r}")
        with self._lock:
            self._state.block_height += n

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def name(self) -> Result[str]:
        return Result.success(TOKEN_NAME)

    def symbol(self) -> Result[str]:
        return Result.success(TOKEN_SYMBOL)

    def decimals(self) -> Result[int]:
        return Result.success(TOKEN_DECIMALS)

    def total_supply(self) -> Result[int]:
        return self._query(lambda s: s.total_minted)

    def balance_of(self, account: str) -> Result[int]:
        return self._query(lambda s: s.balance(account))

    def mint_record(self, mint_id: int) -> Result[Optional[MintRecord]]:
        return self._query(lambda s: s.mint_records.get(mint_id))

    def is_minter(self, account: str) -> Result[bool]:
        return self._query(lambda s: s.minters.get(account, False))

    def is_paused(self) -> Result[bool]:
        return self._query(lambda s: s.paused)

    def vesting_schedule_of(self, account: str) -> Result[Optional[VestingSchedule]]:
        return self._query(lambda s: s.vesting_schedules.get(account))

    def delegation_of(self, account: str) -> Result[Optional[Delegation]]:
        return self._query(lambda s: s.delegations.get(account))

    def effective_balance(self, account: str) -> Result[int]:
        """Stored balance plus vested-but-unclaimed tokens at the current height."""
        return self._query(
            lambda s: s.balance(account) + pending_vesting(s.vesting_schedules.get(account), s.block_height)
        )

    def block_height(self) -> Result[int]:
        return self._query(lambda s: s.block_height)

    def snapshot(self) -> dict:
        return self._query(lambda s: s.to_dict()).value

    def fingerprint(self) -> str:
        """SHA-256 of the canonical JSON snapshot; equal states give equal fingerprints."""
        return state_digest(self.snapshot())

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def transfer(self, caller: str, amount: int, sender: str, recipient: str) -> Result[bool]:
        return self._apply("transfer", transitions.transfer, caller, amount, sender, recipient)

    def mint(self, caller: str, amount: int, recipient: str, metadata: str = "") -> Result[bool]:
        return self._apply("mint", transitions.mint, caller, amount, recipient, metadata)

    def burn(self, caller: str, amount: int) -> Result[bool]:
        return self._apply("burn", transitions.burn, caller, amount)

    def add_minter(self, caller: str, target: str) -> Result[bool]:
        return self._apply("add_minter", transitions.add_minter, caller, target)

    def remove_minter(self, caller: str, target: str) -> Result[bool]:
        return self._apply("remove_minter", transitions.remove_minter, caller, target)

    def pause(self, caller: str) -> Result[bool]:
        return self._apply("pause", transitions.pause, caller)

    def unpause(self, caller: str) -> Result[bool]:
        return self._apply("unpause", transitions.unpause, caller)

    def set_admin(self, caller: str, new_admin: str) -> Result[bool]:
        return self._apply("set_admin", transitions.set_admin, caller, new_admin)

    def set_vesting_schedule(
        self,
        caller: str,
        recipient: str,
        start_block: int,
        duration_blocks: int,
        amount: int,
    ) -> Result[bool]:
        return self._apply(
            "set_vesting_schedule",
            transitions.set_vesting_schedule,
            caller, recipient, start_block, duration_blocks, amount,
        )

    def claim_vesting(self, caller: str) -> Result[int]:
        return self._apply("claim_vesting", transitions.claim_vesting, caller)

    def delegate(self, caller: str, delegatee: str, until_block: int) -> Result[bool]:
        return self._apply("delegate", transitions.delegate, caller, delegatee, until_block)

    def revoke_delegation(self, caller: str) -> Result[bool]:
        return self._apply("revoke_delegation", transitions.revoke_delegation, caller)
