# fixtoken/chain/transitions.py
"""
State transition functions.

Every function takes the LedgerState by reference, runs all of its checks first
and only then mutates. A raised LedgerError therefore always means "nothing
changed".
"""

import logging
from dataclasses import replace

from fixtoken.core.constants import MAX_METADATA_LEN, MAX_SUPPLY
from fixtoken.core.errors import (
    AlreadyRegisteredError,
    DelegationActiveError,
    DelegationNotFoundError,
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidExpiryError,
    InvalidMinterError,
    InvalidRecipientError,
    MaxSupplyReachedError,
    MetadataTooLongError,
    PausedError,
    UnauthorizedError,
    VestingLockedError,
    VestingNotFoundError,
)
from fixtoken.core.types import Delegation, LedgerState, MintRecord, VestingSchedule
from fixtoken.chain.vesting import claimable_amount

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_positive(value, what: str = "amount") -> None:
    if not _is_int(value) or value <= 0:
        raise InvalidAmountError(f"{what} must be a positive integer, got {value!r}")


def _require_not_paused(state: LedgerState) -> None:
    if state.paused:
        raise PausedError("ledger is paused")


def _require_admin(state: LedgerState, caller: str) -> None:
    if caller != state.admin:
        raise UnauthorizedError(f"{caller!r} is not the admin")


def _move(state: LedgerState, source: str, target: str, amount: int) -> None:
    # Re-read target after debiting so source == target nets out to zero
    state.balances[source] = state.balance(source) - amount
    state.balances[target] = state.balance(target) + amount


# ------------------------------------------------------------------------------
# Token movement
# ------------------------------------------------------------------------------


def transfer(state: LedgerState, caller: str, amount: int, sender: str, recipient: str) -> bool:
    _require_not_paused(state)
    if caller != sender:
        raise UnauthorizedError(f"{caller!r} cannot move funds of {sender!r}")
    _require_positive(amount)
    if recipient == sender:
        raise InvalidRecipientError("sender and recipient are the same account")
    if state.balance(sender) < amount:
        raise InsufficientBalanceError(f"{sender!r} holds {state.balance(sender)}, needs {amount}")

    _move(state, sender, recipient, amount)
    return True


def mint(state: LedgerState, caller: str, amount: int, recipient: str, metadata: str) -> bool:
    """Create new supply for recipient and log a MintRecord under the next mint id."""
    _require_not_paused(state)
    if not state.minters.get(caller, False):
        raise InvalidMinterError(f"{caller!r} is not an authorized minter")
    _require_positive(amount)
    if not isinstance(metadata, str) or len(metadata) > MAX_METADATA_LEN:
        raise MetadataTooLongError(f"metadata must be text of at most {MAX_METADATA_LEN} characters")
    new_total = state.total_minted + amount
    if new_total > MAX_SUPPLY:
        raise MaxSupplyReachedError(f"minting {amount} would bring supply to {new_total} > {MAX_SUPPLY}")

    mint_id = state.mint_counter + 1
    state.balances[recipient] = state.balance(recipient) + amount
    state.total_minted = new_total
    state.mint_records[mint_id] = MintRecord(
        amount=amount,
        recipient=recipient,
        metadata=metadata,
        timestamp=state.block_height,
    )
    state.mint_counter = mint_id
    return True


def burn(state: LedgerState, caller: str, amount: int) -> bool:
    _require_not_paused(state)
    _require_positive(amount)
    if state.balance(caller) < amount:
        raise InsufficientBalanceError(f"{caller!r} holds {state.balance(caller)}, cannot burn {amount}")

    state.balances[caller] = state.balance(caller) - amount
    state.total_minted -= amount
    return True


# ------------------------------------------------------------------------------
# Administration (admin only)
# ------------------------------------------------------------------------------


def add_minter(state: LedgerState, caller: str, target: str) -> bool:
    _require_admin(state, caller)
    if state.minters.get(target, False):
        raise AlreadyRegisteredError(f"{target!r} is already a minter")

    state.minters[target] = True
    logger.info("minter added: %s", target)
    return True


def remove_minter(state: LedgerState, caller: str, target: str) -> bool:
    _require_admin(state, caller)
    # Keep the entry; a False flag reads the same as no entry
    state.minters[target] = False
    logger.info("minter removed: %s", target)
    return True


def pause(state: LedgerState, caller: str) -> bool:
    _require_admin(state, caller)
    state.paused = True
    logger.info("ledger paused by %s", caller)
    return True


def unpause(state: LedgerState, caller: str) -> bool:
    _require_admin(state, caller)
    state.paused = False
    logger.info("ledger unpaused by %s", caller)
    return True


def set_admin(state: LedgerState, caller: str, new_admin: str) -> bool:
    """Single-step handoff: the new admin takes over immediately."""
    _require_admin(state, caller)
    state.admin = new_admin
    logger.info("admin changed: %s -> %s", caller, new_admin)
    return True


# ------------------------------------------------------------------------------
# Vesting
# ------------------------------------------------------------------------------


def set_vesting_schedule(
    state: LedgerState,
    caller: str,
    recipient: str,
    start_block: int,
    duration_blocks: int,
    amount: int,
) -> bool:
    """
    Assign (or replace) recipient's schedule with claimed_amount reset to 0.
    No tokens move here; claims are paid out of the admin's balance later.
    """
    _require_admin(state, caller)
    _require_positive(duration_blocks, "duration_blocks")
    _require_positive(amount)
    if not _is_int(start_block):
        raise InvalidAmountError(f"start_block must be an integer, got {start_block!r}")

    state.vesting_schedules[recipient] = VestingSchedule(
        start_block=start_block,
        duration_blocks=duration_blocks,
        total_amount=amount,
    )
    return True


def claim_vesting(state: LedgerState, caller: str) -> int:
    """Pay out everything unlocked so far. Returns the amount claimed."""
    schedule = state.vesting_schedules.get(caller)
    if schedule is None:
        raise VestingNotFoundError(f"no vesting schedule for {caller!r}")
    claimable = claimable_amount(schedule, state.block_height)
    if claimable <= 0:
        raise VestingLockedError(f"nothing to claim at block {state.block_height}")
    if state.balance(state.admin) < claimable:
        raise InsufficientBalanceError(
            f"admin pool holds {state.balance(state.admin)}, claim needs {claimable}"
        )

    _move(state, state.admin, caller, claimable)
    state.vesting_schedules[caller] = replace(schedule, claimed_amount=schedule.claimed_amount + claimable)
    return claimable


# ------------------------------------------------------------------------------
# Delegation (bookkeeping only)
# ------------------------------------------------------------------------------


def delegate(state: LedgerState, caller: str, delegatee: str, until_block: int) -> bool:
    if not _is_int(until_block) or until_block <= state.block_height:
        raise InvalidExpiryError(f"until_block must be after block {state.block_height}")
    # Presence alone counts as active, even once until_block has passed
    if caller in state.delegations:
        raise DelegationActiveError(f"{caller!r} already has a delegation")

    state.delegations[caller] = Delegation(delegatee=delegatee, until_block=until_block)
    return True


def revoke_delegation(state: LedgerState, caller: str) -> bool:
    if caller not in state.delegations:
        raise DelegationNotFoundError(f"no delegation for {caller!r}")

    del state.delegations[caller]
    return True
