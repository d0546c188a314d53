# fixtoken/chain/vesting.py
"""
Linear vesting math.

    projected(h) = floor((h - start_block) * total_amount / duration_blocks)

The projection is unbounded: negative before start_block, and still growing
after duration_blocks. effective_balance() reports it as-is. Claims use
vested_to_date(), the same figure capped at total_amount.
"""

from typing import Optional

from fixtoken.core.types import VestingSchedule


def projected_vesting(schedule: Optional[VestingSchedule], block_height: int) -> int:
    """Raw linear projection at block_height, 0 when there is no schedule."""
    if schedule is None:
        return 0
    elapsed = block_height - schedule.start_block
    return (elapsed * schedule.total_amount) // schedule.duration_blocks


def vested_to_date(schedule: Optional[VestingSchedule], block_height: int) -> int:
    """Amount unlocked at block_height, never more than total_amount."""
    if schedule is None:
        return 0
    return min(projected_vesting(schedule, block_height), schedule.total_amount)


def claimable_amount(schedule: VestingSchedule, block_height: int) -> int:
    """Unlocked but not yet claimed. May be zero or negative."""
    return vested_to_date(schedule, block_height) - schedule.claimed_amount


def pending_vesting(schedule: Optional[VestingSchedule], block_height: int) -> int:
    """What a schedule adds on top of the stored balance in effective_balance()."""
    if schedule is None:
        return 0
    return projected_vesting(schedule, block_height) - schedule.claimed_amount
