# tests/test_vesting.py
import pytest

from fixtoken.chain.ledger import Ledger
from fixtoken.chain.vesting import vested_to_date, claimable_amount, pending_vesting, projected_vesting
from fixtoken.core.errors import ErrorKind
from fixtoken.core.types import Result, VestingSchedule

DEPLOYER = "deployer"
USER1 = "wallet_2"
USER2 = "wallet_3"


@pytest.fixture
def pool():
    """Ledger whose admin holds a 10000 token vesting pool."""
    ledger = Ledger()
    ledger.mint(DEPLOYER, 10000, DEPLOYER, "Vesting pool")
    return ledger


def test_vested_to_date_linear():
    schedule = VestingSchedule(start_block=100, duration_blocks=100, total_amount=1000)
    assert vested_to_date(schedule, 100) == 0
    assert vested_to_date(schedule, 150) == 500
    assert vested_to_date(schedule, 200) == 1000


def test_vested_to_date_floors():
    schedule = VestingSchedule(start_block=0, duration_blocks=3, total_amount=10)
    assert vested_to_date(schedule, 1) == 3
    assert vested_to_date(schedule, 2) == 6


def test_vested_to_date_caps_at_total():
    schedule = VestingSchedule(start_block=100, duration_blocks=100, total_amount=1000)
    assert vested_to_date(schedule, 10_000) == 1000


def test_vested_to_date_negative_before_start():
    schedule = VestingSchedule(start_block=200, duration_blocks=100, total_amount=1000)
    assert vested_to_date(schedule, 150) == -500
    # floor, not truncation toward zero
    odd = VestingSchedule(start_block=10, duration_blocks=3, total_amount=1)
    assert vested_to_date(odd, 9) == -1


def test_vested_to_date_without_schedule():
    assert vested_to_date(None, 500) == 0
    assert pending_vesting(None, 500) == 0
    assert projected_vesting(None, 500) == 0


def test_claimable_subtracts_claimed():
    schedule = VestingSchedule(start_block=100, duration_blocks=100, total_amount=1000, claimed_amount=300)
    assert claimable_amount(schedule, 150) == 200
    assert claimable_amount(schedule, 120) == -100


def test_vesting_claims_over_time(pool):
    assert pool.set_vesting_schedule(DEPLOYER, USER1, 100, 100, 1000) == Result.success(True)

    pool.advance_block(50)
    assert pool.claim_vesting(USER1) == Result.success(500)
    assert pool.balance_of(USER1) == Result.success(500)

    pool.advance_block(50)
    assert pool.claim_vesting(USER1) == Result.success(500)
    assert pool.balance_of(USER1) == Result.success(1000)

    third = pool.claim_vesting(USER1)
    assert third.ok is False
    assert third.code == 107


def test_claims_are_paid_from_admin_pool(pool):
    pool.set_vesting_schedule(DEPLOYER, USER1, 100, 100, 1000)
    pool.advance_block(25)
    pool.claim_vesting(USER1)
    assert pool.balance_of(DEPLOYER).value == 10000 - 250
    assert pool.total_supply().value == 10000
    assert pool.vesting_schedule_of(USER1).value.claimed_amount == 250


def test_claims_stop_at_total_amount(pool):
    pool.set_vesting_schedule(DEPLOYER, USER1, 100, 100, 1000)
    pool.advance_block(500)
    assert pool.claim_vesting(USER1).value == 1000
    pool.advance_block(500)
    assert pool.claim_vesting(USER1).code == 107
    assert pool.vesting_schedule_of(USER1).value.claimed_amount == 1000


def test_claimed_amount_never_decreases(pool):
    pool.set_vesting_schedule(DEPLOYER, USER1, 100, 37, 1000)
    seen = 0
    for _ in range(50):
        pool.advance_block(1)
        result = pool.claim_vesting(USER1)
        if result.ok:
            assert result.value > 0
        else:
            assert result.error is ErrorKind.VESTING_LOCKED
        claimed = pool.vesting_schedule_of(USER1).value.claimed_amount
        assert claimed >= seen
        seen = claimed
    assert seen == 1000


def test_claim_before_start_is_locked(pool):
    pool.set_vesting_schedule(DEPLOYER, USER1, 300, 100, 1000)
    assert pool.claim_vesting(USER1).code == 107


def test_claim_without_schedule(pool):
    result = pool.claim_vesting(USER2)
    assert result.code == 106
    assert result.error is ErrorKind.VESTING_NOT_FOUND


def test_claim_with_underfunded_pool():
    ledger = Ledger()
    ledger.mint(ledger.state.admin, 100, ledger.state.admin, "")
    ledger.set_vesting_schedule(ledger.state.admin, USER1, 100, 10, 1000)
    ledger.advance_block(5)
    result = ledger.claim_vesting(USER1)
    assert result.error is ErrorKind.INSUFFICIENT_BALANCE
    assert result.code == 102
    assert ledger.vesting_schedule_of(USER1).value.claimed_amount == 0
    assert ledger.balance_of(USER1).value == 0


def test_claim_follows_current_admin(pool):
    pool.set_vesting_schedule(DEPLOYER, USER1, 100, 100, 1000)
    pool.set_admin(DEPLOYER, USER2)
    pool.advance_block(50)
    # New admin holds nothing, so the pool is empty
    assert pool.claim_vesting(USER1).code == 102
    pool.transfer(DEPLOYER, 600, DEPLOYER, USER2)
    assert pool.claim_vesting(USER1).value == 500
    assert pool.balance_of(USER2).value == 100


def test_admin_can_vest_to_itself(pool):
    pool.set_vesting_schedule(DEPLOYER, DEPLOYER, 100, 10, 100)
    pool.advance_block(10)
    assert pool.claim_vesting(DEPLOYER).value == 100
    assert pool.balance_of(DEPLOYER).value == 10000


def test_set_vesting_requires_admin(pool):
    assert pool.set_vesting_schedule(USER1, USER1, 100, 100, 1000).code == 100


@pytest.mark.parametrize("duration,amount,start", [
    (0, 1000, 100),
    (100, 0, 100),
    (-1, 1000, 100),
    (100, -1, 100),
    (100, 1000, "soon"),
])
def test_set_vesting_rejects_bad_parameters(pool, duration, amount, start):
    assert pool.set_vesting_schedule(DEPLOYER, USER1, start, duration, amount).code == 102
    assert pool.vesting_schedule_of(USER1).value is None


def test_new_schedule_overwrites_and_resets_claims(pool):
    pool.set_vesting_schedule(DEPLOYER, USER1, 100, 100, 1000)
    pool.advance_block(50)
    pool.claim_vesting(USER1)
    pool.set_vesting_schedule(DEPLOYER, USER1, 150, 10, 40)
    assert pool.vesting_schedule_of(USER1).value == VestingSchedule(
        start_block=150, duration_blocks=10, total_amount=40, claimed_amount=0
    )


def test_effective_balance_projection(pool):
    pool.set_vesting_schedule(DEPLOYER, USER1, 100, 100, 1000)
    assert pool.effective_balance(USER1).value == 0
    pool.advance_block(30)
    assert pool.effective_balance(USER1).value == 300
    pool.claim_vesting(USER1)
    assert pool.balance_of(USER1).value == 300
    assert pool.effective_balance(USER1).value == 300
    pool.advance_block(20)
    assert pool.effective_balance(USER1).value == 500


def test_effective_balance_negative_before_start(pool):
    pool.set_vesting_schedule(DEPLOYER, USER1, 200, 100, 1000)
    assert pool.effective_balance(USER1) == Result.success(-1000)


def test_projection_keeps_growing_past_duration():
    schedule = VestingSchedule(start_block=100, duration_blocks=100, total_amount=1000)
    assert projected_vesting(schedule, 300) == 2000
    assert vested_to_date(schedule, 300) == 1000
    assert pending_vesting(schedule, 300) == 2000


def test_effective_balance_uncapped_after_duration(pool):
    pool.set_vesting_schedule(DEPLOYER, USER1, 100, 100, 1000)
    pool.advance_block(200)
    assert pool.effective_balance(USER1) == Result.success(2000)
    # Claims stop at the schedule total; the projection does not
    assert pool.claim_vesting(USER1) == Result.success(1000)
    assert pool.balance_of(USER1).value == 1000
    assert pool.effective_balance(USER1).value == 2000
