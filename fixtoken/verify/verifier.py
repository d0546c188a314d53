# fixtoken/verify/verifier.py
from typing import List, Optional
from dataclasses import dataclass

from fixtoken.core.constants import MAX_SUPPLY
from fixtoken.core.types import LedgerState
from fixtoken.chain.vesting import vested_to_date


@dataclass
class VerificationFailure:
    subject: str
    message: str
    category: str = "general"  # e.g. "balance", "conservation", "supply", "mint_counter", "vesting"


@dataclass
class VerificationResult:
    is_valid: bool
    message: str = ""
    failures: List[VerificationFailure] = None

    def __post_init__(self):
        if self.failures is None:
            self.failures = []

    @property
    def first_failure(self) -> Optional[VerificationFailure]:
        return self.failures[0] if self.failures else None

    def fail(self, subject: str, message: str, category: str) -> None:
        self.failures.append(VerificationFailure(subject, message, category))
        self.is_valid = False

    def __bool__(self):
        return self.is_valid

    def __str__(self):
        if self.is_valid:
            return "Ledger state is consistent ✓"
        lines = [f"Verification FAILED ({len(self.failures)} issues):"]
        for f in self.failures:
            lines.append(f"  • [{f.subject}] {f.category}: {f.message}")
        return "\n".join(lines)


class InvariantVerifier:
    """
    Offline checker for ledger invariants.
    Run it after any sequence of transactions; a healthy ledger always passes.
    """

    def verify(self, state: LedgerState) -> VerificationResult:
        result = VerificationResult(True)

        # 1. Balances
        for account, amount in state.balances.items():
            if amount < 0:
                result.fail(account, f"Negative balance {amount}", "balance")

        # 2. Supply bound and conservation
        if not 0 <= state.total_minted <= MAX_SUPPLY:
            result.fail("total_minted", f"{state.total_minted} outside [0, {MAX_SUPPLY}]", "supply")
        held = sum(state.balances.values())
        if held != state.total_minted:
            result.fail("total_minted", f"Balances sum to {held}, supply is {state.total_minted}", "conservation")

        # 3. Mint ids are exactly 1..mint_counter
        expected_ids = set(range(1, state.mint_counter + 1))
        if set(state.mint_records) != expected_ids:
            result.fail(
                "mint_counter",
                f"Counter is {state.mint_counter} but records hold ids {sorted(state.mint_records)}",
                "mint_counter",
            )

        # 4. Vesting claims stay within what has unlocked
        for account, schedule in state.vesting_schedules.items():
            if schedule.claimed_amount < 0:
                result.fail(account, f"Negative claimed amount {schedule.claimed_amount}", "vesting")
            if schedule.claimed_amount > schedule.total_amount:
                result.fail(
                    account,
                    f"Claimed {schedule.claimed_amount} exceeds total {schedule.total_amount}",
                    "vesting",
                )
            if schedule.claimed_amount > max(vested_to_date(schedule, state.block_height), 0):
                result.fail(
                    account,
                    f"Claimed {schedule.claimed_amount} exceeds vested amount at block {state.block_height}",
                    "vesting",
                )

        result.message = "Ledger state is consistent" if result.is_valid else f"Failed with {len(result.failures)} issues"
        return result
