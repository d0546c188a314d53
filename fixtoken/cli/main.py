# fixtoken/cli/main.py
"""
Harness CLI: inspect token metadata and replay transaction scenarios against a fresh ledger.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from fixtoken.core.config import LedgerConfig
from fixtoken.core.constants import MAX_SUPPLY, TOKEN_DECIMALS, TOKEN_NAME, TOKEN_SYMBOL
from fixtoken.core.errors import ErrorKind
from fixtoken.core.types import Result
from fixtoken.chain.ledger import Ledger
from fixtoken.verify.verifier import InvariantVerifier

app = typer.Typer(
    name="fixtoken",
    help="Inspect the FixToken ledger and replay transaction scenarios",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def render_value(value: Any) -> str:
    if hasattr(value, "to_dict"):
        return json.dumps(value.to_dict(), separators=(",", ":"))
    if value is None:
        return "none"
    return str(value)


def matches_expectation(result: Result, expect: dict) -> bool:
    """`expect` may pin ok, code and/or value (records compared as plain dicts)."""
    if "ok" in expect and result.ok != expect["ok"]:
        return False
    if "code" in expect and result.code != expect["code"]:
        return False
    if "value" in expect:
        wanted = expect["value"]
        actual = result.value.to_dict() if hasattr(result.value, "to_dict") else result.value
        if actual != wanted:
            return False
    return True


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="FIXTOKEN_LOG_LEVEL",
        help="Logging level for ledger internals (DEBUG shows every transaction)",
    ),
):
    """Deterministic fungible-token ledger harness."""
    setup_logging(log_level)


@app.command()
def info():
    """Show fixed token metadata."""
    table = Table(title="Token")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Name", TOKEN_NAME)
    table.add_row("Symbol", TOKEN_SYMBOL)
    table.add_row("Decimals", str(TOKEN_DECIMALS))
    table.add_row("Max supply", str(MAX_SUPPLY))
    console.print(table)


@app.command()
def errors():
    """List error kinds with their numeric codes."""
    table = Table(title="Error codes")
    table.add_column("Code")
    table.add_column("Kind")
    for kind in sorted(ErrorKind, key=lambda k: (k.code, k.value)):
        table.add_row(str(kind.code), kind.value)
    console.print(table)


@app.command()
def run(
    script: Path = typer.Argument(..., help="JSON scenario: {\"steps\": [{\"op\": ..., ...}]}"),
    admin: Optional[str] = typer.Option(None, "--admin", envvar="FIXTOKEN_ADMIN", help="Initial admin account"),
    start_block: Optional[int] = typer.Option(
        None, "--start-block", envvar="FIXTOKEN_START_BLOCK", help="Initial block height"
    ),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 if any transaction is rejected"),
):
    """Replay a scenario against a fresh ledger and check invariants afterwards."""
    if not script.exists():
        console.print(f"[red]Scenario file not found: {script}[/]")
        raise typer.Exit(1)

    try:
        with open(script, "r", encoding="utf-8") as f:
            scenario = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Could not read scenario: {str(e)}[/]")
        raise typer.Exit(1)

    steps = scenario.get("steps") if isinstance(scenario, dict) else None
    if not isinstance(steps, list):
        console.print("[red]Scenario must be an object with a 'steps' list[/]")
        raise typer.Exit(1)

    try:
        config = LedgerConfig.from_env(
            admin=admin or scenario.get("admin"),
            start_block=start_block if start_block is not None else scenario.get("start_block"),
        )
    except ValueError as e:
        console.print(f"[red]Invalid ledger configuration: {str(e)}[/]")
        raise typer.Exit(1)

    ledger = Ledger(config)

    table = Table(title=f"Scenario {script.name}")
    table.add_column("#")
    table.add_column("Block")
    table.add_column("Op")
    table.add_column("Result")

    rejected = 0
    mismatched = 0
    for i, step in enumerate(steps):
        if not isinstance(step, dict) or "op" not in step:
            console.print(f"[red]Step {i} has no 'op'[/]")
            raise typer.Exit(1)
        args = {k: v for k, v in step.items() if k not in ("op", "expect")}
        op = step["op"]

        if op == "advance_block":
            try:
                ledger.advance_block(args.get("blocks", 1))
            except ValueError as e:
                console.print(f"[red]Step {i}: {str(e)}[/]")
                raise typer.Exit(1)
            table.add_row(str(i), str(ledger.block_height().value), op, f"+{args.get('blocks', 1)}")
            continue

        if op not in Ledger.TRANSACTIONS and op not in Ledger.QUERIES:
            console.print(f"[red]Step {i}: unknown op '{op}'[/]")
            raise typer.Exit(1)

        try:
            result = getattr(ledger, op)(**args)
        except TypeError as e:
            console.print(f"[red]Step {i}: bad arguments for '{op}': {str(e)}[/]")
            raise typer.Exit(1)

        if result.ok:
            cell = f"[green]ok[/] {render_value(result.value)}"
        else:
            rejected += 1
            cell = f"[red]err {result.code}[/] {result.error.value}"

        if "expect" in step and not matches_expectation(result, step["expect"]):
            mismatched += 1
            cell += " [bold red](unexpected)[/]"

        table.add_row(str(i), str(ledger.block_height().value), op, cell)

    console.print(table)

    final_state = ledger.state_copy()
    balances = Table(title="Balances")
    balances.add_column("Account")
    balances.add_column("Balance")
    for account, amount in sorted(final_state.balances.items()):
        balances.add_row(escape(account), str(amount))
    console.print(balances)
    console.print(f"Total supply: {ledger.total_supply().value}")
    console.print(f"Fingerprint: {ledger.fingerprint()}")

    verification = InvariantVerifier().verify(final_state)
    if verification.is_valid:
        console.print(f"[green]✓ {verification.message}[/]")
    else:
        console.print("[red]✗ Invariant check failed[/]")
        for failure in verification.failures:
            console.print(f"  • {escape('[' + failure.subject + ']')} {failure.category}: {escape(failure.message)}")
        raise typer.Exit(1)

    if mismatched:
        console.print(f"[red]{mismatched} step(s) did not match their expectation[/]")
        raise typer.Exit(1)
    if strict and rejected:
        console.print(f"[red]{rejected} transaction(s) rejected (--strict)[/]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
