"""CLI for StellarSplit using Typer."""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import Settings, load_settings
from .exceptions import ConfigurationError
from .ledger import InMemoryLedger
from .models import LedgerSnapshot, SettlementPlan
from .resolver import verify_plan
from .service import SettlementService
from .units import format_currency, truncate_address

app = typer.Typer(
    name="stellar-split",
    help="Compute group balances and minimum-transfer settlement plans",
)

console = Console()


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def load_ledger(path: Path) -> InMemoryLedger:
    """Load an in-memory ledger from a snapshot file."""
    if not path.exists():
        raise ConfigurationError(f"Ledger file not found: {path}")
    snapshot = LedgerSnapshot.model_validate_json(path.read_text(encoding="utf-8"))
    return InMemoryLedger.from_snapshot(snapshot)


def format_money(amount: int, settings: Settings, use_color: bool = True) -> str:
    """
    Format a balance in accounting style with alignment.

    Negative amounts use parentheses: (12.50 XLM)
    Positive amounts have spaces:      12.50 XLM
    """
    formatted = format_currency(
        abs(amount),
        currency_code=settings.currency_code,
        decimals=settings.display_decimals,
        units_per_currency=settings.units_per_currency,
    )
    if amount < 0:
        return f"([red]{formatted}[/red])" if use_color else f"({formatted})"
    return f" [green]{formatted}[/green] " if use_color else f" {formatted} "


def display_balances(balances: dict[str, int], settings: Settings):
    """Display member balances in a table."""
    table = Table(title="Balances", show_header=True, header_style="bold magenta")
    table.add_column("Member", style="cyan")
    table.add_column("Balance", justify="right")
    table.add_column("Status", style="dim")

    for member, amount in balances.items():
        if amount > 0:
            status = "is owed"
        elif amount < 0:
            status = "owes"
        else:
            status = "settled"
        table.add_row(truncate_address(member), format_money(amount, settings), status)

    console.print(table)

    total = sum(balances.values())
    if total == 0:
        console.print("  [green]✓ Balances sum to zero[/green]")
    else:
        console.print(f"  [red]✗ Balances sum to {total}, expected 0[/red]")


def display_plan(plan: SettlementPlan, settings: Settings):
    """Display a settlement plan in a table."""
    if plan.is_settled:
        console.print("\n[green]Everyone is settled up. No transfers needed.[/green]")
        return

    table = Table(
        title="Settlement Plan", show_header=True, header_style="bold magenta"
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("From", style="red")
    table.add_column("To", style="green")
    table.add_column("Amount", justify="right")

    for i, transfer in enumerate(plan.transfers, start=1):
        table.add_row(
            str(i),
            truncate_address(transfer.from_member),
            truncate_address(transfer.to_member),
            format_money(transfer.amount, settings, use_color=False),
        )

    console.print(table)

    console.print()
    console.print("[bold]Summary:[/bold]")
    console.print(f"  Transfers: {len(plan.transfers)}")
    console.print(f"  Total moved: {format_money(plan.total_amount, settings)}")

    if verify_plan(plan.balances, plan.transfers):
        console.print("  [green]✓ Plan zeroes every balance[/green]")
    else:
        console.print("  [red]✗ Plan leaves balances outstanding[/red]")


@app.command()
def groups(
    ledger: Optional[Path] = typer.Option(
        None, "--ledger", "-l", help="Ledger snapshot JSON (defaults to LEDGER_PATH)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """List the groups in a ledger snapshot."""
    setup_logging(verbose)

    try:
        settings = load_settings()
        store = load_ledger(ledger or settings.ledger_path)

        table = Table(title="Groups", show_header=True, header_style="bold magenta")
        table.add_column("ID", style="dim", width=6)
        table.add_column("Name", style="cyan")
        table.add_column("Members", justify="right")
        table.add_column("Expenses", justify="right")
        table.add_column("Settled", justify="center")

        for group in store.list_groups():
            table.add_row(
                str(group.id),
                group.name,
                str(len(group.members)),
                str(group.expense_count),
                "✓" if group.settled else "",
            )

        console.print(table)

    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)


@app.command()
def balances(
    group_id: int = typer.Argument(..., help="Group ID"),
    ledger: Optional[Path] = typer.Option(
        None, "--ledger", "-l", help="Ledger snapshot JSON (defaults to LEDGER_PATH)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Show net balances for a group.

    Positive balances are owed money, negative balances owe money.
    """
    setup_logging(verbose)

    try:
        settings = load_settings()
        service = SettlementService(load_ledger(ledger or settings.ledger_path))

        console.print(
            f"\n[bold blue]Computing balances for group {group_id}...[/bold blue]"
        )
        display_balances(service.get_balances(group_id), settings)

    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)


@app.command()
def settle(
    group_id: int = typer.Argument(..., help="Group ID"),
    ledger: Optional[Path] = typer.Option(
        None, "--ledger", "-l", help="Ledger snapshot JSON (defaults to LEDGER_PATH)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Compute the settlement plan for a group (dry-run).

    Shows the minimum set of transfers that zeroes every balance. Executing
    the transfers is left to the wallet.
    """
    setup_logging(verbose)

    try:
        settings = load_settings()
        service = SettlementService(load_ledger(ledger or settings.ledger_path))

        console.print(
            f"\n[bold blue]Computing settlement for group {group_id}...[/bold blue]"
        )
        plan = service.build_plan(group_id)

        display_balances(plan.balances, settings)
        display_plan(plan, settings)

    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)


if __name__ == "__main__":
    app()
