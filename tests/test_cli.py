"""Tests for the stellar-split CLI."""

import json

import pytest
from typer.testing import CliRunner

from stellar_split.cli import app, format_money
from stellar_split.config import Settings

runner = CliRunner()

XLM = 10_000_000


@pytest.fixture
def ledger_file(tmp_path):
    """Write a snapshot with one active group and one settled group."""
    snapshot = {
        "groups": [
            {
                "id": 0,
                "name": "Trip",
                "members": ["A", "B", "C"],
                "expense_count": 2,
                "expenses": [
                    {
                        "id": 0,
                        "payer": "A",
                        "amount": 90 * XLM,
                        "split_among": ["A", "B", "C"],
                    },
                    {
                        "id": 1,
                        "payer": "B",
                        "amount": 60 * XLM,
                        "split_among": ["A", "B", "C"],
                    },
                ],
            },
            {"id": 1, "name": "Done", "members": ["A", "B"], "settled": True},
        ]
    }
    path = tmp_path / "ledger.json"
    path.write_text(json.dumps(snapshot))
    return path


def test_groups(ledger_file):
    """Lists every group in the snapshot."""
    result = runner.invoke(app, ["groups", "--ledger", str(ledger_file)])

    assert result.exit_code == 0
    assert "Trip" in result.output
    assert "Done" in result.output


def test_balances(ledger_file):
    """Shows balances in display units and confirms conservation."""
    result = runner.invoke(app, ["balances", "0", "--ledger", str(ledger_file)])

    assert result.exit_code == 0
    assert "40.00 XLM" in result.output
    assert "50.00 XLM" in result.output
    assert "Balances sum to zero" in result.output


def test_settle(ledger_file):
    """Shows the plan and verifies it."""
    result = runner.invoke(app, ["settle", "0", "--ledger", str(ledger_file)])

    assert result.exit_code == 0
    assert "Transfers: 2" in result.output
    assert "Plan zeroes every balance" in result.output


def test_settle_already_settled(ledger_file):
    """A group with no expenses needs no transfers."""
    result = runner.invoke(app, ["settle", "1", "--ledger", str(ledger_file)])

    assert result.exit_code == 0
    assert "No transfers needed" in result.output


def test_unknown_group(ledger_file):
    """Unknown groups exit with an error."""
    result = runner.invoke(app, ["settle", "5", "--ledger", str(ledger_file)])

    assert result.exit_code == 1
    assert "Group 5 not found" in result.output


def test_missing_ledger(tmp_path):
    """A missing snapshot file exits with an error."""
    result = runner.invoke(
        app, ["balances", "0", "--ledger", str(tmp_path / "missing.json")]
    )

    assert result.exit_code == 1
    assert "Ledger file not found" in result.output


def test_format_money_accounting_style():
    """Negative amounts use parentheses, positive amounts are padded."""
    settings = Settings()

    assert format_money(-125 * XLM // 10, settings, use_color=False) == (
        "(12.50 XLM)"
    )
    assert format_money(5 * XLM, settings, use_color=False) == " 5.00 XLM "
