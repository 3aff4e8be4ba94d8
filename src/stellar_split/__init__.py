"""StellarSplit - Group expense balances and minimum-transfer settlement."""

__version__ = "0.1.0"

from .balances import aggregate_balances, compute_shares
from .config import Settings, load_settings
from .ledger import InMemoryLedger, LedgerReader
from .models import (
    Expense,
    Group,
    LedgerSnapshot,
    SettlementPlan,
    Transfer,
)
from .resolver import apply_transfers, resolve_settlements, verify_plan
from .service import SettlementService

__all__ = [
    "aggregate_balances",
    "compute_shares",
    "Settings",
    "load_settings",
    "InMemoryLedger",
    "LedgerReader",
    "Expense",
    "Group",
    "LedgerSnapshot",
    "SettlementPlan",
    "Transfer",
    "apply_transfers",
    "resolve_settlements",
    "verify_plan",
    "SettlementService",
]
