"""Service layer that composes the ledger store, aggregator and resolver.

The service never knows which store backs the ledger; it is handed any
``LedgerReader`` at construction.
"""

import logging

from .balances import aggregate_balances
from .ledger import LedgerReader
from .models import SettlementPlan, Transfer
from .resolver import resolve_settlements

logger = logging.getLogger(__name__)


class SettlementService:
    """Service for computing group balances and settlement plans."""

    def __init__(self, ledger: LedgerReader):
        """Initialize the settlement service."""
        self.ledger = ledger

    def get_balances(self, group_id: int) -> dict[str, int]:
        """
        Compute net balances for a group from its full expense ledger.

        Args:
            group_id: The group to compute balances for

        Returns:
            Balance per current member, in smallest units
        """
        members = self.ledger.get_members(group_id)
        return self._aggregate(group_id, members)

    def _aggregate(self, group_id: int, members: list[str]) -> dict[str, int]:
        expenses = self.ledger.get_expenses(group_id)

        logger.info(
            f"Computing balances for group {group_id}: "
            f"{len(members)} members, {len(expenses)} expenses"
        )

        return aggregate_balances(members, expenses, group_id=group_id)

    def compute_settlements(self, group_id: int) -> list[Transfer]:
        """Compute the transfers that settle a group."""
        return self.build_plan(group_id).transfers

    def build_plan(self, group_id: int) -> SettlementPlan:
        """
        Compute balances and the settlement plan for a group.

        Args:
            group_id: The group to settle

        Returns:
            Plan bundling the balances and the transfers that zero them
        """
        # One roster read feeds both aggregation and the membership check
        members = self.ledger.get_members(group_id)
        balances = self._aggregate(group_id, members)
        transfers = resolve_settlements(balances, members=members)

        plan = SettlementPlan(group_id=group_id, balances=balances, transfers=transfers)

        logger.info(
            f"Built plan for group {group_id} with {len(transfers)} transfers, "
            f"total: {plan.total_amount}"
        )

        return plan
