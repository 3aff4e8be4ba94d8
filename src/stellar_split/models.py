"""Pydantic domain models for StellarSplit.

Amounts are always integers in the smallest currency unit (stroops for XLM).
Members are opaque address strings.
"""

from pydantic import BaseModel, Field, field_validator

# ============================================================================
# Ledger Models
# ============================================================================


class Expense(BaseModel):
    """A recorded group expense."""

    id: int = 0
    payer: str
    amount: int = Field(gt=0, strict=True)
    split_among: list[str]
    description: str = ""
    category: str = "diger"

    @field_validator("split_among")
    @classmethod
    def _split_is_non_empty_set(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("split_among cannot be empty")
        if len(set(value)) != len(value):
            raise ValueError("split_among contains duplicate members")
        return value


class Group(BaseModel):
    """A group of members sharing expenses."""

    id: int
    name: str
    members: list[str]
    expense_count: int = 0
    settled: bool = False


class GroupRecord(Group):
    """A group together with its ordered expense list, as stored in a snapshot."""

    expenses: list[Expense] = Field(default_factory=list)


class LedgerSnapshot(BaseModel):
    """Serializable view of an entire ledger store."""

    groups: list[GroupRecord] = Field(default_factory=list)


# ============================================================================
# Settlement Models
# ============================================================================


class Transfer(BaseModel):
    """A single settlement instruction: debtor pays creditor."""

    from_member: str
    to_member: str
    amount: int = Field(gt=0)


class SettlementPlan(BaseModel):
    """Balances of a group and the transfers that zero them.

    The plan is ephemeral: it is computed for display or execution and then
    discarded. Executing it is left to the caller.
    """

    group_id: int
    balances: dict[str, int]
    transfers: list[Transfer] = Field(default_factory=list)

    @property
    def total_amount(self) -> int:
        """Total value moved by the plan, in smallest units."""
        return sum(t.amount for t in self.transfers)

    @property
    def is_settled(self) -> bool:
        """True when nobody owes anything."""
        return not self.transfers
