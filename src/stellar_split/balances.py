"""Fold an expense ledger into net member balances.

A positive balance means the member is owed money, a negative balance means
the member owes money. All arithmetic is in integer smallest units.
"""

import logging
from collections.abc import Iterable

from .exceptions import EmptyInputError, MemberNotInGroupError
from .models import Expense

logger = logging.getLogger(__name__)


def compute_shares(amount: int, split_among: list[str]) -> dict[str, int]:
    """
    Split an amount into integer shares that sum exactly to the amount.

    Every member gets floor(amount / n); the first (amount mod n) members, in
    split order, absorb one extra unit each.

    Example:
        compute_shares(100, ["A", "B", "C"]) == {"A": 34, "B": 33, "C": 33}

    Raises:
        ValueError: If split_among is empty or lists a member twice
    """
    if not split_among:
        raise ValueError("split_among cannot be empty")
    if len(set(split_among)) != len(split_among):
        raise ValueError("split_among contains duplicate members")

    base, remainder = divmod(amount, len(split_among))
    return {
        member: base + 1 if i < remainder else base
        for i, member in enumerate(split_among)
    }


def aggregate_balances(
    members: Iterable[str],
    expenses: Iterable[Expense],
    group_id: int | None = None,
) -> dict[str, int]:
    """
    Compute net balances for a fixed member set.

    Args:
        members: The authoritative (current) roster. Order is kept and decides
            the order of the returned mapping.
        expenses: Ordered expense ledger
        group_id: Optional group id, only used in error messages

    Returns:
        Mapping with an entry for every member, summing to exactly 0

    Raises:
        EmptyInputError: If the member set is empty
        MemberNotInGroupError: If an expense references a non-member
    """
    balances: dict[str, int] = dict.fromkeys(members, 0)
    if not balances:
        raise EmptyInputError("Cannot aggregate balances for an empty member set")

    count = 0
    for expense in expenses:
        if expense.payer not in balances:
            raise MemberNotInGroupError(expense.payer, group_id)
        for member in expense.split_among:
            if member not in balances:
                raise MemberNotInGroupError(member, group_id)

        balances[expense.payer] += expense.amount
        for member, share in compute_shares(
            expense.amount, expense.split_among
        ).items():
            balances[member] -= share
        count += 1

    logger.debug(f"Aggregated {count} expenses across {len(balances)} members")

    # Conservation holds by construction
    assert sum(balances.values()) == 0, "Balances do not conserve"

    return balances
