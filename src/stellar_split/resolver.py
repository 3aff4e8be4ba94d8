"""Greedy minimum-transfer debt resolution.

Repeatedly matches the largest creditor with the largest debtor. Ties are
broken by the member's position in the balance mapping, so identical input
always yields an identical plan. The heuristic is not globally optimal for
every input (exact minimization is NP-hard) but never needs more than
N - 1 transfers for N members with a non-zero balance.
"""

import heapq
import logging
from collections.abc import Iterable, Mapping

from .exceptions import (
    BalanceIntegrityError,
    MemberNotInGroupError,
    SettlementLoopError,
)
from .models import Transfer

logger = logging.getLogger(__name__)


def validate_balances(
    balances: Mapping[str, int], members: Iterable[str] | None = None
) -> None:
    """
    Check resolver preconditions.

    Raises:
        MemberNotInGroupError: If members is given and a balance key is not in it
        BalanceIntegrityError: If an amount is not an int or the total is not 0
    """
    if members is not None:
        roster = set(members)
        for member in balances:
            if member not in roster:
                raise MemberNotInGroupError(member)

    for member, amount in balances.items():
        # bool is an int subclass but never a valid amount
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise BalanceIntegrityError(
                f"Balance for {member} must be an integer amount of smallest "
                f"units, got {amount!r}"
            )

    total = sum(balances.values())
    if total != 0:
        raise BalanceIntegrityError(
            f"Balances must sum to 0, got {total} "
            f"across {len(balances)} members"
        )


def resolve_settlements(
    balances: Mapping[str, int], members: Iterable[str] | None = None
) -> list[Transfer]:
    """
    Compute the transfers that settle every balance.

    Args:
        balances: Net balance per member, in smallest units
        members: Optional roster to check balance keys against

    Returns:
        Ordered settlement plan; empty when everyone is already settled

    Raises:
        MemberNotInGroupError: If a balance key is outside members
        BalanceIntegrityError: If the balances do not conserve
        SettlementLoopError: If the iteration bound is exceeded
    """
    validate_balances(balances, members)

    # Heap entries: (-magnitude, rank, member); rank breaks ties
    creditors: list[tuple[int, int, str]] = []
    debtors: list[tuple[int, int, str]] = []
    for rank, (member, amount) in enumerate(balances.items()):
        if amount > 0:
            creditors.append((-amount, rank, member))
        elif amount < 0:
            debtors.append((amount, rank, member))
    heapq.heapify(creditors)
    heapq.heapify(debtors)

    transfers: list[Transfer] = []
    max_iterations = 2 * len(balances)

    while creditors and debtors:
        if len(transfers) >= max_iterations:
            raise SettlementLoopError(
                f"Settlement did not converge within {max_iterations} transfers"
            )

        credit_neg, credit_rank, creditor = heapq.heappop(creditors)
        debt_neg, debt_rank, debtor = heapq.heappop(debtors)

        amount = min(-credit_neg, -debt_neg)
        transfers.append(
            Transfer(from_member=debtor, to_member=creditor, amount=amount)
        )

        if credit_neg + amount < 0:
            heapq.heappush(creditors, (credit_neg + amount, credit_rank, creditor))
        if debt_neg + amount < 0:
            heapq.heappush(debtors, (debt_neg + amount, debt_rank, debtor))

    # Unreachable once balances conserve
    if creditors or debtors:
        raise BalanceIntegrityError("Unmatched balances remain after settlement")

    logger.info(
        f"Resolved {len(transfers)} transfers for "
        f"{sum(1 for amount in balances.values() if amount)} unsettled members"
    )

    return transfers


def apply_transfers(
    balances: Mapping[str, int], transfers: Iterable[Transfer]
) -> dict[str, int]:
    """
    Apply transfers to a copy of the balances.

    A debtor paying raises their balance; the creditor receiving lowers theirs.
    """
    result = dict(balances)
    for transfer in transfers:
        result[transfer.from_member] = (
            result.get(transfer.from_member, 0) + transfer.amount
        )
        result[transfer.to_member] = (
            result.get(transfer.to_member, 0) - transfer.amount
        )
    return result


def verify_plan(balances: Mapping[str, int], transfers: Iterable[Transfer]) -> bool:
    """Return True when applying the transfers zeroes every balance."""
    return all(amount == 0 for amount in apply_transfers(balances, transfers).values())
