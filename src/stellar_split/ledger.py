"""Ledger store port and the in-memory demo store.

The settlement core reads group rosters and expenses only through
``LedgerReader``. ``InMemoryLedger`` is the local demo backing; any other
store (for instance a contract RPC client) only has to provide the two read
methods.
"""

import logging
from typing import Protocol

from .exceptions import (
    GroupAlreadySettledError,
    GroupNotFoundError,
    InvalidExpenseError,
    InvalidGroupError,
    MemberNotInGroupError,
    NotAuthorizedError,
)
from .models import Expense, Group, GroupRecord, LedgerSnapshot

logger = logging.getLogger(__name__)

MIN_MEMBERS = 2
MAX_GROUP_NAME_LEN = 64


def _validate_group(name: str, members: list[str]) -> None:
    """Check a group name and roster against the membership rules."""
    if not name:
        raise InvalidGroupError("Group name cannot be empty")
    if len(name) > MAX_GROUP_NAME_LEN:
        raise InvalidGroupError(
            f"Group name too long (max {MAX_GROUP_NAME_LEN} chars)"
        )
    if len(members) < MIN_MEMBERS:
        raise InvalidGroupError(f"At least {MIN_MEMBERS} members required")
    if len(set(members)) != len(members):
        raise InvalidGroupError("Duplicate member detected")


class LedgerReader(Protocol):
    """Read-only access to a group's roster and expense ledger."""

    def get_members(self, group_id: int) -> list[str]: ...

    def get_expenses(self, group_id: int) -> list[Expense]: ...


class InMemoryLedger:
    """Ledger store kept in process memory.

    Enforces the same mutation rules as the on-chain contract: positive
    amounts, members-only payers and splits, payer-only cancellation of the
    last expense, a roster of at least two, and no changes after settlement.
    """

    def __init__(self):
        """Initialize an empty ledger."""
        self._groups: dict[int, GroupRecord] = {}
        self._next_group_id = 0

    # ========================================================================
    # Snapshot operations
    # ========================================================================

    @classmethod
    def from_snapshot(cls, snapshot: LedgerSnapshot) -> "InMemoryLedger":
        """Build a ledger from a snapshot (e.g. loaded from JSON)."""
        ledger = cls()
        for record in snapshot.groups:
            if record.id in ledger._groups:
                raise InvalidGroupError(f"Duplicate group id {record.id} in snapshot")
            _validate_group(record.name, record.members)

            expense_ids = [expense.id for expense in record.expenses]
            if expense_ids != list(range(len(expense_ids))):
                raise InvalidGroupError(
                    f"Group {record.id} expense ids must run 0..{len(expense_ids) - 1} "
                    f"in order, got {expense_ids}"
                )

            # The stored count is derived, never trusted
            ledger._groups[record.id] = record.model_copy(
                update={"expense_count": len(expense_ids)}, deep=True
            )
        ledger._next_group_id = max(ledger._groups, default=-1) + 1
        logger.info(f"Loaded {len(ledger._groups)} groups from snapshot")
        return ledger

    def snapshot(self) -> LedgerSnapshot:
        """Dump the ledger contents."""
        return LedgerSnapshot(
            groups=[
                record.model_copy(deep=True)
                for _, record in sorted(self._groups.items())
            ]
        )

    # ========================================================================
    # Read operations
    # ========================================================================

    def _record(self, group_id: int) -> GroupRecord:
        record = self._groups.get(group_id)
        if record is None:
            raise GroupNotFoundError(group_id)
        return record

    def list_groups(self) -> list[Group]:
        """Get every group, ordered by id."""
        return [self.get_group(group_id) for group_id in sorted(self._groups)]

    def get_group(self, group_id: int) -> Group:
        """Get a group without its expenses."""
        record = self._record(group_id)
        return Group.model_validate(record.model_dump(exclude={"expenses"}))

    def get_members(self, group_id: int) -> list[str]:
        """Get the current roster of a group."""
        return list(self._record(group_id).members)

    def get_expenses(self, group_id: int) -> list[Expense]:
        """Get the ordered expense list of a group."""
        return [
            expense.model_copy(deep=True)
            for expense in self._record(group_id).expenses
        ]

    def get_expense(self, group_id: int, expense_id: int) -> Expense:
        """Get a single expense by id."""
        for expense in self._record(group_id).expenses:
            if expense.id == expense_id:
                return expense.model_copy(deep=True)
        raise InvalidExpenseError(
            f"Expense {expense_id} not found in group {group_id}"
        )

    def is_settled(self, group_id: int) -> bool:
        """Check whether a group has been settled."""
        return self._record(group_id).settled

    # ========================================================================
    # Mutations
    # ========================================================================

    def _open_record(self, group_id: int) -> GroupRecord:
        record = self._record(group_id)
        if record.settled:
            raise GroupAlreadySettledError(group_id)
        return record

    def create_group(self, creator: str, name: str, members: list[str]) -> int:
        """
        Create a new group.

        The creator is appended to the roster when not already listed.

        Returns:
            The new group id

        Raises:
            InvalidGroupError: On an empty or too long name, fewer than two
                members, or duplicate members
        """
        roster = list(members)
        if creator not in roster:
            roster.append(creator)
        _validate_group(name, roster)

        group_id = self._next_group_id
        self._groups[group_id] = GroupRecord(id=group_id, name=name, members=roster)
        self._next_group_id += 1

        logger.info(f"group_created: {group_id} by {creator}")
        return group_id

    def add_expense(
        self,
        group_id: int,
        payer: str,
        amount: int,
        split_among: list[str],
        description: str = "",
        category: str = "diger",
    ) -> int:
        """
        Record an expense paid by one member and shared by others.

        Returns:
            The new expense id

        Raises:
            GroupAlreadySettledError: If the group is settled
            MemberNotInGroupError: If the payer or a split member is not a member
            InvalidExpenseError: On a non-positive amount or an empty split
        """
        record = self._open_record(group_id)

        if payer not in record.members:
            raise MemberNotInGroupError(payer, group_id)
        if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
            raise InvalidExpenseError("Amount must be a positive integer")
        if not split_among:
            raise InvalidExpenseError("split_among cannot be empty")
        for member in split_among:
            if member not in record.members:
                raise MemberNotInGroupError(member, group_id)
        if len(set(split_among)) != len(split_among):
            raise InvalidExpenseError("split_among contains duplicate members")

        expense_id = record.expense_count
        record.expenses.append(
            Expense(
                id=expense_id,
                payer=payer,
                amount=amount,
                split_among=list(split_among),
                description=description,
                category=category,
            )
        )
        record.expense_count += 1

        logger.info(f"expense_added: group {group_id}, expense {expense_id}, {amount}")
        return expense_id

    def cancel_last_expense(self, group_id: int, caller: str) -> Expense:
        """
        Remove the most recent expense. Only its payer may cancel it.

        Returns:
            The removed expense
        """
        record = self._open_record(group_id)
        if not record.expenses:
            raise InvalidExpenseError("No expenses to cancel")

        last = record.expenses[-1]
        if last.payer != caller:
            raise NotAuthorizedError("Only the payer can cancel this expense")

        record.expenses.pop()
        record.expense_count -= 1

        logger.info(f"expense_cancelled: group {group_id}, expense {last.id}")
        return last

    def add_member(self, group_id: int, caller: str, new_member: str) -> None:
        """Add a member to the roster. Only current members may add someone."""
        record = self._open_record(group_id)
        if caller not in record.members:
            raise NotAuthorizedError("Only a member can add someone")
        if new_member in record.members:
            raise InvalidGroupError(f"{new_member} is already a member")

        record.members.append(new_member)
        logger.info(f"member_added: group {group_id}, {new_member}")

    def remove_member(self, group_id: int, caller: str, member: str) -> None:
        """
        Remove a member from the roster.

        Balances are computed against the current roster, so a member still
        referenced by a recorded expense cannot be removed.
        """
        record = self._open_record(group_id)
        if caller not in record.members:
            raise NotAuthorizedError("Only a member can remove someone")
        if len(record.members) <= MIN_MEMBERS:
            raise InvalidGroupError(
                f"Cannot remove: at least {MIN_MEMBERS} members required"
            )
        if member not in record.members:
            raise InvalidGroupError(f"{member} is not a member")
        for expense in record.expenses:
            if member == expense.payer or member in expense.split_among:
                raise InvalidGroupError(
                    f"Cannot remove {member}: referenced by expense {expense.id}"
                )

        record.members.remove(member)
        logger.info(f"member_removed: group {group_id}, {member}")

    def mark_settled(self, group_id: int) -> None:
        """Flag a group as settled once its plan has been executed."""
        record = self._open_record(group_id)
        record.settled = True
        logger.info(f"group_settled: {group_id}")
