"""Custom exceptions for StellarSplit."""


class StellarSplitError(Exception):
    """Base exception for all StellarSplit errors."""

    pass


class ConfigurationError(StellarSplitError):
    """Raised when configuration is invalid or missing."""

    pass


class MemberNotInGroupError(StellarSplitError):
    """Raised when an expense or balance references someone outside the group."""

    def __init__(
        self, member: str, group_id: int | None = None, message: str | None = None
    ):
        self.member = member
        self.group_id = group_id
        where = f"group {group_id}" if group_id is not None else "the group"
        super().__init__(message or f"{member} is not a member of {where}")


class BalanceIntegrityError(StellarSplitError):
    """Raised when balances do not sum to zero or are not integer amounts."""

    pass


class EmptyInputError(StellarSplitError):
    """Raised when balances are aggregated for an empty member set."""

    pass


class SettlementLoopError(StellarSplitError):
    """Raised when the resolver exceeds its iteration bound."""

    pass


class LedgerError(StellarSplitError):
    """Base class for ledger store errors."""

    pass


class GroupNotFoundError(LedgerError):
    """Raised when a group id is unknown to the ledger."""

    def __init__(self, group_id: int):
        self.group_id = group_id
        super().__init__(f"Group {group_id} not found")


class GroupAlreadySettledError(LedgerError):
    """Raised when mutating a group that has already been settled."""

    def __init__(self, group_id: int):
        self.group_id = group_id
        super().__init__(f"Group {group_id} is already settled")


class InvalidGroupError(LedgerError):
    """Raised when a group or roster change violates membership rules."""

    pass


class InvalidExpenseError(LedgerError):
    """Raised when an expense cannot be recorded or cancelled."""

    pass


class NotAuthorizedError(LedgerError):
    """Raised when the caller may not perform a ledger operation."""

    pass
