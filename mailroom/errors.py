"""Exceptions raised by mailbox operations and by storage clients."""


class MailboxError(Exception):
    """Base class for all mailbox errors."""


class NotFoundError(MailboxError):
    """The requested item does not exist."""

    def __init__(self, message: str = "not found") -> None:
        super().__init__(message)


class TooManyRequestsError(MailboxError):
    """The storage backend is throttling requests."""

    def __init__(self, message: str = "too many requests") -> None:
        super().__init__(message)


class NotTrashedError(MailboxError):
    """An item is not in the state a trash operation requires."""

    def __init__(self, item_type: str) -> None:
        self.item_type = item_type
        super().__init__(f"{item_type} is not trashed or does not exist")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NotTrashedError):
            return NotImplemented
        return self.item_type == other.item_type

    def __hash__(self) -> int:
        return hash((NotTrashedError, self.item_type))


class ConditionalCheckFailedError(MailboxError):
    """Raised by a storage client when a write condition does not hold."""


class ProvisionedThroughputExceededError(MailboxError):
    """Raised by a storage client when its throughput limit is exceeded."""