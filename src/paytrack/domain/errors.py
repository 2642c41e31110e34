"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for expected, caller-correctable domain errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class RelationNotFoundError(RuntimeError):
    """A payment references an account or cost center that no longer exists.

    This is a data integrity fault, not a normal lookup miss.
    """

    def __init__(self, payment_id: int, relation: str, relation_id: int):
        super().__init__(
            f"Payment {payment_id} references missing {relation} {relation_id}"
        )
        self.payment_id = payment_id
        self.relation = relation
        self.relation_id = relation_id


class AttachmentIOError(RuntimeError):
    """Saving an attachment file failed."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def cost_center_not_found(cost_center_id: int) -> str:
    """Return message for missing cost center."""
    return f"Cost center {cost_center_id} not found"


def payment_not_found(payment_id: int) -> str:
    """Return message for missing payment."""
    return f"Payment {payment_id} not found"


def attachment_not_found(stored_name: str) -> str:
    """Return message for missing attachment file."""
    return f"Attachment '{stored_name}' not found"


def delete_blocked(entity: str, entity_id: int, payment_count: int) -> str:
    """Return message when an entity is still referenced by payments."""
    return (
        f"Cannot delete {entity} {entity_id}: it has "
        f"{payment_count} payment{'s' if payment_count != 1 else ''}. "
        "Please reassign or delete them first."
    )
