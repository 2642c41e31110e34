"""Payment domain service."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

import structlog

from paytrack.database.attachments import AttachmentStore
from paytrack.database.base import Database
from paytrack.domain.entities import (
    AttachmentSlot,
    Payment as PaymentEntity,
    PaymentWithRelations,
)
from paytrack.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    cost_center_not_found,
    payment_not_found,
)
from paytrack.domain.relations import RelationResolver
from paytrack.domain.validation import (
    require_amount,
    require_datetime,
    require_id,
    require_text,
)

logger = structlog.get_logger(__name__)

_SLOT_FIELDS = {
    AttachmentSlot.RECEIPT: "receipt_path",
    AttachmentSlot.REQUEST: "request_path",
}


@dataclass(frozen=True)
class AttachmentUpload:
    """File content supplied alongside a payment create or update."""

    data: bytes
    filename: str


class PaymentService:
    """Service for managing payments and their attachments."""

    def __init__(self, db: Database, attachments: AttachmentStore):
        """Initialize payment service.

        Args:
            db: Database instance
            attachments: Store holding receipt and request files
        """
        self.db = db
        self.attachments = attachments
        self.resolver = RelationResolver(db)

    def _check_references(self, account_id: Optional[int], cost_center_id: Optional[int]) -> None:
        if account_id is not None and self.db.get_account(account_id) is None:
            raise ValidationError(account_not_found(account_id), field="accountId")
        if cost_center_id is not None and self.db.get_cost_center(cost_center_id) is None:
            raise ValidationError(cost_center_not_found(cost_center_id), field="costCenterId")

    def _save_uploads(
        self, uploads: Mapping[AttachmentSlot, Optional[AttachmentUpload]]
    ) -> dict[AttachmentSlot, str]:
        """Save every supplied upload, removing earlier ones if a later save fails."""
        saved: dict[AttachmentSlot, str] = {}
        try:
            for slot, upload in uploads.items():
                if upload is not None:
                    saved[slot] = self.attachments.save(upload.data, upload.filename, slot)
        except Exception:
            self._discard(saved.values())
            raise
        return saved

    def _discard(self, stored_names) -> None:
        for stored_name in stored_names:
            self.attachments.delete(stored_name)

    def create_payment(
        self,
        date: Union[date, datetime, str],
        amount: Union[Decimal, str, int],
        description: str,
        account_id: int,
        cost_center_id: int,
        receipt: Optional[AttachmentUpload] = None,
        request: Optional[AttachmentUpload] = None,
    ) -> PaymentEntity:
        """Create a payment, storing any supplied attachments.

        Args:
            date: Payment date
            amount: Payment amount (exact decimal)
            description: Payment description
            account_id: Funding account ID
            cost_center_id: Cost center ID
            receipt: Optional receipt file
            request: Optional request file

        Returns:
            Stored payment

        Raises:
            ValidationError: If a field is invalid or a referenced account or
                cost center does not exist
            AttachmentIOError: If an attachment cannot be saved; nothing is
                persisted in that case
        """
        fields = {
            "date": require_datetime(date),
            "amount": require_amount(amount),
            "description": require_text(description, "description"),
            "account_id": require_id(account_id, "accountId"),
            "cost_center_id": require_id(cost_center_id, "costCenterId"),
        }
        self._check_references(fields["account_id"], fields["cost_center_id"])

        saved = self._save_uploads({AttachmentSlot.RECEIPT: receipt, AttachmentSlot.REQUEST: request})
        try:
            payment = self.db.create_payment(
                **fields,
                receipt_path=saved.get(AttachmentSlot.RECEIPT),
                request_path=saved.get(AttachmentSlot.REQUEST),
            )
        except Exception:
            self._discard(saved.values())
            raise

        logger.info("payment_created", payment_id=payment.id, attachments=sorted(s.value for s in saved))
        return payment

    def get_payment(self, payment_id: int) -> Optional[PaymentWithRelations]:
        """Get a payment joined with its relations, or None if not found.

        Raises:
            RelationNotFoundError: If the payment references a missing entity
        """
        payment = self.db.get_payment(payment_id)
        if payment is None:
            return None
        return self.resolver.resolve(payment)

    def require_payment(self, payment_id: int) -> PaymentWithRelations:
        """Get a payment joined with its relations.

        Raises:
            NotFoundError: If the payment does not exist
            RelationNotFoundError: If the payment references a missing entity
        """
        payment = self.get_payment(payment_id)
        if payment is None:
            raise NotFoundError(payment_not_found(payment_id))
        return payment

    def list_payments(self) -> list[PaymentWithRelations]:
        """List every payment joined with its relations, in insertion order."""
        return self.resolver.resolve_all(self.db.list_payments())

    def update_payment(
        self,
        payment_id: int,
        changes: Mapping[str, Any],
        receipt: Optional[AttachmentUpload] = None,
        request: Optional[AttachmentUpload] = None,
        remove_receipt: bool = False,
        remove_request: bool = False,
    ) -> PaymentEntity:
        """Apply a partial update to a payment and its attachment slots.

        Each slot is handled on its own: a new upload replaces the stored
        file, a remove flag without an upload clears it, otherwise the path
        is kept.

        Args:
            payment_id: Payment ID to update
            changes: Subset of date, amount, description, account_id,
                cost_center_id
            receipt: Optional replacement receipt file
            request: Optional replacement request file
            remove_receipt: Clear the receipt when no new one is supplied
            remove_request: Clear the request when no new one is supplied

        Raises:
            NotFoundError: If the payment does not exist
            ValidationError: If a field is invalid or a reference is missing
            AttachmentIOError: If a new attachment cannot be saved; the
                payment is left unchanged in that case
        """
        existing = self.db.get_payment(payment_id)
        if existing is None:
            raise NotFoundError(payment_not_found(payment_id))

        validated: dict[str, Any] = {}
        for name, value in changes.items():
            if name == "date":
                validated["date"] = require_datetime(value)
            elif name == "amount":
                validated["amount"] = require_amount(value)
            elif name == "description":
                validated["description"] = require_text(value, "description")
            elif name == "account_id":
                validated["account_id"] = require_id(value, "accountId")
            elif name == "cost_center_id":
                validated["cost_center_id"] = require_id(value, "costCenterId")
            else:
                raise ValidationError(f"Unknown payment field '{name}'", field=name)
        self._check_references(validated.get("account_id"), validated.get("cost_center_id"))

        uploads = {AttachmentSlot.RECEIPT: receipt, AttachmentSlot.REQUEST: request}
        removals = {AttachmentSlot.RECEIPT: remove_receipt, AttachmentSlot.REQUEST: remove_request}

        saved = self._save_uploads(uploads)
        stale: list[str] = []
        for slot, field_name in _SLOT_FIELDS.items():
            old_path = existing.attachment_path(slot)
            if slot in saved:
                validated[field_name] = saved[slot]
            elif removals[slot]:
                validated[field_name] = None
            else:
                continue
            if old_path:
                stale.append(old_path)

        try:
            payment = self.db.update_payment(payment_id, validated)
        except Exception:
            self._discard(saved.values())
            raise
        if payment is None:
            self._discard(saved.values())
            raise NotFoundError(payment_not_found(payment_id))

        self._discard(stale)
        logger.info("payment_updated", payment_id=payment_id, fields=sorted(validated))
        return payment

    def delete_payment(self, payment_id: int) -> None:
        """Delete a payment and its attachment files.

        File removal is best-effort; failures are logged by the store.

        Raises:
            NotFoundError: If the payment does not exist
        """
        payment = self.db.get_payment(payment_id)
        if payment is None or not self.db.delete_payment(payment_id):
            raise NotFoundError(payment_not_found(payment_id))

        self._discard(path for path in (payment.receipt_path, payment.request_path) if path)
        logger.info("payment_deleted", payment_id=payment_id)
