"""JSON payload parsing and serialization.

Payloads use the camelCase wire names (accountId, costCenterId, receiptPath,
requestPath). Parsing returns snake_case keyword dictionaries ready for the
domain services; serialization turns entities back into wire dictionaries.
"""

import json
from decimal import Decimal
from typing import Any, Callable, Mapping, Union

from paytrack.domain.entities import (
    Account,
    CostCenter,
    ExpenseReport,
    Page,
    Payment,
    PaymentWithRelations,
)
from paytrack.domain.errors import ValidationError
from paytrack.domain.validation import (
    require_account_type,
    require_amount,
    require_datetime,
    require_id,
    require_text,
)

Payload = Union[str, bytes, Mapping[str, Any]]

# wire name -> (field name, validator)
_ACCOUNT_FIELDS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "name": ("name", lambda v: require_text(v, "name")),
    "type": ("type", require_account_type),
}
_COST_CENTER_FIELDS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "category": ("category", lambda v: require_text(v, "category")),
    "subcategory": ("subcategory", lambda v: require_text(v, "subcategory")),
}
_PAYMENT_FIELDS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "date": ("date", require_datetime),
    "amount": ("amount", require_amount),
    "description": ("description", lambda v: require_text(v, "description")),
    "accountId": ("account_id", lambda v: require_id(v, "accountId")),
    "costCenterId": ("cost_center_id", lambda v: require_id(v, "costCenterId")),
}
# Paths are assigned by the attachment flow only
_IGNORED_PAYMENT_KEYS = frozenset({"id", "receiptPath", "requestPath"})
_PAYMENT_FLAGS = {"removeReceipt": "remove_receipt", "removeRequest": "remove_request"}


def load_payload(data: Payload) -> dict[str, Any]:
    """Decode a JSON object, keeping non-integer numbers as Decimal."""
    if isinstance(data, Mapping):
        return dict(data)
    try:
        decoded = json.loads(data, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON payload: {e.msg}", field="data") from None
    except UnicodeDecodeError:
        raise ValidationError("Payload is not valid UTF-8 text", field="data") from None
    if not isinstance(decoded, dict):
        raise ValidationError("Payload must be a JSON object", field="data")
    return decoded


def _parse_fields(
    raw: Mapping[str, Any],
    schema: Mapping[str, tuple[str, Callable[[Any], Any]]],
    partial: bool,
    ignored: frozenset[str] = frozenset({"id"}),
) -> dict[str, Any]:
    unknown = set(raw) - set(schema) - ignored
    if unknown:
        name = sorted(unknown)[0]
        raise ValidationError(f"Unknown field '{name}'", field=name)

    parsed: dict[str, Any] = {}
    for wire_name, (field_name, validator) in schema.items():
        if wire_name not in raw or raw[wire_name] is None:
            if not partial:
                raise ValidationError(f"{wire_name} is required", field=wire_name)
            continue
        parsed[field_name] = validator(raw[wire_name])
    return parsed


def parse_account_payload(data: Payload, partial: bool = False) -> dict[str, Any]:
    """Parse an account create (or, with partial=True, update) payload."""
    return _parse_fields(load_payload(data), _ACCOUNT_FIELDS, partial)


def parse_cost_center_payload(data: Payload, partial: bool = False) -> dict[str, Any]:
    """Parse a cost center create (or, with partial=True, update) payload."""
    return _parse_fields(load_payload(data), _COST_CENTER_FIELDS, partial)


def parse_payment_payload(data: Payload, partial: bool = False) -> dict[str, Any]:
    """Parse the JSON-encoded structured part of a payment request.

    On update (partial=True) the removeReceipt/removeRequest booleans are
    accepted and returned as remove_receipt/remove_request.
    """
    raw = load_payload(data)
    flags: dict[str, bool] = {}
    if partial:
        for wire_name, field_name in _PAYMENT_FLAGS.items():
            value = raw.pop(wire_name, None)
            if value is None:
                continue
            if not isinstance(value, bool):
                raise ValidationError(f"{wire_name} must be a boolean", field=wire_name)
            flags[field_name] = value
    parsed = _parse_fields(raw, _PAYMENT_FIELDS, partial, ignored=_IGNORED_PAYMENT_KEYS)
    parsed.update(flags)
    return parsed


def account_to_dict(account: Account) -> dict[str, Any]:
    return {"id": account.id, "name": account.name, "type": account.type.value}


def cost_center_to_dict(cost_center: CostCenter) -> dict[str, Any]:
    return {
        "id": cost_center.id,
        "category": cost_center.category,
        "subcategory": cost_center.subcategory,
    }


def payment_to_dict(payment: Payment) -> dict[str, Any]:
    return {
        "id": payment.id,
        "date": payment.date.isoformat(),
        "amount": str(payment.amount),
        "description": payment.description,
        "accountId": payment.account_id,
        "costCenterId": payment.cost_center_id,
        "receiptPath": payment.receipt_path,
        "requestPath": payment.request_path,
    }


def payment_with_relations_to_dict(payment: PaymentWithRelations) -> dict[str, Any]:
    result = payment_to_dict(payment.payment)
    result["account"] = account_to_dict(payment.account)
    result["costCenter"] = cost_center_to_dict(payment.cost_center)
    return result


def page_to_dict(page: Page) -> dict[str, Any]:
    """Serialize a page of PaymentWithRelations."""
    return {
        "items": [payment_with_relations_to_dict(p) for p in page.items],
        "page": page.page,
        "pageSize": page.page_size,
        "totalPages": page.total_pages,
        "totalCount": page.total_count,
    }


def report_to_dict(report: ExpenseReport) -> dict[str, Any]:
    return {
        "totalExpenses": str(report.total_expenses),
        "paymentCount": report.payment_count,
        "categoryTotals": [
            {
                "category": ct.category,
                "total": str(ct.total),
                "percentage": str(ct.percentage),
                "count": ct.count,
            }
            for ct in report.category_totals
        ],
        "topExpenses": [payment_with_relations_to_dict(p) for p in report.top_expenses],
    }
