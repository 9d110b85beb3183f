from typing import Any, Dict, Optional

from ..db.models import Order, Transaction


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def serialize_order(o: Order) -> Dict[str, Any]:
    return {
        "id": o.id,
        "transactionId": o.transaction_id,
        "status": o.status,
        "customerEmail": o.customer_email,
        "serviceId": o.service_id,
        "serviceName": o.service_name,
        "bookingId": o.booking_id,
        "createdAt": _iso(o.created_at),
        "updatedAt": _iso(o.updated_at),
    }


def serialize_transaction(t: Transaction) -> Dict[str, Any]:
    """
    JSON shape of a transaction joined with its order (``order`` is None when
    no order was created for the payment).
    """
    return {
        "id": t.id,
        "reference": t.reference,
        "amount": float(t.amount) if t.amount is not None else None,
        "currency": t.currency,
        "status": t.status,
        "serviceId": t.service_id,
        "serviceName": t.service_name,
        "customerEmail": t.customer_email,
        "metadata": t.metadata_json,
        "createdAt": _iso(t.created_at),
        "updatedAt": _iso(t.updated_at),
        "order": serialize_order(t.order) if t.order is not None else None,
    }
