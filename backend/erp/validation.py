from __future__ import annotations
import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from sqlalchemy import Boolean, Integer, Numeric, String, Text, DateTime
from sqlalchemy.orm import DeclarativeMeta

from .constants import OrderStatus, PaymentMethod, ShippingStatus
from .time_utils import parse_iso_datetime


# Signed 32-bit range, the narrowest INTEGER among the supported engines
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_CENT = Decimal("0.01")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

# Echoed back by clients on update; never written
READ_ONLY_FIELDS = frozenset({"id", "created_at", "updated_at"})


class ValidationError(ValueError):
    """400-level input problem. `errors` maps wire field names to messages."""

    def __init__(self, message: str, errors: dict[str, str] | None = None):
        super().__init__(message)
        self.errors = errors or {}


class ConflictError(ValueError):
    """A unique value (email, sku, name, ...) is already taken."""


class NotFoundError(LookupError):
    """Requested record does not exist."""


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - writable_fields: attribute names clients are allowed to set
    - required_on_create: attributes that must be present (and non-blank) on POST
    - aliases: wire names that differ from the attribute name
    """
    writable_fields: frozenset[str]
    required_on_create: frozenset[str] = field(default_factory=frozenset)
    # wire name (snake_case) -> attribute name, e.g. {"active": "is_active"}
    aliases: dict[str, str] = field(default_factory=dict)

    def wire_name(self, attr: str) -> str:
        for wire, target in self.aliases.items():
            if target == attr:
                return to_camel(wire)
        return to_camel(attr)


def to_snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def to_camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    # Keyed by mapped attribute name (User.is_active lives in column "active")
    mapper = model.__mapper__
    return dict(mapper.columns.items())


def numeric_limit(coltype: Numeric) -> Decimal | None:
    """Largest magnitude a Numeric(precision, scale) column can store, e.g. 99999999.99 for (10, 2)."""
    if coltype.precision is None:
        return None
    scale = coltype.scale or 0
    return Decimal(10) ** (coltype.precision - scale) - Decimal(10) ** -scale


def check_int_range(value: int) -> int:
    if not INT_MIN <= value <= INT_MAX:
        raise ValueError("out of range")
    return value


def _coerce_value(col, value: Any):
    coltype = col.type

    if value is None:
        return None

    # Integers - strict validation to reject floats and scientific notation
    if isinstance(coltype, Integer):
        if isinstance(value, int) and not isinstance(value, bool):
            return check_int_range(value)
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped or "e" in stripped.lower() or "." in stripped:
                raise ValueError("must be an integer")
            try:
                parsed = int(stripped)
            except ValueError:
                raise ValueError("must be an integer")
            return check_int_range(parsed)
        raise ValueError("must be an integer")

    # Money / decimals, rounded to cents
    if isinstance(coltype, Numeric):
        if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
            raise ValueError("must be a number")
        try:
            dec = Decimal(str(value).strip())
            if not dec.is_finite():
                raise ValueError("must be a number")
            limit = numeric_limit(coltype)
            if limit is not None and abs(dec) > limit:
                raise ValueError(f"out of range (max {limit})")
            return dec.quantize(_CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise ValueError("must be a number")

    if isinstance(coltype, Boolean):
        if isinstance(value, bool):
            return value
        raise ValueError("must be true or false")

    # Datetimes (accept ISO-8601 strings; normalize to UTC)
    if isinstance(coltype, DateTime):
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                dt = parse_iso_datetime(value)
            except ValueError:
                raise ValueError("must be an ISO-8601 datetime")
            if dt is None:
                raise ValueError("must be an ISO-8601 datetime")
            return dt
        raise ValueError("must be an ISO-8601 datetime")

    if isinstance(coltype, (String, Text)):
        if isinstance(value, (dict, list)):
            raise ValueError("must be a string")
        return str(value).strip()

    return value


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: dict,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Validates + normalizes incoming JSON against:
    - SQLAlchemy column metadata (nullable, type, String length)
    - a policy allowlist (writable_fields)
    - required_on_create (if partial=False)

    Keys may be camelCase (wire format) or snake_case. Returns a patch dict
    keyed by model attribute name. All field problems are collected and
    raised together as one ValidationError.

    partial=False: create semantics (enforce required_on_create)
    partial=True: update semantics (validate only provided keys)
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    cols = _columns_by_key(model)
    errors: dict[str, str] = {}
    patch: dict = {}

    for raw_key, raw in payload.items():
        wire = to_camel(to_snake(raw_key))
        k = policy.aliases.get(to_snake(raw_key), to_snake(raw_key))

        if k in READ_ONLY_FIELDS:
            continue
        if k not in policy.writable_fields or k not in cols:
            errors[wire] = "field not allowed"
            continue

        col = cols[k]

        # Empty strings clear optional fields
        if isinstance(raw, str) and raw.strip() == "" and col.nullable:
            raw = None

        if raw is None:
            if not col.nullable:
                errors[wire] = "cannot be null"
            else:
                patch[k] = None
            continue

        try:
            val = _coerce_value(col, raw)
        except ValueError as e:
            errors[wire] = str(e)
            continue

        if isinstance(col.type, (String, Text)) and val == "":
            errors[wire] = "cannot be blank"
            continue

        if isinstance(col.type, String) and col.type.length and isinstance(val, str):
            if len(val) > col.type.length:
                errors[wire] = f"exceeds max length {col.type.length}"
                continue

        patch[k] = val

    if not partial:
        for k in sorted(policy.required_on_create):
            wire = policy.wire_name(k)
            if k not in patch and wire not in errors:
                errors[wire] = "is required"

    if errors:
        raise ValidationError("Validation failed", errors)

    return patch


def parse_id_list(value: Any, field_name: str) -> list[int]:
    """Validate a list of integer ids such as `roles: [1, 2]`."""
    if not isinstance(value, list):
        raise ValidationError("Validation failed", {field_name: "must be a list of ids"})
    ids = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int):
            raise ValidationError("Validation failed", {field_name: "must be a list of ids"})
        if not INT_MIN <= item <= INT_MAX:
            raise ValidationError("Validation failed", {field_name: "id out of range"})
        ids.append(item)
    return list(dict.fromkeys(ids))


def _raise_if(errors: dict[str, str]) -> None:
    if errors:
        raise ValidationError("Validation failed", errors)


def enforce_rules_email(patch: dict) -> None:
    email = patch.get("email")
    if email is not None and not EMAIL_RE.match(email):
        raise ValidationError("Validation failed", {"email": "must be a valid email address"})


def enforce_rules_product(patch: dict) -> None:
    """
    Business rules that are not captured by SQLAlchemy metadata alone.
    Keep these small and centralized.
    """
    errors = {}
    price = patch.get("price")
    if price is not None and price <= 0:
        errors["price"] = "must be greater than 0"
    stock = patch.get("stock")
    if stock is not None and stock < 0:
        errors["stock"] = "must be >= 0"
    _raise_if(errors)


def enforce_rules_order(patch: dict) -> None:
    errors = {}
    if patch.get("status") is not None and patch["status"] not in OrderStatus.ALL:
        errors["status"] = f"must be one of: {', '.join(OrderStatus.ALL)}"
    if patch.get("payment_method") is not None and patch["payment_method"] not in PaymentMethod.ALL:
        errors["paymentMethod"] = f"must be one of: {', '.join(PaymentMethod.ALL)}"
    for key in ("total_amount", "discount", "shipping_cost"):
        if patch.get(key) is not None and patch[key] < 0:
            errors[to_camel(key)] = "must be >= 0"
    _raise_if(errors)


def enforce_rules_order_item(patch: dict, prefix: str = "") -> None:
    errors = {}
    if patch.get("quantity") is not None and patch["quantity"] < 1:
        errors[f"{prefix}quantity"] = "must be at least 1"
    if patch.get("price") is not None and patch["price"] <= 0:
        errors[f"{prefix}price"] = "must be greater than 0"
    _raise_if(errors)


def enforce_rules_payment(patch: dict) -> None:
    errors = {}
    if patch.get("payment_method") is not None and patch["payment_method"] not in PaymentMethod.ALL:
        errors["paymentMethod"] = f"must be one of: {', '.join(PaymentMethod.ALL)}"
    if patch.get("amount") is not None and patch["amount"] <= 0:
        errors["amount"] = "must be greater than 0"
    _raise_if(errors)


def enforce_rules_shipping(patch: dict) -> None:
    status = patch.get("shipping_status")
    if status is not None and status not in ShippingStatus.ALL:
        raise ValidationError(
            "Validation failed",
            {"shippingStatus": f"must be one of: {', '.join(ShippingStatus.ALL)}"},
        )
