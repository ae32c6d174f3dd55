"""Wire encoding for inari values.

Every value type has an explicit encode_* / decode_* pair mapping it to and
from a JSON-compatible object tree. Field names and the transaction kind
discriminant are fixed for compatibility with existing data:

- Decimal fields travel as JSON numbers (binary floating point)
- UUIDs travel as uppercase canonical strings
- Timestamps travel as ISO-8601 strings
- A TransactionKind is {"type": ..., "properties": {...}}, with
  "properties" omitted for oneTime

Decoding always goes through the domain constructors, so a decoded value
satisfies the same invariants as a freshly built one.
"""

import json
import logging
import math
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, TypeVar
from uuid import UUID

from inari.dates import format_timestamp, parse_timestamp
from inari.domain.budget import Budget
from inari.domain.category import Category, CategoryColor
from inari.domain.currency import CurrencyCode
from inari.domain.errors import ContractViolation, DecodeError, PrecisionLossError
from inari.domain.kind import (
    Expectation,
    ExpectationProperties,
    OneTime,
    Recurring,
    RecurringFrequency,
    RecurringProperties,
    SpreadDuration,
    SpreadOut,
    SpreadOutProperties,
    TransactionKind,
)
from inari.domain.period import BudgetPeriod
from inari.domain.transaction import Transaction
from inari.domain.wallet import Wallet, WalletType

logger = logging.getLogger(__name__)

JSONObject = dict[str, Any]

T = TypeVar("T")
E = TypeVar("E", bound=Enum)

_MISSING = object()


# Encoding


def encode_number(value: Decimal, field: str, strict: bool = False) -> float:
    """Narrow a Decimal to the float carried on the wire.

    Args:
        value: Decimal to encode.
        field: Wire field name, used in warnings and errors.
        strict: Raise instead of warning when the float is not exact.

    Raises:
        PrecisionLossError: If strict and the value does not survive the round
            trip, or always when the value is beyond float range.
    """
    number = float(value)
    if not math.isfinite(number):
        raise PrecisionLossError(field, value)
    if Decimal(repr(number)) != value:
        if strict:
            raise PrecisionLossError(field, value)
        logger.warning("%s=%s loses precision on the wire (sent as %r)", field, value, number)
    return number


def encode_uuid(value: UUID) -> str:
    return str(value).upper()


def encode_currency(currency: CurrencyCode) -> str:
    return currency.code


def encode_period(period: BudgetPeriod) -> JSONObject:
    return {"year": period.year, "month": period.month}


def encode_wallet(wallet: Wallet, strict: bool = False) -> JSONObject:
    return {
        "id": encode_uuid(wallet.id),
        "name": wallet.name,
        "currency": encode_currency(wallet.currency),
        "type": wallet.wallet_type.value,
        "burdenRatio": encode_number(wallet.burden_ratio, "burdenRatio", strict),
        "isArchived": wallet.is_archived,
        "ownerIDs": list(wallet.owner_ids),
        "createdAt": format_timestamp(wallet.created_at),
        "modifiedAt": format_timestamp(wallet.modified_at),
    }


def encode_category(category: Category) -> JSONObject:
    return {
        "id": encode_uuid(category.id),
        "walletID": encode_uuid(category.wallet_id),
        "name": category.name,
        "iconName": category.icon_name,
        "color": category.color.value,
        "isShared": category.is_shared,
        "sortOrder": category.sort_order,
        "modifiedAt": format_timestamp(category.modified_at),
    }


def encode_budget(budget: Budget, strict: bool = False) -> JSONObject:
    return {
        "id": encode_uuid(budget.id),
        "categoryID": encode_uuid(budget.category_id),
        "limit": encode_number(budget.limit, "limit", strict),
        "period": encode_period(budget.period),
        "modifiedAt": format_timestamp(budget.modified_at),
    }


def encode_recurring_properties(properties: RecurringProperties) -> JSONObject:
    data: JSONObject = {"frequency": properties.frequency.value}
    if properties.end_date is not None:
        data["endDate"] = format_timestamp(properties.end_date)
    if properties.custom_interval is not None:
        data["customInterval"] = properties.custom_interval
    return data


def encode_spread_out_properties(properties: SpreadOutProperties, strict: bool = False) -> JSONObject:
    # endDate is derived but still sent, so readers need not recompute it
    return {
        "totalAmount": encode_number(properties.total_amount, "totalAmount", strict),
        "duration": properties.duration,
        "durationType": properties.duration_type.value,
        "startDate": format_timestamp(properties.start_date),
        "endDate": format_timestamp(properties.end_date),
    }


def encode_expectation_properties(properties: ExpectationProperties, strict: bool = False) -> JSONObject:
    data: JSONObject = {
        "expectedAmount": encode_number(properties.expected_amount, "expectedAmount", strict),
    }
    if properties.actual_amount is not None:
        data["actualAmount"] = encode_number(properties.actual_amount, "actualAmount", strict)
    return data


def encode_kind(kind: TransactionKind, strict: bool = False) -> JSONObject:
    """Encode a transaction kind as a tagged object."""
    if isinstance(kind, OneTime):
        return {"type": kind.type_name}
    if isinstance(kind, Recurring):
        return {"type": kind.type_name, "properties": encode_recurring_properties(kind.properties)}
    if isinstance(kind, SpreadOut):
        return {"type": kind.type_name, "properties": encode_spread_out_properties(kind.properties, strict)}
    if isinstance(kind, Expectation):
        return {"type": kind.type_name, "properties": encode_expectation_properties(kind.properties, strict)}
    raise TypeError(f"Not a transaction kind: {kind!r}")


def encode_transaction(transaction: Transaction, strict: bool = False) -> JSONObject:
    data: JSONObject = {
        "id": encode_uuid(transaction.id),
        "walletID": encode_uuid(transaction.wallet_id),
        "amount": encode_number(transaction.amount, "amount", strict),
        "kind": encode_kind(transaction.kind, strict),
        "categoryID": encode_uuid(transaction.category_id),
        "date": format_timestamp(transaction.date),
        "description": transaction.description,
        "isSharedExpense": transaction.is_shared_expense,
    }
    if transaction.custom_burden_ratio is not None:
        data["customBurdenRatio"] = encode_number(transaction.custom_burden_ratio, "customBurdenRatio", strict)
    data["modifiedAt"] = format_timestamp(transaction.modified_at)
    return data


def encode(value: Any, strict: bool = False) -> Any:
    """Encode any inari value to its wire form.

    Args:
        value: Entity, transaction kind or leaf value.
        strict: Refuse Decimal values that the float encoding would alter.

    Returns:
        JSON-compatible object tree (or bare string for a CurrencyCode).

    Raises:
        TypeError: If the value is not an inari type.
        PrecisionLossError: If strict and a Decimal would lose precision.
    """
    if isinstance(value, Wallet):
        return encode_wallet(value, strict)
    if isinstance(value, Category):
        return encode_category(value)
    if isinstance(value, Budget):
        return encode_budget(value, strict)
    if isinstance(value, Transaction):
        return encode_transaction(value, strict)
    if isinstance(value, (OneTime, Recurring, SpreadOut, Expectation)):
        return encode_kind(value, strict)
    if isinstance(value, BudgetPeriod):
        return encode_period(value)
    if isinstance(value, CurrencyCode):
        return encode_currency(value)
    raise TypeError(f"Cannot encode {type(value).__name__}")


# Decoding


def _expect_object(data: Any) -> JSONObject:
    if not isinstance(data, dict):
        raise DecodeError("", f"expected an object, got {type(data).__name__}", data)
    return data


def _get(data: JSONObject, key: str, optional: bool = False) -> Any:
    """Fetch a field; optional fields that are absent or null read as None."""
    value = data.get(key, _MISSING)
    if value is _MISSING or (optional and value is None):
        if optional:
            return None
        raise DecodeError(key, "missing required field")
    return value


def _get_str(data: JSONObject, key: str) -> str:
    value = _get(data, key)
    if not isinstance(value, str):
        raise DecodeError(key, "expected a string", value)
    return value


def _get_bool(data: JSONObject, key: str) -> bool:
    value = _get(data, key)
    if not isinstance(value, bool):
        raise DecodeError(key, "expected a boolean", value)
    return value


def _get_int(data: JSONObject, key: str, optional: bool = False) -> int | None:
    value = _get(data, key, optional)
    if value is None and optional:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(key, "expected an integer", value)
    return value


def _get_decimal(data: JSONObject, key: str, optional: bool = False) -> Decimal | None:
    value = _get(data, key, optional)
    if value is None and optional:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(key, "expected a number", value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise DecodeError(key, "expected a finite number", value)
        return Decimal(repr(value))
    return Decimal(value)


def _get_uuid(data: JSONObject, key: str) -> UUID:
    value = _get_str(data, key)
    try:
        return UUID(value)
    except ValueError:
        raise DecodeError(key, f"invalid UUID {value!r}", value) from None


def _get_timestamp(data: JSONObject, key: str, optional: bool = False) -> datetime | None:
    value = _get(data, key, optional)
    if value is None and optional:
        return None
    try:
        return parse_timestamp(value)
    except (ValueError, OverflowError):
        raise DecodeError(key, f"invalid timestamp {value!r}", value) from None


def _get_enum(data: JSONObject, key: str, enum_type: type[E]) -> E:
    value = _get_str(data, key)
    try:
        return enum_type(value)
    except ValueError:
        raise DecodeError(key, f"unknown value {value!r}", value) from None


def _nested(key: str, decoder: Callable[[Any], T], value: Any) -> T:
    try:
        return decoder(value)
    except DecodeError as e:
        raise e.nested(key) from e


def _build(factory: Callable[..., T], data: JSONObject, **kwargs: Any) -> T:
    """Run a domain constructor, reporting violations as decode errors.

    The offending wire value is looked up by the violation's field name.
    """
    try:
        return factory(**kwargs)
    except ContractViolation as e:
        raise DecodeError(e.field, e.message, data.get(e.field)) from e


def decode_currency(data: Any) -> CurrencyCode:
    if not isinstance(data, str):
        raise DecodeError("", "expected a currency code string", data)
    try:
        return CurrencyCode(data)
    except ContractViolation as e:
        raise DecodeError("", e.message, data) from e


def decode_period(data: Any) -> BudgetPeriod:
    data = _expect_object(data)
    return _build(BudgetPeriod, data, year=_get_int(data, "year"), month=_get_int(data, "month"))


def decode_wallet(data: Any) -> Wallet:
    data = _expect_object(data)
    owner_ids = _get(data, "ownerIDs")
    if not isinstance(owner_ids, list) or not all(isinstance(owner, str) for owner in owner_ids):
        raise DecodeError("ownerIDs", "expected a list of strings", owner_ids)

    return _build(
        Wallet,
        data,
        id=_get_uuid(data, "id"),
        name=_get_str(data, "name"),
        currency=_nested("currency", decode_currency, _get(data, "currency")),
        wallet_type=_get_enum(data, "type", WalletType),
        burden_ratio=_get_decimal(data, "burdenRatio"),
        is_archived=_get_bool(data, "isArchived"),
        owner_ids=tuple(owner_ids),
        created_at=_get_timestamp(data, "createdAt"),
        modified_at=_get_timestamp(data, "modifiedAt"),
    )


def decode_category(data: Any) -> Category:
    data = _expect_object(data)
    return _build(
        Category,
        data,
        id=_get_uuid(data, "id"),
        wallet_id=_get_uuid(data, "walletID"),
        name=_get_str(data, "name"),
        icon_name=_get_str(data, "iconName"),
        color=_get_enum(data, "color", CategoryColor),
        is_shared=_get_bool(data, "isShared"),
        sort_order=_get_int(data, "sortOrder"),
        modified_at=_get_timestamp(data, "modifiedAt"),
    )


def decode_budget(data: Any) -> Budget:
    data = _expect_object(data)
    return _build(
        Budget,
        data,
        id=_get_uuid(data, "id"),
        category_id=_get_uuid(data, "categoryID"),
        limit=_get_decimal(data, "limit"),
        period=_nested("period", decode_period, _get(data, "period")),
        modified_at=_get_timestamp(data, "modifiedAt"),
    )


def decode_recurring_properties(data: Any) -> RecurringProperties:
    data = _expect_object(data)
    return _build(
        RecurringProperties,
        data,
        frequency=_get_enum(data, "frequency", RecurringFrequency),
        end_date=_get_timestamp(data, "endDate", optional=True),
        custom_interval=_get_int(data, "customInterval", optional=True),
    )


def decode_spread_out_properties(data: Any) -> SpreadOutProperties:
    """Decode spread-out properties.

    endDate is taken from the wire as written, since the writer may have
    computed it in a local calendar. It must not precede startDate.
    """
    data = _expect_object(data)
    return _build(
        SpreadOutProperties.restore,
        data,
        total_amount=_get_decimal(data, "totalAmount"),
        duration=_get_int(data, "duration"),
        duration_type=_get_enum(data, "durationType", SpreadDuration),
        start_date=_get_timestamp(data, "startDate"),
        end_date=_get_timestamp(data, "endDate"),
    )


def decode_expectation_properties(data: Any) -> ExpectationProperties:
    data = _expect_object(data)
    return _build(
        ExpectationProperties,
        data,
        expected_amount=_get_decimal(data, "expectedAmount"),
        actual_amount=_get_decimal(data, "actualAmount", optional=True),
    )


def decode_kind(data: Any) -> TransactionKind:
    """Decode a tagged transaction kind.

    Raises:
        DecodeError: If the discriminant is unknown or the payload is invalid.
    """
    data = _expect_object(data)
    type_name = _get_str(data, "type")

    if type_name == OneTime.type_name:
        return OneTime()
    if type_name == Recurring.type_name:
        return Recurring(_nested("properties", decode_recurring_properties, _get(data, "properties")))
    if type_name == SpreadOut.type_name:
        return SpreadOut(_nested("properties", decode_spread_out_properties, _get(data, "properties")))
    if type_name == Expectation.type_name:
        return Expectation(_nested("properties", decode_expectation_properties, _get(data, "properties")))

    raise DecodeError("type", f"Unknown transaction kind: {type_name}", type_name)


def decode_transaction(data: Any) -> Transaction:
    data = _expect_object(data)
    return _build(
        Transaction,
        data,
        id=_get_uuid(data, "id"),
        wallet_id=_get_uuid(data, "walletID"),
        amount=_get_decimal(data, "amount"),
        kind=_nested("kind", decode_kind, _get(data, "kind")),
        category_id=_get_uuid(data, "categoryID"),
        date=_get_timestamp(data, "date"),
        description=_get_str(data, "description"),
        is_shared_expense=_get_bool(data, "isSharedExpense"),
        custom_burden_ratio=_get_decimal(data, "customBurdenRatio", optional=True),
        modified_at=_get_timestamp(data, "modifiedAt"),
    )


DECODERS: dict[str, Callable[[Any], Any]] = {
    "wallet": decode_wallet,
    "category": decode_category,
    "budget": decode_budget,
    "transaction": decode_transaction,
    "kind": decode_kind,
    "period": decode_period,
    "currency": decode_currency,
}


def decode(entity_type: str, data: Any) -> Any:
    """Decode wire data for the named entity type.

    Args:
        entity_type: One of the DECODERS keys (e.g. "wallet", "transaction").
        data: Wire value.

    Raises:
        KeyError: If the entity type is unknown.
        DecodeError: If the data is malformed or breaks an invariant.
    """
    value = DECODERS[entity_type](data)
    logger.debug("Decoded %s %s", entity_type, getattr(value, "id", value))
    return value


def dumps(value: Any, strict: bool = False, **kwargs: Any) -> str:
    """Encode a value straight to a JSON string."""
    return json.dumps(encode(value, strict), ensure_ascii=False, **kwargs)


def loads(entity_type: str, text: str | bytes) -> Any:
    """Decode a JSON string into the named entity type."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError("", f"invalid JSON: {e.msg}") from e
    return decode(entity_type, data)
