"""Tests for inari.codec wire encoding."""

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

import pytest

from inari import codec
from inari.dates import REFERENCE_DATE
from inari.domain import (
    Budget,
    BudgetPeriod,
    Category,
    CategoryColor,
    DecodeError,
    Expectation,
    ExpectationProperties,
    OneTime,
    PrecisionLossError,
    Recurring,
    RecurringFrequency,
    RecurringProperties,
    SpreadDuration,
    SpreadOut,
    SpreadOutProperties,
    Transaction,
    Wallet,
    WalletType,
)
from inari.domain.currency import USD

MOMENT = datetime(2026, 1, 31, 9, 30, tzinfo=timezone.utc)


def make_transaction(**overrides: Any) -> Transaction:
    fields: dict[str, Any] = {
        "wallet_id": uuid4(),
        "amount": Decimal("42.50"),
        "kind": OneTime(),
        "category_id": uuid4(),
        "date": MOMENT,
        "description": "Coffee",
        "modified_at": MOMENT,
    }
    fields.update(overrides)
    return Transaction(**fields)


def transaction_wire(**overrides: Any) -> dict[str, Any]:
    data = codec.encode_transaction(make_transaction())
    data.update(overrides)
    return data


class TestEncode:
    """Tests for the wire shape of encoded values."""

    def test_wallet_fields(self) -> None:
        """Should use camelCase names and uppercase ids."""
        wallet = Wallet("Shared", USD, WalletType.TWO_USER, ("a", "b"), created_at=MOMENT, modified_at=MOMENT)

        data = codec.encode_wallet(wallet)

        assert data == {
            "id": str(wallet.id).upper(),
            "name": "Shared",
            "currency": "USD",
            "type": "twoUser",
            "burdenRatio": 0.5,
            "isArchived": False,
            "ownerIDs": ["a", "b"],
            "createdAt": "2026-01-31T09:30:00+00:00",
            "modifiedAt": "2026-01-31T09:30:00+00:00",
        }

    def test_budget_period_is_nested_object(self) -> None:
        """Should encode the period as year and month."""
        budget = Budget(category_id=uuid4(), limit=Decimal("500.00"), period=BudgetPeriod(2026, 1))

        data = codec.encode_budget(budget)

        assert data["period"] == {"year": 2026, "month": 1}
        assert data["limit"] == 500.0
        assert data["categoryID"] == str(budget.category_id).upper()

    def test_one_time_has_no_properties(self) -> None:
        """Should encode oneTime as a bare tag."""
        assert codec.encode_kind(OneTime()) == {"type": "oneTime"}

    def test_recurring_omits_unset_fields(self) -> None:
        """Should leave out endDate and customInterval when unset."""
        kind = Recurring(RecurringProperties(RecurringFrequency.BI_WEEKLY))
        assert codec.encode_kind(kind) == {"type": "recurring", "properties": {"frequency": "biWeekly"}}

    def test_spread_out_sends_end_date(self) -> None:
        """Should include the derived end date."""
        kind = SpreadOut(SpreadOutProperties(Decimal(600), 3, SpreadDuration.MONTHS, MOMENT))

        data = codec.encode_kind(kind)

        assert data["type"] == "spreadOut"
        assert data["properties"]["endDate"] == "2026-04-30T09:30:00+00:00"
        assert data["properties"]["durationType"] == "months"

    def test_custom_ratio_only_when_set(self) -> None:
        """Should omit customBurdenRatio when absent."""
        assert "customBurdenRatio" not in codec.encode_transaction(make_transaction())
        shared = make_transaction(is_shared_expense=True, custom_burden_ratio=Decimal("0.6"))
        assert codec.encode_transaction(shared)["customBurdenRatio"] == 0.6

    def test_dumps_produces_json(self) -> None:
        """Should produce a JSON document."""
        category = Category(wallet_id=uuid4(), name="Café", color=CategoryColor.MINT)

        data = json.loads(codec.dumps(category))

        assert data["name"] == "Café"
        assert data["color"] == "mint"

    def test_encode_rejects_foreign_values(self) -> None:
        """Should refuse values that are not inari types."""
        with pytest.raises(TypeError):
            codec.encode({"not": "an entity"})


class TestPrecision:
    """Tests for the float precision guard."""

    def test_out_of_float_range_always_raises(self) -> None:
        """Should refuse values a float cannot hold, even when lenient."""
        budget = Budget(category_id=uuid4(), limit=Decimal("1e400"), period=BudgetPeriod(2026, 1))

        with pytest.raises(PrecisionLossError) as excinfo:
            codec.encode_budget(budget)
        assert excinfo.value.field == "limit"

        with pytest.raises(PrecisionLossError):
            codec.dumps(budget)

    def test_exact_values_pass_strict(self) -> None:
        """Should accept decimals that survive the float round trip."""
        transaction = make_transaction(amount=Decimal("0.1"))
        assert codec.encode_transaction(transaction, strict=True)["amount"] == 0.1

    def test_strict_raises_on_loss(self) -> None:
        """Should raise when strict and the float would alter the value."""
        transaction = make_transaction(amount=Decimal("0.12345678901234567890"))

        with pytest.raises(PrecisionLossError) as excinfo:
            codec.encode_transaction(transaction, strict=True)
        assert excinfo.value.field == "amount"

    def test_lenient_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should warn and still encode when lenient."""
        transaction = make_transaction(amount=Decimal("0.12345678901234567890"))

        with caplog.at_level(logging.WARNING, logger="inari.codec"):
            data = codec.encode_transaction(transaction)

        assert isinstance(data["amount"], float)
        assert "loses precision" in caplog.text


class TestRoundTrip:
    """Tests that decoding an encoded value gives it back."""

    def test_wallet(self) -> None:
        """Should round trip a wallet."""
        wallet = Wallet("Shared", USD, WalletType.TWO_USER, ("a", "b"), burden_ratio=Decimal("0.6"))
        assert codec.decode_wallet(codec.encode_wallet(wallet)) == wallet

    def test_category(self) -> None:
        """Should round trip a category."""
        category = Category(wallet_id=uuid4(), name="Rent", color=CategoryColor.INDIGO, sort_order=4)
        assert codec.decode_category(codec.encode_category(category)) == category

    def test_budget(self) -> None:
        """Should round trip a budget."""
        budget = Budget(category_id=uuid4(), limit=Decimal("450.25"), period=BudgetPeriod(2026, 12))
        assert codec.decode_budget(codec.encode_budget(budget)) == budget

    @pytest.mark.parametrize(
        "kind",
        [
            OneTime(),
            Recurring(RecurringProperties(RecurringFrequency.CUSTOM, end_date=MOMENT, custom_interval=10)),
            SpreadOut(SpreadOutProperties(Decimal(600), 30, SpreadDuration.DAYS, MOMENT)),
            Expectation(ExpectationProperties(Decimal("150.00"), Decimal("145.50"))),
        ],
    )
    def test_transaction_with_each_kind(self, kind: Any) -> None:
        """Should round trip a transaction carrying each kind."""
        transaction = make_transaction(kind=kind, is_shared_expense=True, custom_burden_ratio=Decimal("0.25"))

        decoded = codec.loads("transaction", codec.dumps(transaction))

        assert decoded == transaction
        assert type(decoded.kind) is type(kind)


class TestDecode:
    """Tests for decoding wire data."""

    def test_lowercase_uuid_accepted(self) -> None:
        """Should read UUIDs case-insensitively."""
        identity = uuid4()
        decoded = codec.decode_transaction(transaction_wire(id=str(identity).lower()))
        assert decoded.id == identity

    def test_legacy_numeric_timestamp(self) -> None:
        """Should read a bare number as seconds since the reference date."""
        decoded = codec.decode_transaction(transaction_wire(date=86400))
        assert decoded.date == datetime(2001, 1, 2, tzinfo=timezone.utc)
        assert REFERENCE_DATE.year == 2001

    def test_null_optional_field_is_absent(self) -> None:
        """Should treat null optionals as missing."""
        decoded = codec.decode_transaction(transaction_wire(customBurdenRatio=None))
        assert decoded.custom_burden_ratio is None

    def test_null_actual_amount(self) -> None:
        """Should leave an expectation unreconciled when actualAmount is null."""
        kind = codec.decode_kind({"type": "expectation", "properties": {"expectedAmount": 100, "actualAmount": None}})

        assert isinstance(kind, Expectation)
        assert kind.properties.expected_amount == Decimal(100)
        assert kind.properties.is_reconciled is False

    def test_float_reads_as_shortest_decimal(self) -> None:
        """Should turn 0.1 into Decimal('0.1'), not its binary expansion."""
        decoded = codec.decode_transaction(transaction_wire(amount=0.1))
        assert decoded.amount == Decimal("0.1")

    def test_unknown_kind(self) -> None:
        """Should name the unknown discriminant."""
        with pytest.raises(DecodeError) as excinfo:
            codec.decode_transaction(transaction_wire(kind={"type": "bogus"}))

        assert excinfo.value.field == "kind.type"
        assert excinfo.value.value == "bogus"
        assert "bogus" in str(excinfo.value)

    def test_missing_field_is_named(self) -> None:
        """Should report which required field is absent."""
        data = transaction_wire()
        del data["amount"]

        with pytest.raises(DecodeError) as excinfo:
            codec.decode_transaction(data)
        assert excinfo.value.field == "amount"

    def test_nested_error_path(self) -> None:
        """Should prefix errors inside the kind payload."""
        kind = {
            "type": "spreadOut",
            "properties": {
                "totalAmount": 600,
                "duration": 0,
                "durationType": "days",
                "startDate": "2026-01-31T09:30:00+00:00",
                "endDate": "2026-01-31T09:30:00+00:00",
            },
        }

        with pytest.raises(DecodeError) as excinfo:
            codec.decode_transaction(transaction_wire(kind=kind))
        assert excinfo.value.field == "kind.properties.duration"

    def test_local_calendar_month_end_is_kept(self) -> None:
        """Should keep an endDate computed in a local calendar."""
        # 1 Mar to 1 Apr 2026 in Berlin, written as reference-date seconds
        properties = {
            "totalAmount": 310,
            "duration": 1,
            "durationType": "months",
            "startDate": 794012400,
            "endDate": 796687200,
        }

        decoded = codec.decode_spread_out_properties(properties)

        assert decoded.start_date == datetime(2026, 2, 28, 23, 0, tzinfo=timezone.utc)
        assert decoded.end_date == datetime(2026, 3, 31, 22, 0, tzinfo=timezone.utc)
        assert decoded.monthly_amount == Decimal(310)

    def test_day_spread_across_dst_is_kept(self) -> None:
        """Should keep a one-day spread that lasts 23 hours."""
        properties = {
            "totalAmount": 50,
            "duration": 1,
            "durationType": "days",
            "startDate": "2026-03-29T00:00:00+01:00",
            "endDate": "2026-03-30T00:00:00+02:00",
        }

        decoded = codec.decode_spread_out_properties(properties)

        assert decoded.end_date == datetime(2026, 3, 29, 22, 0, tzinfo=timezone.utc)
        assert decoded.daily_amount == Decimal(50)

    def test_end_date_before_start_fails(self) -> None:
        """Should reject an endDate earlier than startDate."""
        properties = {
            "totalAmount": 600,
            "duration": 30,
            "durationType": "days",
            "startDate": "2026-01-01T00:00:00+00:00",
            "endDate": "2025-12-31T00:00:00+00:00",
        }

        with pytest.raises(DecodeError) as excinfo:
            codec.decode_spread_out_properties(properties)
        assert excinfo.value.field == "endDate"
        assert excinfo.value.value == "2025-12-31T00:00:00+00:00"

    @pytest.mark.parametrize("duration, unit", [(10**9, "days"), (10**6, "months")])
    def test_huge_duration_is_decode_error(self, duration: int, unit: str) -> None:
        """Should report an unrepresentable end date against duration."""
        kind = {
            "type": "spreadOut",
            "properties": {
                "totalAmount": 600,
                "duration": duration,
                "durationType": unit,
                "startDate": "2026-01-01T00:00:00+00:00",
                "endDate": "2026-01-02T00:00:00+00:00",
            },
        }

        with pytest.raises(DecodeError) as excinfo:
            codec.decode_kind(kind)
        assert excinfo.value.field == "properties.duration"
        assert excinfo.value.value == duration

    def test_violation_carries_wire_value(self) -> None:
        """Should attach the offending wire value to the error."""
        with pytest.raises(DecodeError) as excinfo:
            codec.decode_transaction(transaction_wire(amount=0))

        assert excinfo.value.field == "amount"
        assert excinfo.value.value == 0

    def test_owner_count_checked(self) -> None:
        """Should apply the wallet invariants on decode."""
        data = codec.encode_wallet(Wallet("Mine", USD, WalletType.SINGLE, ("a",)))
        data["ownerIDs"] = ["a", "b"]

        with pytest.raises(DecodeError) as excinfo:
            codec.decode_wallet(data)
        assert excinfo.value.field == "ownerIDs"

    def test_bad_currency(self) -> None:
        """Should point at the currency field."""
        data = codec.encode_wallet(Wallet("Mine", USD, WalletType.SINGLE, ("a",)))
        data["currency"] = "us"

        with pytest.raises(DecodeError) as excinfo:
            codec.decode_wallet(data)
        assert excinfo.value.field == "currency"

    def test_bad_color(self) -> None:
        """Should refuse colours outside the palette."""
        data = codec.encode_category(Category(wallet_id=uuid4(), name="Fun"))
        data["color"] = "magenta"

        with pytest.raises(DecodeError) as excinfo:
            codec.decode_category(data)
        assert excinfo.value.field == "color"

    def test_not_an_object(self) -> None:
        """Should refuse non-object input."""
        with pytest.raises(DecodeError):
            codec.decode("budget", [1, 2, 3])

    def test_period_month_out_of_range(self) -> None:
        """Should carry the constructor's complaint."""
        with pytest.raises(DecodeError) as excinfo:
            codec.decode_period({"year": 2026, "month": 13})
        assert excinfo.value.field == "month"

    def test_invalid_json(self) -> None:
        """Should report malformed JSON as a decode error."""
        with pytest.raises(DecodeError):
            codec.loads("wallet", "{not json")

    def test_unknown_entity_type(self) -> None:
        """Should raise KeyError for unknown entity names."""
        with pytest.raises(KeyError):
            codec.decode("ledger", {})

    def test_decoded_ids_are_uuids(self) -> None:
        """Should produce UUID instances."""
        decoded = codec.decode_transaction(transaction_wire())
        assert isinstance(decoded.wallet_id, UUID)
