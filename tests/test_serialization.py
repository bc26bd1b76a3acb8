"""Tests for shared serialization utilities."""

from decimal import Decimal

from payments_engine.models import AccountSnapshot, Outcome
from payments_engine.sinks.serialization import format_amount, serialize_value, to_dict


class TestToDict:
    """Tests for to_dict function."""

    def test_snapshot(self) -> None:
        snapshot = AccountSnapshot(
            client=1,
            available=Decimal("1.5"),
            held=Decimal("0"),
            total=Decimal("1.5"),
            locked=False,
        )
        result = to_dict(snapshot, places=4)

        assert result == {
            "client": 1,
            "available": "1.5000",
            "held": "0.0000",
            "total": "1.5000",
            "locked": False,
        }

    def test_without_places(self) -> None:
        snapshot = AccountSnapshot(1, Decimal("1.5"), Decimal("0"), Decimal("1.5"), True)
        assert to_dict(snapshot)["available"] == "1.5"

    def test_dict_passthrough(self) -> None:
        assert to_dict({"key": "value"}) == {"key": "value"}

    def test_other_type(self) -> None:
        assert to_dict(42) == {"value": "42"}


class TestSerializeValue:
    """Tests for serialize_value function."""

    def test_decimal(self) -> None:
        assert serialize_value(Decimal("99.99")) == "99.99"

    def test_enum(self) -> None:
        assert serialize_value(Outcome.APPLIED) == "applied"

    def test_nested(self) -> None:
        data = {"amounts": [Decimal("1"), Decimal("2.5")]}
        assert serialize_value(data, places=2) == {"amounts": ["1.00", "2.50"]}

    def test_passthrough(self) -> None:
        assert serialize_value("hello") == "hello"
        assert serialize_value(42) == 42
        assert serialize_value(None) is None


class TestFormatAmount:
    """Tests for format_amount."""

    def test_pads(self) -> None:
        assert format_amount(Decimal("10"), 4) == "10.0000"

    def test_no_exponent(self) -> None:
        assert format_amount(Decimal("1E+3"), 4) == "1000.0000"
        assert format_amount(Decimal("0E-8"), 4) == "0.0000"

    def test_rounds(self) -> None:
        assert format_amount(Decimal("1.23456"), 4) == "1.2346"

    def test_wide_values(self) -> None:
        """Values wider than the default context still render exactly."""
        assert format_amount(Decimal("1800000000000000000000000"), 4) == "1800000000000000000000000.0000"
        assert format_amount(Decimal("123456789012345678901234.56789"), 4) == "123456789012345678901234.5679"
