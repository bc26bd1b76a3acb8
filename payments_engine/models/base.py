"""Monetary amount handling shared across models."""

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

from payments_engine.exceptions import InvalidAmountError

DEFAULT_PRECISION = 4
ZERO = Decimal("0")

# Largest amount or balance the ledger accepts
MAX_AMOUNT = Decimal("1e20")


def quantum(places: int = DEFAULT_PRECISION) -> Decimal:
    """Return the smallest representable step for ``places`` decimals."""
    return Decimal(1).scaleb(-places)


def to_amount(value: Decimal | str | int, places: int = DEFAULT_PRECISION) -> Decimal:
    """Parse a monetary value into a fixed-point Decimal.

    Parameters
    ----------
    value : Decimal | str | int
        Raw amount. Floats are refused since they cannot carry an exact
        decimal value.
    places : int
        Decimal places kept after rounding (banker's rounding).

    Returns
    -------
    Decimal
        Quantized amount.

    Raises
    ------
    InvalidAmountError
        If the value is a float, malformed, NaN, infinite, larger than
        ``MAX_AMOUNT`` or not representable at ``places``.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidAmountError(f"Unsupported amount type: {type(value).__name__}")

    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise InvalidAmountError(f"Malformed amount: {value!r}") from exc

    if not amount.is_finite():
        raise InvalidAmountError(f"Amount must be finite: {value!r}")
    if abs(amount) > MAX_AMOUNT:
        raise InvalidAmountError(f"Amount exceeds {MAX_AMOUNT:f}: {value!r}")

    try:
        return amount.quantize(quantum(places), rounding=ROUND_HALF_EVEN)
    except InvalidOperation as exc:
        raise InvalidAmountError(f"Amount {value!r} cannot be kept to {places} places") from exc
