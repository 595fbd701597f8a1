from decimal import Decimal, InvalidOperation

CENT = Decimal("0.01")


def to_decimal(val, field: str = "") -> Decimal:
    try:
        return Decimal(str(val))
    except (InvalidOperation, ValueError):
        raise InvalidOperation(f"Invalid value for {field or 'number'}")


def money_str(val) -> str | None:
    """Decimal -> '12.50'. Prices travel as strings so the client never rounds."""
    if val is None:
        return None
    return f"{to_decimal(val).quantize(CENT):.2f}"
