"""Currency formatting for display."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

_CENT = Decimal("0.01")


def format_currency(value: Union[Decimal, float, int], symbol: str = "$") -> str:
    """Format an amount as a currency string, e.g. '$1,234.56' or '-$12.00'.

    Always renders exactly two fraction digits.
    """
    amount = Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
