"""Brazilian Real parsing and formatting"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

CURRENCY_SYMBOL = "R$"
FALLBACK_MONTHLY_RATE = Decimal("5.0")

_CENT = Decimal("0.01")
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")
_NON_DIGITS = re.compile(r"\D")


def _leading_number(text: str) -> Optional[Decimal]:
    """Parse the numeric prefix of text the way a browser's parseFloat does"""
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    return Decimal(match.group(1))


def parse_currency(value: str) -> Decimal:
    """
    Convert a face value string into an amount.

    Two accepted shapes:
    - Formatted: contains "R$" -> symbol and thousands separators are dropped,
      the decimal comma becomes a point ("R$ 1.234,50" -> 1234.50)
    - Raw digits: every non-digit is dropped and the integer is read as
      centavos ("123450" -> 1234.50)

    Anything else parses to 0, which the calculator rejects.
    """
    if not value:
        return Decimal("0")

    if CURRENCY_SYMBOL in value:
        normalized = value.replace(CURRENCY_SYMBOL, "").replace(".", "").replace(",", ".", 1)
        return _leading_number(normalized) or Decimal("0")

    digits = _NON_DIGITS.sub("", value)
    if digits:
        return Decimal(int(digits)) / 100

    return Decimal("0")


def format_brl(amount: Union[Decimal, int, float]) -> str:
    """Format as pt-BR currency: 1234.5 -> 'R$ 1.234,50'"""
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))

    quantized = amount.quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""

    # "1,234.50" -> "1.234,50"
    body = f"{abs(quantized):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{CURRENCY_SYMBOL} {body}"


def parse_rate(value: str) -> Decimal:
    """Monthly rate in percent; unparseable or zero falls back to 5.0"""
    rate = _leading_number(value or "")
    if not rate:
        return FALLBACK_MONTHLY_RATE
    return rate


def format_rate(value: str) -> str:
    """'5.00' -> '5,00%'"""
    return f"{value.replace('.', ',', 1)}%"
