# /txbuilder/core/amounts.py
# Human <-> base-unit amount conversion. Exact arithmetic only.
import re
from decimal import Context, Decimal, ROUND_HALF_UP, localcontext

from txbuilder.core.constants import MAX_UINT_AMOUNT, USE_ALL_AMOUNT, is_native
from txbuilder.core.errors import AmountFormatError

_DECIMAL_NUMERAL = re.compile(r"^(\d+(\.\d*)?|\.\d+)$")

# Wide enough for uint256 values plus any fractional part a caller may pass.
EXACT = Context(prec=160, rounding=ROUND_HALF_UP)


def exact_context():
    return localcontext(EXACT)


def parse_decimal(amount) -> Decimal:
    """Parses a non-negative decimal numeral, rejecting signs, exponents and NaN."""
    text = str(amount).strip()
    if not _DECIMAL_NUMERAL.match(text):
        raise AmountFormatError(amount)
    return Decimal(text)


def format_decimal(value: Decimal) -> str:
    """Renders a Decimal without exponent notation."""
    return format(value, "f")


def convert(human_amount: str, decimals: int) -> str:
    """
    Converts a human readable amount into base units of a token.

    Digits past ``decimals`` are rounded half-up.

    >>> convert("123.45", 6)
    '123450000'
    """
    with exact_context():
        value = parse_decimal(human_amount).scaleb(int(decimals))
        return str(int(value.to_integral_value(rounding=ROUND_HALF_UP)))


def to_base_units(amount: str, decimals: int) -> str:
    """Like convert(), but resolves the "-1" use-all sentinel to max uint."""
    if str(amount).strip() == USE_ALL_AMOUNT:
        return MAX_UINT_AMOUNT
    return convert(amount, decimals)


def get_tx_value(reserve: str, amount: str) -> int:
    """Native coin attached to a call: the amount itself for the native reserve, 0 otherwise."""
    if is_native(reserve):
        return int(amount)
    return 0
