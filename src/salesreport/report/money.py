"""Fixed-point currency amounts held as integer cents."""
from dataclasses import dataclass

from ..utils.exceptions import ParseError

DECIMAL_POINT = "."
THOUSANDS_SEPARATOR = ","
DEFAULT_WIDTH = 12


@dataclass(frozen=True, order=True)
class Money:
    """An amount of money in minor units (cents).

    All arithmetic stays in integers; conversion to dollars only happens
    in ``format``.
    """
    cents: int = 0

    @classmethod
    def parse(cls, text: str) -> "Money":
        """
        Parse a decimal amount such as ``"3,409.15"``.

        Thousands separators are dropped. Digits after the decimal point are
        cents; a single digit counts as tens of cents.

        Args:
            text: Decimal string, optionally signed

        Returns:
            Money instance

        Raises:
            ParseError: If the string is not a valid amount
        """
        raw = text.strip()
        sign = 1
        if raw.startswith("-"):
            sign = -1
            raw = raw[1:]

        whole, point, fraction = raw.replace(THOUSANDS_SEPARATOR, "").partition(DECIMAL_POINT)
        if point and not 1 <= len(fraction) <= 2:
            raise ParseError(f"invalid amount {text!r}: expected at most two decimal places")
        digits = whole + fraction.ljust(2, "0")
        if not whole and not fraction:
            raise ParseError(f"invalid amount {text!r}: no digits")
        if not (digits.isascii() and digits.isdigit()):
            raise ParseError(f"invalid amount {text!r}")
        return cls(sign * int(digits))

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.cents + other.cents)

    def __mul__(self, quantity: int) -> "Money":
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            return NotImplemented
        return Money(self.cents * quantity)

    __rmul__ = __mul__

    def format(self, width: int = DEFAULT_WIDTH) -> str:
        """Render as dollars with two decimals, right-aligned to ``width``."""
        dollars, cents = divmod(abs(self.cents), 100)
        sign = "-" if self.cents < 0 else ""
        return f"{sign}{dollars}.{cents:02d}".rjust(width)

    def __str__(self) -> str:
        return self.format()
