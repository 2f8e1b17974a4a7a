# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Integer, float and decimal converters.

Integer literals follow one fixed grammar for every width:

- surrounding ASCII whitespace is ignored;
- a single leading `-` is allowed for signed types only (`+` is never allowed);
- `0x` (lowercase) introduces hexadecimal digits, `0n` (lowercase) introduces
  decimal digits; `0X` and `0N` are rejected;
- hexadecimal literals cannot be negative;
- anything else (`_`, `.`, exponents, a second sign) is rejected;
- the value must fit the declared width.

So `16`, ` 16`, `016`, `0n16` and `0x10` all parse to 16, while `--5`, `16.`,
`_16` and `0X16` fail. Formatting always writes plain decimal.
"""
from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any

from clasp.types.base import ArgumentType, ParseContext
from clasp.types.markers import IntegerWidth

ASCII_WHITESPACE = " \t\n\r\x0b\x0c"

_DECIMAL_DIGITS = re.compile(r"[0-9]+")
_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")
_REAL_NUMBER = re.compile(
    r"-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?"
    r"|-?(?:inf|infinity|nan)",
    re.IGNORECASE,
)


def parse_integer(text: str, signed: bool = True, allow_hex: bool = True) -> int:
    """Parse an integer literal.

    Raises:
        ValueError: If `text` is not a valid literal for the requested signedness.
    """
    literal = text.strip(ASCII_WHITESPACE)
    if not literal:
        raise ValueError("an integer value is required")

    negative = False
    if literal.startswith("-"):
        if not signed:
            raise ValueError(f"'{text}' is not a valid unsigned integer")
        negative = True
        literal = literal[1:]

    pattern, base = _DECIMAL_DIGITS, 10
    if literal.startswith("0x"):
        if not allow_hex:
            raise ValueError(f"'{text}' is not a valid decimal integer")
        if negative:
            raise ValueError(f"'{text}' is not a valid integer: hex values cannot be negative")
        literal, pattern, base = literal[2:], _HEX_DIGITS, 16
    elif literal.startswith("0n"):
        literal = literal[2:]

    if not pattern.fullmatch(literal):
        raise ValueError(f"'{text}' is not a valid integer")

    value = int(literal, base)
    return -value if negative else value


class IntegerArgumentType(ArgumentType):
    """Integer converter, optionally bounded to a bit width."""

    def __init__(self, type_hint: Any = int, width: IntegerWidth | None = None):
        super().__init__(type_hint)
        self.width = width

    @property
    def display_name(self) -> str:
        return self.width.name if self.width else "int"

    @property
    def default_value(self) -> int:
        return 0

    def parse(self, context: ParseContext, text: str) -> int:
        signed = self.width.signed if self.width else True
        value = parse_integer(text, signed=signed)
        if self.width and not self.width.minimum <= value <= self.width.maximum:
            raise ValueError(
                f"'{text.strip()}' is out of range for {self.width.name} "
                f"[{self.width.minimum}, {self.width.maximum}]"
            )
        return value

    def format(self, value: Any) -> str:
        return str(int(value))


class FloatArgumentType(ArgumentType):
    """Floating-point converter."""

    def __init__(self, type_hint: Any = float):
        super().__init__(type_hint)

    @property
    def default_value(self) -> float:
        return 0.0

    def parse(self, context: ParseContext, text: str) -> float:
        literal = text.strip(ASCII_WHITESPACE)
        if not _REAL_NUMBER.fullmatch(literal):
            raise ValueError(f"'{text}' is not a valid number")
        value = float(literal)
        if math.isinf(value) and literal.lower().lstrip("-") not in ("inf", "infinity"):
            raise ValueError(f"'{text}' is out of range for float")
        return value

    def format(self, value: Any) -> str:
        return repr(float(value))


class DecimalArgumentType(ArgumentType):
    """`decimal.Decimal` converter."""

    def __init__(self, type_hint: Any = Decimal):
        super().__init__(type_hint)

    @property
    def default_value(self) -> Decimal:
        return Decimal(0)

    def parse(self, context: ParseContext, text: str) -> Decimal:
        literal = text.strip(ASCII_WHITESPACE)
        if not _REAL_NUMBER.fullmatch(literal):
            raise ValueError(f"'{text}' is not a valid decimal number")
        try:
            return Decimal(literal)
        except InvalidOperation as error:
            raise ValueError(f"'{text}' is not a valid decimal number") from error

    def format(self, value: Any) -> str:
        return str(value)
