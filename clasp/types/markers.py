# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
`Annotated` markers that refine how a plain Python type is converted.

Python has a single unbounded `int` and no character type, so sized integers and
single characters are expressed as annotated aliases:

    count: Annotated[UInt16, Named()]
    separator: Annotated[Char, Named()]

`Converter(...)` attaches an explicit converter to one declaration, overriding
whatever the registry would pick for the underlying type.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from clasp.types.base import ArgumentType


@dataclass(frozen=True)
class IntegerWidth:
    """Bit width and signedness of an integer argument."""

    bits: int
    signed: bool = True

    @property
    def minimum(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def maximum(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    @property
    def name(self) -> str:
        return f"{'Int' if self.signed else 'UInt'}{self.bits}"


@dataclass(frozen=True)
class CharMarker:
    """Marks a `str` argument that must hold exactly one character."""


@dataclass(frozen=True)
class Converter:
    """Attaches an explicit converter to a single declaration."""

    argument_type: ArgumentType


Int8 = Annotated[int, IntegerWidth(8)]
Int16 = Annotated[int, IntegerWidth(16)]
Int32 = Annotated[int, IntegerWidth(32)]
Int64 = Annotated[int, IntegerWidth(64)]
UInt8 = Annotated[int, IntegerWidth(8, signed=False)]
UInt16 = Annotated[int, IntegerWidth(16, signed=False)]
UInt32 = Annotated[int, IntegerWidth(32, signed=False)]
UInt64 = Annotated[int, IntegerWidth(64, signed=False)]
Char = Annotated[str, CharMarker()]
