# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentKind` and `Multiplicity`, the enums describing where an
argument is matched and how many times it may occur.

Both support alias coercion for config-friendly values:

    Multiplicity("required") → Multiplicity.REQUIRED_ONCE
    Multiplicity("*")        → Multiplicity.ZERO_OR_MORE
    Multiplicity("+")        → Multiplicity.ONE_OR_MORE
    ArgumentKind("flag")     → ArgumentKind.NAMED
"""
from __future__ import annotations

from enum import Enum


class _AliasedEnum(Enum):
    @classmethod
    def _get_alias(cls, value: str) -> str:
        return value

    @classmethod
    def _missing_(cls, value: object):
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower().replace("-", "_")
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


class ArgumentKind(_AliasedEnum):
    """Whether an argument is matched by position or by name.

    Aliases:
        - "flag", "option" → "named"
        - "arg" → "positional"
    """

    POSITIONAL = "positional"
    NAMED = "named"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {"flag": "named", "option": "named", "arg": "positional"}
        return aliases.get(value, value)


class Multiplicity(_AliasedEnum):
    """How many times an argument may (or must) occur.

    Members:
        REQUIRED_ONCE: Exactly once.
        AT_MOST_ONCE: Zero or one time.
        ZERO_OR_MORE: Any number of times; collection types only.
        ONE_OR_MORE: At least once; collection types only.

    Aliases:
        - "required", "1" → "required_once"
        - "optional", "?" → "at_most_once"
        - "multiple", "*" → "zero_or_more"
        - "+" → "one_or_more"
    """

    REQUIRED_ONCE = "required_once"
    AT_MOST_ONCE = "at_most_once"
    ZERO_OR_MORE = "zero_or_more"
    ONE_OR_MORE = "one_or_more"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "required": "required_once",
            "1": "required_once",
            "optional": "at_most_once",
            "?": "at_most_once",
            "multiple": "zero_or_more",
            "*": "zero_or_more",
            "+": "one_or_more",
        }
        return aliases.get(value, value)

    @property
    def is_required(self) -> bool:
        return self in (Multiplicity.REQUIRED_ONCE, Multiplicity.ONE_OR_MORE)

    @property
    def allows_multiple(self) -> bool:
        return self in (Multiplicity.ZERO_OR_MORE, Multiplicity.ONE_OR_MORE)
