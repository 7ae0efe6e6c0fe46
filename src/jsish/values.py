"""Jsish runtime values — the four variants an expression can reduce to."""

from __future__ import annotations

from dataclasses import dataclass


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Value:
    """A runtime value with a fixed variant."""

    def type_name(self) -> str:
        raise NotImplementedError

    def to_string(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class VNumber(Value):
    """Signed 64-bit integer."""

    value: int

    def type_name(self) -> str:
        return "number"

    def to_string(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class VString(Value):
    """Immutable text."""

    value: str

    def type_name(self) -> str:
        return "string"

    def to_string(self) -> str:
        return self.value


@dataclass(frozen=True)
class VBool(Value):
    """true or false"""

    value: bool

    def type_name(self) -> str:
        return "boolean"

    def to_string(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class VUndefined(Value):
    """The single undefined value."""

    def type_name(self) -> str:
        return "undefined"

    def to_string(self) -> str:
        return "undefined"


UNDEFINED = VUndefined()
TRUE = VBool(True)
FALSE = VBool(False)


def in_int64(n: int) -> bool:
    return INT64_MIN <= n <= INT64_MAX
