"""Typed option values and the text parsers behind them."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Callable, List

_LQUOTE = "\u2018"
_RQUOTE = "\u2019"


def _quoted(text: str) -> str:
    return f"{_LQUOTE}{text}{_RQUOTE}"


class OptionError(Exception):
    """Base class of every option error."""


class OptionSpecError(OptionError):
    """An option was declared incorrectly."""


class OptionParseError(OptionError):
    """The command line could not be parsed."""


class OptionExistsError(OptionSpecError):
    def __init__(self, option: str) -> None:
        super().__init__(f"Option {_quoted(option)} already exists")


class InvalidOptionFormatError(OptionSpecError):
    def __init__(self, fmt: str) -> None:
        super().__init__(f"Invalid option format {_quoted(fmt)}")


class OptionSyntaxError(OptionParseError):
    def __init__(self, text: str) -> None:
        super().__init__(
            f"Argument {_quoted(text)} starts with a - but has incorrect syntax"
        )


class OptionNotExistsError(OptionParseError):
    def __init__(self, option: str) -> None:
        super().__init__(f"Option {_quoted(option)} does not exist")


class MissingArgumentError(OptionParseError):
    def __init__(self, option: str) -> None:
        super().__init__(f"Option {_quoted(option)} is missing an argument")


class OptionRequiresArgumentError(OptionParseError):
    def __init__(self, option: str) -> None:
        super().__init__(f"Option {_quoted(option)} requires an argument")


class OptionNotHasArgumentError(OptionParseError):
    def __init__(self, option: str, arg: str) -> None:
        super().__init__(
            f"Option {_quoted(option)} does not take an argument, "
            f"but argument {_quoted(arg)} given"
        )


class OptionNotPresentError(OptionParseError):
    def __init__(self, option: str) -> None:
        super().__init__(f"Option {_quoted(option)} not present")


class ArgumentIncorrectTypeError(OptionParseError):
    def __init__(self, arg: str) -> None:
        super().__init__(f"Argument {_quoted(arg)} failed to parse")


class OptionRequiredError(OptionParseError):
    def __init__(self, option: str) -> None:
        super().__init__(f"Option {_quoted(option)} is required but not present")


_INTEGER_PATTERN = re.compile(r"(-)?(0x)?([0-9a-zA-Z]+)|((0x)?0)")
_TRUTHY_PATTERN = re.compile(r"(t|T)(rue)?|1")
_FALSY_PATTERN = re.compile(r"(f|F)(alse)?|0")
_FLOAT_PATTERN = re.compile(
    r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
)


def parse_integer(text: str, bits: int = 32, signed: bool = True) -> int:
    """Parse a decimal or 0x-prefixed hexadecimal integer of a given width."""
    match = _INTEGER_PATTERN.fullmatch(text)
    if match is None:
        raise ArgumentIncorrectTypeError(text)
    if match.group(4):
        return 0

    negative = bool(match.group(1))
    base = 16 if match.group(2) else 10
    limit = 1 << bits
    result = 0
    for char in match.group(3):
        try:
            digit = int(char, base)
        except ValueError:
            raise ArgumentIncorrectTypeError(text) from None
        result = result * base + digit
        if result >= limit:
            raise ArgumentIncorrectTypeError(text)

    if signed:
        bound = 1 << (bits - 1)
        if result > (bound if negative else bound - 1):
            raise ArgumentIncorrectTypeError(text)
    elif negative:
        raise ArgumentIncorrectTypeError(text)
    return -result if negative else result


def parse_bool(text: str) -> bool:
    """Parse t/true/1 or f/false/0 (first letter in either case)."""
    if _TRUTHY_PATTERN.fullmatch(text):
        return True
    if _FALSY_PATTERN.fullmatch(text):
        return False
    raise ArgumentIncorrectTypeError(text)


def parse_float(text: str) -> float:
    """Parse the leading number of ``text``; trailing text is ignored."""
    match = _FLOAT_PATTERN.match(text)
    if match is None:
        raise ArgumentIncorrectTypeError(text)
    return float(match.group(0))


def parse_list(text: str, parser: Callable[[str], Any]) -> List[Any]:
    """Split ``text`` on commas and parse each piece; a trailing empty piece is dropped."""
    pieces = text.split(",")
    if pieces[-1] == "":
        pieces.pop()
    return [parser(piece) for piece in pieces]


class ValueKind(Enum):
    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    BOOL = "bool"
    STRING = "string"
    FLOAT = "float"
    DOUBLE = "double"


_INTEGER_KINDS = {
    ValueKind.INT8: (8, True),
    ValueKind.UINT8: (8, False),
    ValueKind.INT16: (16, True),
    ValueKind.UINT16: (16, False),
    ValueKind.INT32: (32, True),
    ValueKind.UINT32: (32, False),
    ValueKind.INT64: (64, True),
    ValueKind.UINT64: (64, False),
}


def _parse_as(kind: ValueKind, text: str) -> Any:
    if kind in _INTEGER_KINDS:
        bits, signed = _INTEGER_KINDS[kind]
        return parse_integer(text, bits, signed)
    if kind is ValueKind.BOOL:
        return parse_bool(text)
    if kind is ValueKind.STRING:
        return text
    return parse_float(text)


def _empty(kind: ValueKind) -> Any:
    if kind is ValueKind.BOOL:
        return False
    if kind is ValueKind.STRING:
        return ""
    if kind in (ValueKind.FLOAT, ValueKind.DOUBLE):
        return 0.0
    return 0


class Value:
    """Description and storage of one option's typed value."""

    def __init__(self, kind: ValueKind, container: bool = False) -> None:
        self.kind = kind
        self.is_container = container
        self.has_default = False
        self.default_text = ""
        self.has_implicit = False
        self.implicit_text = ""
        self.result: Any = [] if container else _empty(kind)
        if self.is_boolean:
            self.has_default = True
            self.default_text = "false"
            self.has_implicit = True
            self.implicit_text = "true"

    def __repr__(self) -> str:
        return f"Value({self.kind.name}, container={self.is_container}, result={self.result!r})"

    @property
    def is_boolean(self) -> bool:
        return self.kind is ValueKind.BOOL and not self.is_container

    def default_value(self, text: str) -> "Value":
        """Set the text used when the option is absent."""
        self.has_default = True
        self.default_text = text
        return self

    def implicit_value(self, text: str) -> "Value":
        """Set the text used when the option is given without an argument."""
        self.has_implicit = True
        self.implicit_text = text
        return self

    def no_implicit_value(self) -> "Value":
        self.has_implicit = False
        return self

    def parse(self, text: str) -> None:
        """Parse ``text`` into the stored result; lists are extended."""
        if self.is_container:
            self.result.extend(parse_list(text, lambda piece: _parse_as(self.kind, piece)))
        else:
            self.result = _parse_as(self.kind, text)

    def parse_default(self) -> None:
        self.parse(self.default_text)

    def clone(self) -> "Value":
        """Copy the description with fresh, empty storage."""
        copy = Value(self.kind, self.is_container)
        copy.has_default = self.has_default
        copy.default_text = self.default_text
        copy.has_implicit = self.has_implicit
        copy.implicit_text = self.implicit_text
        return copy


def value(kind: ValueKind) -> Value:
    """Create a scalar value of the given kind."""
    return Value(kind)


def list_value(kind: ValueKind) -> Value:
    """Create a comma-separated list value of the given kind."""
    return Value(kind, container=True)