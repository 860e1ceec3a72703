"""Command-line option declarations, parsing and help text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .helpformat import (
    HelpGroupDetails,
    HelpOptionDetails,
    format_description,
    format_option,
)
from .optvalues import (
    InvalidOptionFormatError,
    MissingArgumentError,
    OptionExistsError,
    OptionNotExistsError,
    OptionNotPresentError,
    OptionRequiresArgumentError,
    OptionSyntaxError,
    Value,
    ValueKind,
    value as make_value,
)

_OPTION_LONGEST = 30
_OPTION_DESC_GAP = 2
_HELP_WIDTH = 76

_OPTION_MATCHER = re.compile(
    r"--([A-Za-z0-9][-_A-Za-z0-9]+)(=(.*))?|-([A-Za-z0-9]+)", re.DOTALL
)
_OPTION_SPECIFIER = re.compile(r"(([A-Za-z0-9]),)?[ ]*([A-Za-z0-9][-_A-Za-z0-9]*)?")


@dataclass(eq=False)
class _OptionDetails:
    short: str
    long: str
    desc: str
    value: Value


class KeyValue:
    """One option occurrence, in command-line order."""

    def __init__(self, key: str, value: str) -> None:
        self.key = key
        self.value = value

    def __repr__(self) -> str:
        return f"KeyValue({self.key!r}, {self.value!r})"

    def as_kind(self, kind: ValueKind) -> Any:
        """Parse the raw argument text as a value of ``kind``."""
        holder = Value(kind)
        holder.parse(self.value)
        return holder.result


class OptionValue:
    """Parsed state of one option."""

    def __init__(self) -> None:
        self._value: Optional[Value] = None
        self._count = 0
        self._default = False

    def _ensure_value(self, details: _OptionDetails) -> Value:
        if self._value is None:
            self._value = details.value.clone()
        return self._value

    def _parse(self, details: _OptionDetails, text: str) -> None:
        storage = self._ensure_value(details)
        self._count += 1
        storage.parse(text)

    def _parse_default(self, details: _OptionDetails) -> None:
        storage = self._ensure_value(details)
        self._default = True
        storage.parse_default()

    def count(self) -> int:
        """How many times the option was given."""
        return self._count

    def has_default(self) -> bool:
        """True when the value came from the option's default."""
        return self._default

    def value(self) -> Any:
        """The parsed value; raise ValueError if there is none."""
        if self._value is None:
            raise ValueError("No value")
        return self._value.result


class ParseResult:
    """Outcome of parsing a command line against declared options."""

    def __init__(
        self,
        options: Dict[str, _OptionDetails],
        positional: Sequence[str],
        allow_unrecognised: bool,
        argv: Sequence[str],
    ) -> None:
        self._options = options
        self._positional = list(positional)
        self._next_positional = 0
        self._allow_unrecognised = allow_unrecognised
        self._results: Dict[_OptionDetails, OptionValue] = {}
        self._sequential: List[KeyValue] = []
        self.unmatched: List[str] = []
        self._parse(list(argv))

    def count(self, name: str) -> int:
        """How many times the named option was given; 0 if unknown."""
        details = self._options.get(name)
        if details is None:
            return 0
        return self._result(details).count()

    def __getitem__(self, name: str) -> OptionValue:
        details = self._options.get(name)
        if details is None:
            raise OptionNotPresentError(name)
        return self._result(details)

    def arguments(self) -> List[KeyValue]:
        """Every parsed option occurrence, in order."""
        return list(self._sequential)

    def _result(self, details: _OptionDetails) -> OptionValue:
        return self._results.setdefault(details, OptionValue())

    def _parse_option(self, details: _OptionDetails, arg: str) -> None:
        self._result(details)._parse(details, arg)
        self._sequential.append(KeyValue(details.long, arg))

    def _add_to_option(self, name: str, arg: str) -> None:
        details = self._options.get(name)
        if details is None:
            raise OptionNotExistsError(name)
        self._parse_option(details, arg)

    def _consume_positional(self, arg: str) -> bool:
        while self._next_positional < len(self._positional):
            name = self._positional[self._next_positional]
            details = self._options.get(name)
            if details is None:
                raise OptionNotExistsError(name)
            if details.value.is_container:
                self._add_to_option(name, arg)
                return True
            self._next_positional += 1
            if self._result(details).count() == 0:
                self._add_to_option(name, arg)
                return True
        return False

    def _checked_parse_arg(
        self, args: List[str], current: int, details: _OptionDetails, name: str
    ) -> int:
        if details.value.has_implicit:
            self._parse_option(details, details.value.implicit_text)
            return current
        if current + 1 >= len(args):
            raise MissingArgumentError(name)
        self._parse_option(details, args[current + 1])
        return current + 1

    def _parse(self, args: List[str]) -> None:
        current = 0
        consume_remaining = False

        while current < len(args):
            arg = args[current]
            if arg == "--":
                consume_remaining = True
                current += 1
                break

            match = _OPTION_MATCHER.fullmatch(arg)
            if match is None:
                if arg.startswith("-") and len(arg) > 1 and not self._allow_unrecognised:
                    raise OptionSyntaxError(arg)
                if not self._consume_positional(arg):
                    self.unmatched.append(arg)
            elif match.group(4):
                letters = match.group(4)
                for i, letter in enumerate(letters):
                    details = self._options.get(letter)
                    if details is None:
                        if self._allow_unrecognised:
                            continue
                        raise OptionNotExistsError(letter)
                    if i + 1 == len(letters):
                        current = self._checked_parse_arg(args, current, details, letter)
                    elif details.value.has_implicit:
                        self._parse_option(details, details.value.implicit_text)
                    else:
                        raise OptionRequiresArgumentError(letter)
            else:
                name = match.group(1)
                details = self._options.get(name)
                if details is None:
                    if self._allow_unrecognised:
                        self.unmatched.append(arg)
                        current += 1
                        continue
                    raise OptionNotExistsError(name)
                if match.group(2) is not None:
                    self._parse_option(details, match.group(3))
                else:
                    current = self._checked_parse_arg(args, current, details, name)

            current += 1

        for details in self._options.values():
            store = self._result(details)
            if details.value.has_default and not store.count() and not store.has_default():
                store._parse_default(details)

        if consume_remaining:
            while current < len(args) and self._consume_positional(args[current]):
                current += 1
            self.unmatched.extend(args[current:])


class _OptionAdder:
    def __init__(self, options: "Options", group: str) -> None:
        self._options = options
        self._group = group

    def __call__(
        self,
        opts: str,
        desc: str,
        value: Optional[Value] = None,
        arg_help: str = "",
    ) -> "_OptionAdder":
        self._options.add_option(self._group, opts, desc, value, arg_help)
        return self


class Options:
    """A set of declared options, grouped for help output."""

    def __init__(self, program: str, help_string: str = "") -> None:
        self.program = program
        self.help_string = help_string
        self._custom_help = "[OPTION...]"
        self._positional_help = "positional parameters"
        self._show_positional = False
        self._allow_unrecognised = False
        self._options: Dict[str, _OptionDetails] = {}
        self._positional: List[str] = []
        self._positional_set: set = set()
        self._help: Dict[str, HelpGroupDetails] = {}

    def positional_help(self, text: str) -> "Options":
        self._positional_help = text
        return self

    def custom_help(self, text: str) -> "Options":
        self._custom_help = text
        return self

    def show_positional_help(self) -> "Options":
        self._show_positional = True
        return self

    def allow_unrecognised_options(self) -> "Options":
        self._allow_unrecognised = True
        return self

    def add_options(
        self, group: str = "", specs: Optional[Iterable[Sequence[Any]]] = None
    ) -> Optional[_OptionAdder]:
        """Add options given as ``(opts, desc[, value[, arg_help]])`` tuples.

        Without ``specs``, return a callable that adds one option per call.
        """
        adder = _OptionAdder(self, group)
        if specs is None:
            return adder
        for spec in specs:
            adder(*spec)
        return None

    def add_option(
        self,
        group: str,
        opts: str,
        desc: str,
        value: Optional[Value] = None,
        arg_help: str = "",
    ) -> None:
        """Declare one option from a spec such as ``"n,name"`` or ``"name"``."""
        if value is None:
            value = make_value(ValueKind.BOOL)
        match = _OPTION_SPECIFIER.fullmatch(opts)
        if match is None:
            raise InvalidOptionFormatError(opts)
        short = match.group(2) or ""
        long = match.group(3) or ""
        if not short and not long:
            raise InvalidOptionFormatError(opts)
        if len(long) == 1 and short:
            raise InvalidOptionFormatError(opts)
        if len(long) == 1:
            short, long = long, short

        details = _OptionDetails(short, long, desc, value)
        if short:
            self._add_one_option(short, details)
        if long:
            self._add_one_option(long, details)

        group_details = self._help.setdefault(group, HelpGroupDetails(name=group))
        group_details.options.append(
            HelpOptionDetails(
                s=short,
                l=long,
                desc=desc,
                has_default=value.has_default,
                default_value=value.default_text,
                has_implicit=value.has_implicit,
                implicit_value=value.implicit_text,
                arg_help=arg_help,
                is_container=value.is_container,
                is_boolean=value.is_boolean,
            )
        )

    def _add_one_option(self, name: str, details: _OptionDetails) -> None:
        if name in self._options:
            raise OptionExistsError(name)
        self._options[name] = details

    def parse_positional(self, *args: Any) -> None:
        """Route bare arguments, in turn, into the named options."""
        names: List[str] = []
        for arg in args:
            if isinstance(arg, str):
                names.append(arg)
            else:
                names.extend(arg)
        self._positional = names
        self._positional_set.update(names)

    def parse(self, argv: Sequence[str]) -> ParseResult:
        """Parse the arguments (without the program name)."""
        return ParseResult(
            self._options, self._positional, self._allow_unrecognised, argv
        )

    def _hidden(self, details: HelpOptionDetails) -> bool:
        return details.l in self._positional_set and not self._show_positional

    def _help_one_group(self, name: str) -> str:
        group = self._help.get(name)
        if group is None:
            return ""
        result = f" {name} options:\n" if name else ""
        shown = [o for o in group.options if not self._hidden(o)]
        formatted = [format_option(o) for o in shown]
        longest = min(max((len(s) for s in formatted), default=0), _OPTION_LONGEST)
        allowed = _HELP_WIDTH - longest - _OPTION_DESC_GAP
        column = longest + _OPTION_DESC_GAP
        for details, text in zip(shown, formatted):
            description = format_description(details, column, allowed)
            result += text
            if len(text) > longest:
                result += "\n" + " " * column
            else:
                result += " " * (column - len(text))
            result += description + "\n"
        return result

    def help(self, groups: Optional[Sequence[str]] = None) -> str:
        """Render the usage text for the given groups, or all of them."""
        result = f"{self.help_string}\nUsage:\n  {self.program} {self._custom_help}"
        if self._positional and self._positional_help:
            result += " " + self._positional_help
        result += "\n\n"
        names = list(groups) if groups else self.groups()
        for i, name in enumerate(names):
            text = self._help_one_group(name)
            if not text:
                continue
            result += text
            if i < len(names) - 1:
                result += "\n"
        return result

    def groups(self) -> List[str]:
        """Names of the help groups, sorted."""
        return sorted(self._help)

    def group_help(self, group: str) -> HelpGroupDetails:
        """Help details of one group; KeyError if it does not exist."""
        return self._help[group]