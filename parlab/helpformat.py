"""Formatting of option lines and wrapped descriptions for help text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class HelpOptionDetails:
    """Everything the help text needs to know about one option."""

    s: str
    l: str
    desc: str
    has_default: bool = False
    default_value: str = ""
    has_implicit: bool = False
    implicit_value: str = ""
    arg_help: str = ""
    is_container: bool = False
    is_boolean: bool = False


@dataclass
class HelpGroupDetails:
    """The options of one help group."""

    name: str = ""
    description: str = ""
    options: List[HelpOptionDetails] = field(default_factory=list)


def format_option(details: HelpOptionDetails) -> str:
    """Render the left-hand column of an option, e.g. ``  -n, --name arg``."""
    result = "  "
    result += f"-{details.s}," if details.s else "   "
    if details.l:
        result += f" --{details.l}"

    arg = details.arg_help or "arg"
    if not details.is_boolean:
        if details.has_implicit:
            result += f" [={arg}(={details.implicit_value})]"
        else:
            result += f" {arg}"
    return result


def format_description(details: HelpOptionDetails, start: int, width: int) -> str:
    """Wrap an option's description to ``width`` columns.

    Continuation lines are indented by ``start`` spaces. A default value is
    appended unless the option is a boolean defaulting to ``false``.
    """
    desc = details.desc
    if details.has_default and (
        not details.is_boolean or details.default_value != "false"
    ):
        desc += f" (default: {details.default_value})"

    pieces: List[str] = []
    indent = " " * start
    start_line = 0
    last_space = 0
    size = 0
    current = 0
    for current, char in enumerate(desc):
        if char == " ":
            last_space = current

        if char == "\n":
            start_line = current + 1
            last_space = start_line
        elif size > width:
            if last_space == start_line:
                pieces.append(desc[start_line:current + 1])
                pieces.append("\n" + indent)
                start_line = current + 1
                last_space = start_line
            else:
                pieces.append(desc[start_line:last_space])
                pieces.append("\n" + indent)
                start_line = last_space + 1
            size = 0
        else:
            size += 1

    pieces.append(desc[start_line:])
    return "".join(pieces)