"""
Usage rendering: one entry per declared option, in declaration order.

Entry layout
    -l, --limit int (default: 10)      short and long
    -t string (default: "host3")       short only
    --timeout duration (default: 2m0s) long only
    -v, --verbose                      booleans show neither tag nor default
followed, when the option has a description, by the description wrapped with
LineWrapper(max=width, prefix="    ").

Each line above starts with two spaces. Defaults are rendered with the kind's
formatter, so they read back as the same value; strings are quoted.

render() returns plain text. renderable() builds the same layout as rich Text
using the palette below; a __styles__ mapping in __main__ overrides entries and
colorful=False drops the styles.

Palette keys
- short-name, long-name, separator, kind-tag, default-label, default-value,
  description
"""
from collections import defaultdict
from datetime import timedelta

from rich.text import Text

from .kinds import Arity, Kind
from .linewrap import LineWrapper
from .utils import *


def _literal(option):
    """
    Default value as shown in usage, or None when there is nothing to show.
    """
    value = option.default
    if value is None or option.arity is Arity.NOTHING:
        return None
    match option.kind:
        case Kind.STRING if isinstance(value, str):
            return quote(value)
        case Kind.DURATION if isinstance(value, timedelta):
            return option.kind.format(value)
        case Kind.FLOAT if isinstance(value, float | int) and not isinstance(value, bool):
            return option.kind.format(float(value))
        case _:
            return str(value)


def _descr(option, width):
    descr = option.descr
    if not descr:
        return ""
    return LineWrapper(max=width, prefix="    ").wrap(descr.plain if isinstance(descr, Text) else descr)


def render(options, /, width=80):
    """
    Plain-text usage entries for options (any iterable of Option).
    """
    output = []
    for option in options:
        line = "  " + option.spelling
        if option.arity is not Arity.NOTHING:
            line += " " + option.kind.label
        if (literal := _literal(option)) is not None:
            line += f" (default: {literal})"
        output.append(line + "\n")
        output.append(_descr(option, width))
    return "".join(output)


def renderable(options, /, width=80, colorful=True):
    """
    Rich Text version of render(); same characters, styled.
    """
    styles = defaultdict(str, {
        # === Names ===
        "short-name": "bold #22C55E",  # GREEN short flags
        "long-name": "bold #00E6FF",  # CYAN long flags
        "separator": "#4B5563",  # Slate comma

        # === Values ===
        "kind-tag": "bold #FFD600",  # AMBER value kind
        "default-label": "#737373",  # Dim gray
        "default-value": "#FF4D94",  # MAGENTA-PINK default

        # === Body ===
        "description": "#9CA3AF",  # Muted gray
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    output = Text()
    for option in options:
        output.append("  ")
        if option.short is not None:
            output.append("-" + option.short, styler("short-name"))
            if option.long is not None:
                output.append(", ", styler("separator"))
        if option.long is not None:
            output.append("--" + option.long, styler("long-name"))
        if option.arity is not Arity.NOTHING:
            output.append(" ").append(option.kind.label, styler("kind-tag"))
        if (literal := _literal(option)) is not None:
            output.append(" (default: ", styler("default-label"))
            output.append(literal, styler("default-value"))
            output.append(")", styler("default-label"))
        output.append("\n")
        output.append(_descr(option, width), styler("description"))
    return output


__all__ = (
    "render",
    "renderable",
)
