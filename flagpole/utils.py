"""
Flagpole utilities shared by the option, registry, scanner and parser layers.

- Unset: falsy singleton for "not provided", distinct from None.
- coalesce(value, default=None): replace Unset, keep every other value.
- rename(function, name) / @rename(name): stable names for generated methods.
- mirror(name): read-only property over self._<name>; containers are copied.
- ordinal(number): "first", "second", ..., "11th", "22nd".
- quote(text, char=False): fault-message quoting, 'v' for short flags and
  "text" for long names and values.

    >>> coalesce(Unset, "fallback"), coalesce(False, True)
    ('fallback', False)
    >>> quote("v", char=True), quote("verbose")
    ("'v'", '"verbose"')
"""
import functools
from collections.abc import Mapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel: one falsy instance per process, sealed.

    Used where None is a legitimate user value (a default of None, a missing
    converter) and the API still has to tell "not provided" apart.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    object, unless it is Unset; then default. None, 0, "" and False are kept.
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    Give a callable a stable __name__ and __qualname__.

    rename(function, name) renames in place and returns the function;
    rename(name) returns a decorator doing the same. Parser.int,
    Parser.string_var and the other per-kind methods are generated, so they get
    their names here.
    """
    match parameters:
        case (str() as name,):
            return lambda function: rename(function, name)
        case (function, str() as name) if callable(function):
            try:
                function.__name__ = function.__qualname__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return function
        case (_, _):
            raise TypeError("rename() takes a callable and a string name")
        case (_,):
            raise TypeError("@rename() argument must be a string")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _detach(value):
    # fresh containers all the way down; strings and scalars are shared
    match value:
        case str() | bytes():
            return value
        case Mapping():
            return {key: _detach(item) for key, item in value.items()}
        case Sequence():
            return [_detach(item) for item in value]
        case Set():
            return {_detach(item) for item in value}
    return value


def mirror(name, /):
    """
    Read-only property returning self._<name>.

    Container values are copied on every read, so positionals = mirror(
    "positionals") hands out lists the caller may change freely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _detach(getattr(self, "_" + name))

    return property(getter)


def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


_ESCAPES = {
    "\\": "\\\\",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def _escape(char, quote, /):
    if char == quote:
        return "\\" + char
    try:
        return _ESCAPES[char]
    except KeyError:
        pass
    if not char.isprintable():
        codepoint = ord(char)
        if codepoint < 0x80:
            return "\\x%02x" % codepoint
        if codepoint < 0x10000:
            return "\\u%04x" % codepoint
        return "\\U%08x" % codepoint
    return char


def quote(text, /, *, char=False):
    """
    Quote a flag identifier or raw value for fault messages.

    Short flags (char=True) are shown between single quotes ('v'), long names
    and values between double quotes ("verbose"). Control and other
    non-printable characters are escaped so the message stays on one line.

    Examples
    - quote("-", char=True) -> "'-'"
    - quote("servers")      -> '"servers"'
    """
    if not isinstance(text, str):
        raise TypeError("quote() argument must be a string")
    mark = "'" if char else '"'
    return mark + "".join(_escape(char, mark) for char in text) + mark


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Notes
- Singleton: there is only one Unset instance.
- Falsy, but not equal to None, 0 or False.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "ordinal",
    "quote",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
