"""
Value kinds: what an option stores and how its text becomes a value.

Overview
- Arity
  • NOTHING: presence alone sets the option (booleans).
  • TEXT: the option needs exactly one textual value, attached (-l4, --limit=4)
    or taken from the next argument (-l 4, --limit 4).

- Kind
  • One member per supported value kind: BOOL, DURATION, FLOAT, INT, INT64,
    STRING, UINT, UINT64.
  • Kind("int") looks a member up by its label; the label is also the tag shown
    in usage lines and the name of the generated declaration methods.
  • kind.convert(text) parses text into a value, raising ValueError with a short
    reason ("invalid syntax", "value out of range", ...).
  • kind.format(value) renders a value back into a literal that converts to an
    equivalent value.

Conversion rules
- bool: 1 t T TRUE true True / 0 f F FALSE false False.
- duration: sequence of decimal numbers with unit suffix (ns, us, µs, μs, ms,
  s, m, h), optional leading sign, or a bare "0"; e.g. "300ms", "-1.5h",
  "2h45m". Stored as datetime.timedelta (microsecond resolution).
- float: base-10 decimal or exponent notation, inf/infinity/nan.
- int: base-10 signed, 32-bit range.  int64: base-10 signed, 64-bit range.
- uint: base-10 unsigned parsed on the 64-bit path, then truncated to 32 bits.
- uint64: base-10 unsigned, 64-bit range.
- string: stored verbatim.

Formatting
    >>> Kind.DURATION.format(Kind.DURATION.convert("2m"))
    '2m0s'
    >>> Kind.FLOAT.format(Kind.FLOAT.convert("3.14"))
    '3.14'
"""
import math
import re
from datetime import timedelta
from enum import Enum, IntEnum
from fractions import Fraction


class Arity(IntEnum):
    """
    How many textual values an option consumes.
    """
    NOTHING = 0
    TEXT = 1


class Kind(Enum):
    """
    Supported value kinds (label, arity, zero value).
    """
    BOOL = "bool", Arity.NOTHING, False
    DURATION = "duration", Arity.TEXT, timedelta(0)
    FLOAT = "float", Arity.TEXT, 0.0
    INT = "int", Arity.TEXT, 0
    INT64 = "int64", Arity.TEXT, 0
    STRING = "string", Arity.TEXT, ""
    UINT = "uint", Arity.TEXT, 0
    UINT64 = "uint64", Arity.TEXT, 0

    def __new__(cls, label, arity, zero):
        self = object.__new__(cls)
        self._value_ = label
        self.arity = arity
        self.zero = zero
        return self

    @property
    def label(self):
        return self.value

    def convert(self, text, /):
        """
        Parse text into a value of this kind (ValueError on bad text).
        """
        if not isinstance(text, str):
            raise TypeError(f"{self.label} conversion requires a string")
        return _converters[self](text)

    def format(self, value, /):
        """
        Render a value of this kind as a literal that converts back to it.
        """
        return _formatters[self](value)

    def __repr__(self):
        return f"<kind {self.label!r}>"


_INT32 = (-(1 << 31), (1 << 31) - 1)
_INT64 = (-(1 << 63), (1 << 63) - 1)
_UINT32_MASK = (1 << 32) - 1
_UINT64_MAX = (1 << 64) - 1

_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"[0-9]+")
_FLOATING = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)", re.IGNORECASE)


def _parse_bool(text):
    if text in ("1", "t", "T", "TRUE", "true", "True"):
        return True
    if text in ("0", "f", "F", "FALSE", "false", "False"):
        return False
    raise ValueError("invalid syntax")


def _parse_signed(text, bounds):
    if not _SIGNED.fullmatch(text):
        raise ValueError("invalid syntax")
    value = int(text, 10)
    if not bounds[0] <= value <= bounds[1]:
        raise ValueError("value out of range")
    return value


def _parse_unsigned(text):
    if not _UNSIGNED.fullmatch(text):
        raise ValueError("invalid syntax")
    value = int(text, 10)
    if value > _UINT64_MAX:
        raise ValueError("value out of range")
    return value


def _parse_float(text):
    if not _FLOATING.fullmatch(text):
        raise ValueError("invalid syntax")
    value = float(text)
    # overflow turns finite literals into infinities
    if math.isinf(value) and "inf" not in text.lower():
        raise ValueError("value out of range")
    return value


# nanoseconds per unit
_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}

_SEGMENT = re.compile(r"([0-9]*(?:\.[0-9]*)?)([^0-9.]*)")


def parse_duration(text, /):
    """
    Parse a duration literal ("1h30m", "-1.5s", "250ms", "0") into a timedelta.

    Fractional parts are exact (computed with Fraction). The total must be a
    whole number of microseconds, the resolution of timedelta, and must fit a
    signed 64-bit nanosecond count.
    """
    if not isinstance(text, str):
        raise TypeError("parse_duration() argument must be a string")

    literal, negative = text, False
    if literal[:1] in ("-", "+"):
        negative = literal[0] == "-"
        literal = literal[1:]

    if literal == "0":
        return timedelta(0)
    if not literal:
        raise ValueError("invalid duration")

    total, position = Fraction(0), 0
    while position < len(literal):
        match = _SEGMENT.match(literal, position)
        number, unit = match.groups()
        if not any(char.isdigit() for char in number):
            raise ValueError("invalid duration")
        if not unit:
            raise ValueError("missing unit in duration")
        try:
            scale = _UNITS[unit]
        except KeyError:
            raise ValueError("unknown unit %r in duration" % unit) from None
        total += Fraction(number) * scale
        position = match.end()

    if total > _INT64[1] + negative:
        raise ValueError("invalid duration")
    if total % 1_000:
        raise ValueError("invalid duration (finer than a microsecond)")
    microseconds = int(total) // 1_000
    return timedelta(microseconds=-microseconds if negative else microseconds)


def _decimal(amount, scale):
    """
    amount/scale as a decimal string without trailing fractional zeros.
    """
    whole, fraction = divmod(amount, scale)
    if not fraction:
        return str(whole)
    digits = str(fraction).rjust(len(str(scale)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}"


def format_duration(value, /):
    """
    Render a timedelta the conventional way: "0s", "1.5ms", "2m0s", "1h0m0s".
    """
    if not isinstance(value, timedelta):
        raise TypeError("format_duration() argument must be a timedelta")

    nanoseconds = (value // timedelta(microseconds=1)) * 1_000
    sign = "-" if nanoseconds < 0 else ""
    nanoseconds = abs(nanoseconds)

    if not nanoseconds:
        return "0s"

    if nanoseconds < _UNITS["s"]:
        # sub-second durations use the largest unit that keeps a whole part
        for unit, scale in (("ms", _UNITS["ms"]), ("µs", _UNITS["µs"]), ("ns", _UNITS["ns"])):
            if nanoseconds >= scale:
                return sign + _decimal(nanoseconds, scale) + unit

    hours, rest = divmod(nanoseconds, _UNITS["h"])
    minutes, rest = divmod(rest, _UNITS["m"])
    text = _decimal(rest, _UNITS["s"]) + "s"
    if hours or minutes:
        text = f"{minutes}m" + text
    if hours:
        text = f"{hours}h" + text
    return sign + text


def _format_float(value):
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


_converters = {
    Kind.BOOL: _parse_bool,
    Kind.DURATION: parse_duration,
    Kind.FLOAT: _parse_float,
    Kind.INT: lambda text: _parse_signed(text, _INT32),
    Kind.INT64: lambda text: _parse_signed(text, _INT64),
    Kind.STRING: lambda text: text,
    Kind.UINT: lambda text: _parse_unsigned(text) & _UINT32_MASK,
    Kind.UINT64: _parse_unsigned,
}

_formatters = {
    Kind.BOOL: lambda value: "true" if value else "false",
    Kind.DURATION: format_duration,
    Kind.FLOAT: _format_float,
    Kind.INT: str,
    Kind.INT64: str,
    Kind.STRING: str,
    Kind.UINT: str,
    Kind.UINT64: str,
}


__all__ = (
    "Arity",
    "Kind",
    "parse_duration",
    "format_duration",
)
