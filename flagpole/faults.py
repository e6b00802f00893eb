"""
Flagpole faults (declaration and scan errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain (declaration vs. scan) to keep logs searchable.
- FlagException: base type that carries message + options and knows how to
  render itself (rich) and how to surface itself (raise or print-and-exit).
- DeclarationError family: raised while options are registered; sticky on the
  parser that produced them.
- ScanFault family: raised while an argument vector is scanned; fatal to that
  scan only.
- trigger(): central entry point to surface any fault.
- getdoc(): optional description lookup for a code from the host application.

Integration
- The registry and scanner build faults with context options
  (title, code, hint, input, index, option).
- Parser.trigger() merges runtime options (prog, shell, fancy, colorful) via
  copy.replace and then surfaces the fault: raised outside shell mode, printed
  with rich and followed by exit status 2 in shell mode.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text


console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across flagpole (stable identifiers).

    grouping
    - declaration (111xx)
      • MISSING_FLAG, INVALID_SHORT_FLAG, INVALID_LONG_FLAG,
        DUPLICATE_SHORT_FLAG, DUPLICATE_LONG_FLAG
    - scan (112xx)
      • UNKNOWN_FLAG, HYPHEN_WITHOUT_FLAGS, MALFORMED_VALUE, MISSING_VALUE,
        FLAG_ASSIGNMENT

    normalize() allows host remapping to custom labels while keeping the
    numeric codes stable.
    """
    # --- declaration errors (111xx) ---
    MISSING_FLAG          = 11101
    INVALID_SHORT_FLAG    = 11102
    INVALID_LONG_FLAG     = 11103
    DUPLICATE_SHORT_FLAG  = 11111
    DUPLICATE_LONG_FLAG   = 11112

    # --- scan errors (112xx) ---
    UNKNOWN_FLAG          = 11201
    HYPHEN_WITHOUT_FLAGS  = 11202
    MALFORMED_VALUE       = 11211
    MISSING_VALUE         = 11212
    FLAG_ASSIGNMENT       = 11213

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


_PALETTE = {
    "prog-name": "bold #E6E6F0",
    "code": "bold #00E5FF",
    "error-title": "bold #FF4DA6",
    "error-message": "#C8C8D0",
    "hint-arrow": "#9CE19C dim",
    "hint": "italic #9CE19C",
}


def _palette(colorful):
    if not colorful:
        return defaultdict(str)
    return defaultdict(str, _PALETTE | getattr(__import__("__main__"), "__styles__", {}))


def _fragment(value, style):
    match value:
        case Text() if style:
            return value
        case Text():
            return Text(value.plain)
        case None | "":
            return Text("")
    return Text(str(value), style)


class FlagException(Exception):
    """
    base of every flagpole fault.

    the message is the plain, single-line text (str(fault) returns it); the
    keyword options carry rendering and diagnostic context and are exposed
    read-only through .options.
    """

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    @property
    def code(self):
        return self.options.get("code")

    @property
    def title(self):
        return self.options.get("title", "")

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        styles = _palette(self.options.get("colorful", True))
        prog = getattr(__import__("__main__"), "__prog__", self.options.get("prog", "flagpole"))
        code = "?" if self.code is None else self.code.normalize()

        header = Text.assemble(
            "[ ", _fragment(prog, styles["prog-name"]),
            " — ", _fragment(code, styles["code"]),
            " | ", _fragment(self.title.title(), styles["error-title"]),
            " ]",
        )
        body = [_fragment(self.message, styles["error-message"])]
        if self.hint:
            body.append(Text.assemble(_fragment(" → ", styles["hint-arrow"]), _fragment(self.hint, styles["hint"])))

        if self.options.get("fancy"):
            return Panel(Group(*body), title=header, title_align="left", width=self.options.get("width"))
        return Group(header, *body)

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self from self.__cause__
        console.print(self)
        sys.exit(2)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        replica = type(self)(self.message, **{**self.options, **overrides})
        replica.__cause__ = self.__cause__
        return replica


class DeclarationError(FlagException):
    """
    a flag could not be registered; sticky on the parser that produced it.
    """


class MissingFlagError(DeclarationError): ...
class InvalidShortFlagError(DeclarationError): ...
class InvalidLongFlagError(DeclarationError): ...
class DuplicateShortFlagError(DeclarationError): ...
class DuplicateLongFlagError(DeclarationError): ...


class ScanFault(FlagException):
    """
    an argument vector could not be scanned; fatal to that scan only.

    context
    - index: 0-based position of the offending argument (None at end of input).
    - input: the offending text (flag identifier or value).
    - option: the resolved option, when one was involved.
    """

    @property
    def index(self):
        return self.options.get("index")

    @property
    def input(self):
        return self.options.get("input")

    @property
    def option(self):
        return self.options.get("option")


class UnknownFlagError(ScanFault): ...
class HyphenWithoutFlagsError(ScanFault): ...
class MalformedValueError(ScanFault): ...
class MissingValueError(ScanFault): ...
class FlagAssignmentError(ScanFault): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see FlagException).
    - options are merged into the fault via copy.replace before triggering.
    - outside shell mode the fault is raised; in shell mode it is printed to
      stderr and the process exits with status 2.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FlagException",
    "DeclarationError",
    "MissingFlagError",
    "InvalidShortFlagError",
    "InvalidLongFlagError",
    "DuplicateShortFlagError",
    "DuplicateLongFlagError",
    "ScanFault",
    "UnknownFlagError",
    "HyphenWithoutFlagsError",
    "MalformedValueError",
    "MissingValueError",
    "FlagAssignmentError",
    "FaultCode",
    "trigger",
    "getdoc",
)
