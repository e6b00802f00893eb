"""
Flagpole option registry: ordered declarations, validation and lookup.

Rules enforced by register(), in this order
1. at least one of short/long must be present       -> MissingFlagError
2. short must be one character, not "-", not a
   whitespace character, not an unpaired surrogate   -> InvalidShortFlagError
3. long must be non-empty, must not start with "-"
   and must not contain "="                          -> InvalidLongFlagError
4. neither identity may already be declared; every
   existing option is checked long first, then short -> DuplicateLongFlagError
                                                        DuplicateShortFlagError

Nothing is appended (and no slot is touched) when any rule fails.

classify() implements the single-flag declaration form: one string that is
either a short flag (one character) or a long flag (anything longer).
"""
from .faults import *
from .options import Option
from .utils import *


def _invalid_short(short):
    if len(short) != 1 or short == "-" or short.isspace():
        return True
    # unpaired surrogates cannot name a flag
    return 0xD800 <= ord(short) <= 0xDFFF


def _invalid_long(long):
    return not long or long.startswith("-") or "=" in long


def classify(flag, /):
    """
    Split a single-flag declaration into (short, long).

    - ""        -> (None, None): nothing supplied.
    - "-"       -> ("-", None): rejected later as an invalid short flag.
    - "v"       -> ("v", None)
    - "verbose" -> (None, "verbose")
    - "-x..."   -> (None, "-x..."): rejected later as an invalid long flag.
    """
    if not isinstance(flag, str):
        raise TypeError("flag must be a string")
    if not flag:
        return None, None
    if len(flag) == 1:
        return flag, None
    return None, flag


class Registry:
    """
    Ordered collection of declared options.

    Iteration follows declaration order, which is also the usage order.
    """

    def __init__(self):
        self._options = []

    def register(self, kind, slot, /, short=None, long=None, *, descr="", converter=None, callback=None):
        """
        Validate the identities, build the Option and append it.

        Raises a DeclarationError subclass on failure; the registry is left
        unchanged in that case.
        """
        if not isinstance(short, str | None) or not isinstance(long, str | None):
            raise TypeError("register() flags must be strings or None")

        if short is None and long is None:
            raise MissingFlagError(
                "must supply at least one of short or long flag",
                code=FaultCode.MISSING_FLAG,
                title="missing flag",
                hint="declare the option with a one-character short flag, a long name, or both",
            )

        if short is not None and _invalid_short(short):
            raise InvalidShortFlagError(
                "invalid short flag: %s" % quote(short, char=True) if short else "invalid short flag",
                code=FaultCode.INVALID_SHORT_FLAG,
                title="invalid short flag",
                hint="a short flag is exactly one character other than the hyphen or whitespace",
            )

        if long is not None and _invalid_long(long):
            raise InvalidLongFlagError(
                "invalid long flag: %s" % quote(long) if long else "invalid long flag",
                code=FaultCode.INVALID_LONG_FLAG,
                title="invalid long flag",
                hint="spell long names without leading hyphens or '=' (use 'limit' for --limit)",
            )

        for option in self._options:
            if long is not None and long == option.long:
                raise DuplicateLongFlagError(
                    "duplicate long flag: %s" % quote(long),
                    code=FaultCode.DUPLICATE_LONG_FLAG,
                    title="duplicate long flag",
                    hint=f"--{long} is already declared by the {ordinal(self._options.index(option) + 1)} option",
                )
            if short is not None and short == option.short:
                raise DuplicateShortFlagError(
                    "duplicate short flag: %s" % quote(short, char=True),
                    code=FaultCode.DUPLICATE_SHORT_FLAG,
                    title="duplicate short flag",
                    hint=f"-{short} is already declared by the {ordinal(self._options.index(option) + 1)} option",
                )

        option = Option(kind, slot, short=short, long=long, descr=descr, converter=converter, callback=callback)
        self._options.append(option)
        return option

    def short(self, char, /):
        """
        Option whose short flag is char, or None.
        """
        for option in self._options:
            if option.short == char:
                return option
        return None

    def long(self, name, /):
        """
        Option whose long flag is name, or None.
        """
        for option in self._options:
            if option.long == name:
                return option
        return None

    def __iter__(self):
        return iter(tuple(self._options))

    def __len__(self):
        return len(self._options)

    def __contains__(self, object):
        if isinstance(object, Option):
            return object in self._options
        return self.short(object) is not None or self.long(object) is not None

    def __bool__(self):
        return bool(self._options)

    def __repr__(self):
        return f"registry({", ".join(option.spelling for option in self._options)})"

    def __rich_repr__(self):
        yield from self._options


__all__ = (
    "Registry",
    "classify",
)
