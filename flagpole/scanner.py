"""
Flagpole argument scanner: the character-level state machine.

Each argument is walked one character at a time, starting in BEGIN:

    BEGIN        "-"          -> HYPHEN
                 other        -> POSITIONAL (whole argument kept verbatim)
    HYPHEN       "-"          -> LONG_NAME  (rest of the argument is the name)
                 char         -> short lookup: boolean sets and -> SHORT_FLAGS,
                                 valued -> TEXT (rest of the argument is text)
                 end          -> fault: hyphen without flags
    SHORT_FLAGS  char         -> same as HYPHEN (bundling: -abc)
    TEXT         remainder    -> non-empty: converted now (-l4)
                                 empty: the next argument is slurped (-l 4)
    LONG_NAME    remainder    -> empty: terminator (--), rest is positional
                                 name=value: converted now (--limit=4)
                                 name: boolean sets, valued slurps (--limit 4)

A slurped argument is taken verbatim, even when it starts with a hyphen or is
empty. The processed count grows by one for every argument that flag handling
consumes: flag tokens, bundles, slurped values and the terminator.

On a fault at argument i, the arguments from i onwards are appended to the
positionals and the count keeps only fully handled arguments. Writes made
before the fault (inside the failing argument too) are kept.
"""
import logging
from enum import IntEnum
from typing import NamedTuple

from .faults import *
from .kinds import Arity
from .utils import *

logger = logging.getLogger(__name__)


class State(IntEnum):
    """
    Per-argument scanner states.
    """
    BEGIN = 0
    HYPHEN = 1
    LONG_NAME = 2
    SHORT_FLAGS = 3
    TEXT = 4
    POSITIONAL = 5

    def __str__(self):
        return {
            State.BEGIN: "new argument",
            State.HYPHEN: "consumed single hyphen",
            State.LONG_NAME: "want long name",
            State.SHORT_FLAGS: "want short flags only",
            State.TEXT: "want text",
            State.POSITIONAL: "want argument",
        }[self]


class Scan(NamedTuple):
    """
    Outcome of one scan.
    """
    positionals: list
    processed: int
    fault: ScanFault | None = None


def _unknown(flag, index, *, char):
    return UnknownFlagError(
        "unknown flag: %s" % quote(flag, char=char),
        code=FaultCode.UNKNOWN_FLAG,
        title="unknown flag",
        hint="check the spelling or run with --help to list the available flags",
        index=index,
        input=flag,
    )


def _assign(option, text, index):
    """
    Convert text into option's slot, turning any failure into MalformedValueError.
    """
    try:
        option.assign(text)
    except Exception as error:
        reason = str(error) or type(error).__name__
        raise MalformedValueError(
            "cannot parse %s for flag %s: %s" % (quote(text), quote(option.name, char=option.long is None), reason),
            code=FaultCode.MALFORMED_VALUE,
            title="malformed value",
            hint=f"{option.spelling} expects a {option.kind.label} value",
            index=index,
            input=text,
            option=option,
        ) from error


def _set(option, index):
    """
    Presence path for no-value options; callback failures become MalformedValueError.
    """
    try:
        option.set()
    except Exception as error:
        reason = str(error) or type(error).__name__
        raise MalformedValueError(
            "cannot set flag %s: %s" % (quote(option.name, char=option.long is None), reason),
            code=FaultCode.MALFORMED_VALUE,
            title="malformed value",
            hint=f"the callback of {option.spelling} rejected the flag",
            index=index,
            input=option.name,
            option=option,
        ) from error


def _missing(option):
    return MissingValueError(
        "flag requires argument: %s" % quote(option.name, char=option.long is None),
        code=FaultCode.MISSING_VALUE,
        title="missing value",
        hint=f"pass a {option.kind.label} value after {option.spelling}",
        index=None,
        input=option.name,
        option=option,
    )


def scan(arguments, registry, /):
    """
    Scan arguments against registry and return a Scan.

    Slots are written as options are matched; scan faults are returned in
    Scan.fault rather than raised.
    """
    if isinstance(arguments, str):
        raise TypeError("scan() arguments must be an iterable of strings, not a string")
    arguments = list(arguments)

    positionals = []
    processed = 0
    pending = None

    for index, argument in enumerate(arguments):
        if not isinstance(argument, str):
            raise TypeError(f"{ordinal(index + 1)} argument must be a string, not {type(argument).__name__!r}")

        logger.debug("argument %d: %r; pending: %r", index, argument, pending)

        try:
            if pending is not None:
                option, pending = pending, None
                _assign(option, argument, index)
                processed += 1
                continue

            state = State.BEGIN
            option = None
            remainder = ""

            for position, char in enumerate(argument):
                logger.debug("  state: %s; char: %r", state, char)

                match state:
                    case State.BEGIN:
                        if char != "-":
                            state = State.POSITIONAL
                            break
                        state = State.HYPHEN
                    case State.HYPHEN if char == "-":
                        state = State.LONG_NAME
                        remainder = argument[position + 1:]
                        break
                    case State.HYPHEN | State.SHORT_FLAGS:
                        if (option := registry.short(char)) is None:
                            raise _unknown(char, index, char=True)
                        if option.arity is Arity.NOTHING:
                            _set(option, index)
                            state = State.SHORT_FLAGS
                        else:
                            state = State.TEXT
                            remainder = argument[position + 1:]
                            break

            logger.debug("  end state: %s; remainder: %r", state, remainder)

            match state:
                case State.BEGIN | State.POSITIONAL:
                    positionals.append(argument)
                case State.HYPHEN:
                    raise HyphenWithoutFlagsError(
                        "hyphen without flags",
                        code=FaultCode.HYPHEN_WITHOUT_FLAGS,
                        title="hyphen without flags",
                        hint="use -- to end flag parsing, or name a flag after the hyphen",
                        index=index,
                        input=argument,
                    )
                case State.SHORT_FLAGS:
                    processed += 1
                case State.TEXT if remainder:
                    _assign(option, remainder, index)
                    processed += 1
                case State.TEXT:
                    pending = option
                    processed += 1
                case State.LONG_NAME if not remainder:
                    processed += 1
                    positionals.extend(arguments[index + 1:])
                    logger.debug("terminator at %d; %d positional(s)", index, len(positionals))
                    return Scan(positionals, processed)
                case State.LONG_NAME:
                    name, assigned, text = remainder.partition("=")
                    if (option := registry.long(name)) is None:
                        raise _unknown(name, index, char=False)
                    if assigned and option.arity is Arity.NOTHING:
                        raise FlagAssignmentError(
                            "flag does not take a value: %s" % quote(name),
                            code=FaultCode.FLAG_ASSIGNMENT,
                            title="flag does not take a value",
                            hint=f"pass --{name} on its own",
                            index=index,
                            input=argument,
                            option=option,
                        )
                    if assigned:
                        _assign(option, text, index)
                    elif option.arity is Arity.NOTHING:
                        _set(option, index)
                    else:
                        pending = option
                    processed += 1
        except ScanFault as fault:
            logger.debug("fault at %d: %s", index, fault)
            return Scan([*positionals, *arguments[index:]], processed, fault)

    if pending is not None:
        fault = _missing(pending)
        logger.debug("fault at end of input: %s", fault)
        return Scan(positionals, processed, fault)

    return Scan(positionals, processed)


__all__ = (
    "State",
    "Scan",
    "scan",
)
