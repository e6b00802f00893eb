"""
Flagpole parser: declaration surface, scan entry point and results.

Declaring options
- Every value kind K (bool, duration, float, int, int64, string, uint, uint64)
  gets two generated methods:
  • parser.K(*flags, default=<zero>, descr="", converter=None, callback=None)
    returns a new Slot holding the default; raises the declaration fault.
  • parser.K_var(slot, *flags, descr="", converter=None, callback=None)
    binds an existing Slot and returns the parser for chaining; never raises.
- flags is either one string, classified as short ("v") or long ("verbose"),
  or a short and a long flag ("v", "verbose").

Sticky errors
- The first declaration fault is kept in parser.error. Later declarations are
  ignored and parse() surfaces the stored fault without scanning.

Scanning
- parse(arguments=None) scans sys.argv[1:] by default and returns the
  positionals. Scan faults are surfaced through trigger(): raised, or, when the
  parser runs in shell mode, printed with the usage before exiting with
  status 2.

Convenience API
- commandline is a shell-mode Parser for the running program; parse(), arg(),
  args(), narg(), nflag(), usage() and print_defaults() delegate to it.

Quick start
    >>> parser = Parser("tool")
    >>> verbose = parser.bool("v", "verbose", descr="print more")
    >>> limit = parser.int("l", "limit", default=10)
    >>> parser.parse(["-v", "--limit", "4", "input.txt"])
    ['input.txt']
    >>> verbose.value, limit.value, parser.nflag()
    (True, 4, 3)
"""
import copy
import logging
import os.path
import sys

from rich.console import Console
from rich.text import Text

from . import defaults
from .faults import *
from .kinds import Kind
from .options import Slot
from .registry import Registry, classify
from .scanner import scan
from .utils import *

logger = logging.getLogger(__name__)


def _program():
    if sys.argv and sys.argv[0]:
        return os.path.basename(sys.argv[0])
    return "flagpole"


class Parser:
    """
    Ordered option registry plus the results of the last scan.

    Runtime options
    - prog: program name shown in usage and fault headers (default: basename
      of sys.argv[0]; __prog__ in __main__ wins for fault headers).
    - shell: surface faults by printing usage and fault, then exiting with 2.
    - fancy: render faults inside a rich Panel.
    - colorful: style usage and faults (False strips all styles).
    - width: column count for description wrapping.
    """

    prog = mirror("prog")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    width = mirror("width")
    parsed = mirror("parsed")
    error = mirror("error")

    def __init__(self, prog=Unset, /, shell=False, fancy=False, colorful=True, width=80):
        if not isinstance(prog, str | UnsetType):
            raise TypeError("Parser 'prog' must be a string")
        for name, value in (("shell", shell), ("fancy", fancy), ("colorful", colorful)):
            if not isinstance(value, bool):
                raise TypeError(f"Parser '{name}' must be a boolean")
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError("Parser 'width' must be an integer")

        self._prog = coalesce(prog, _program())
        self._shell = shell
        self._fancy = fancy
        self._colorful = colorful
        self._width = width if width > 0 else 80

        self._registry = Registry()
        self._positionals = []
        self._processed = 0
        self._parsed = False
        self._error = None
        self._usage_handler = Unset

    @property
    def options(self):
        return self._registry

    @property
    def args(self):
        return list(self._positionals)

    def arg(self, index, /):
        """
        The index-th positional of the last scan, or "" when there is none.
        """
        if not isinstance(index, int):
            raise TypeError("arg() argument must be an integer")
        if 0 <= index < len(self._positionals):
            return self._positionals[index]
        return ""

    def narg(self):
        return len(self._positionals)

    def nflag(self):
        return self._processed

    def option(self, kind, slot, /, *flags, descr="", converter=None, callback=None):
        """
        Register an option of the given kind bound to slot; returns the parser.

        Declaration faults are stored in parser.error instead of being raised;
        once a fault is stored this method does nothing.
        """
        if self._error is not None:
            return self

        match flags:
            case (flag,):
                short, long = classify(flag)
            case (short, long):
                if not isinstance(short, str) or not isinstance(long, str):
                    raise TypeError("option() short and long flags must be strings")
            case _:
                raise TypeError("option() takes a single flag or a short and a long flag (%d given)" % len(flags))

        try:
            self._registry.register(kind, slot, short, long, descr=descr, converter=converter, callback=callback)
        except DeclarationError as error:
            logger.debug("declaration of %r rejected: %s", flags, error)
            self._error = error
        return self

    def parse(self, arguments=None, /):
        """
        Scan arguments (sys.argv[1:] when None) and return the positionals.
        """
        if self._error is not None:
            self.trigger(self._error)

        if arguments is None:
            arguments = sys.argv[1:]

        self._positionals = []
        self._processed = 0
        self._parsed = True

        positionals, processed, fault = scan(arguments, self._registry)
        self._positionals = positionals
        self._processed = processed
        logger.debug("scanned %d flag argument(s) and %d positional(s)", processed, len(positionals))

        if fault is not None:
            self.trigger(fault)
        return list(positionals)

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's runtime options.

        Explicit options win over the runtime options of the same name. Outside
        shell mode the fault is raised; in shell mode the usage is shown (see
        show_usage), the fault is printed to stderr and the process exits with 2.
        """
        if (
                not hasattr(fault, "__trigger__") or
                not callable(fault.__trigger__) or
                not hasattr(fault, "__replace__") or
                not callable(fault.__replace__)
        ):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
        options = {
            "prog": self.prog,
            "shell": self.shell,
            "fancy": self.fancy,
            "colorful": self.colorful,
            "width": self.width,
        } | options
        fault = copy.replace(fault, **options)
        if options["shell"]:
            self.show_usage()
        trigger(fault)

    def usage_handler(self, handler, /):
        """
        Register a one-time replacement for the usage shown by show_usage().

        Contract
        - handler: callable invoked with the parser in place of print_usage(),
          both before a shell-mode fault and from the module-level usage().

        Rules
        - Must be callable.
        - Can be set only once per parser (cannot be overridden).

        Returns
        - The same callable, enabling decorator-style usage: @parser.usage_handler
        """
        if not callable(handler):
            raise TypeError("Parser usage handler must be callable")
        if self._usage_handler is not Unset:
            raise TypeError("Parser usage handler cannot be overridden")
        self._usage_handler = handler
        return handler

    def show_usage(self):
        if self._usage_handler is not Unset:
            self._usage_handler(self)
        else:
            self.print_usage()

    def usage(self):
        """
        Plain usage text: a header line followed by every option entry.
        """
        prog = getattr(__import__("__main__"), "__prog__", self.prog)
        return f"Usage of {prog}:\n" + defaults.render(self._registry, width=self.width)

    def print_usage(self, file=None):
        prog = getattr(__import__("__main__"), "__prog__", self.prog)
        console = Console(file=file, stderr=file is None, highlight=False, soft_wrap=True)
        console.print(
            Text.assemble("Usage of ", (prog, "bold #FF4D94" if self.colorful else ""), ":\n"),
            defaults.renderable(self._registry, width=self.width, colorful=self.colorful),
            sep="",
            end="",
        )

    def print_defaults(self, file=None):
        """
        Print the option entries (no header) to file, or stderr.
        """
        console = Console(file=file, stderr=file is None, highlight=False, soft_wrap=True)
        console.print(defaults.renderable(self._registry, width=self.width, colorful=self.colorful), end="")

    def __repr__(self):
        return f"parser(prog={self.prog!r}, options={len(self._registry)}, parsed={self.parsed!r}, error={self.error!r})"

    def __rich_repr__(self):
        yield "prog", self.prog
        yield "options", self._registry
        yield "parsed", self.parsed
        yield "error", self.error


def _declarer(kind):
    @rename(kind.label)
    def declare(self, /, *flags, default=Unset, descr="", converter=None, callback=None):
        slot = Slot(coalesce(default, kind.zero))
        self.option(kind, slot, *flags, descr=descr, converter=converter, callback=callback)
        if self._error is not None:
            raise self._error
        return slot

    declare.__doc__ = (
        f"Declare a {kind.label} option and return its Slot (default: the {kind.label} zero value).\n\n"
        f"Raises the declaration fault, which also becomes sticky on the parser."
    )
    return declare


def _binder(kind):
    @rename(kind.label + "_var")
    def bind(self, slot, /, *flags, descr="", converter=None, callback=None):
        return self.option(kind, slot, *flags, descr=descr, converter=converter, callback=callback)

    bind.__doc__ = (
        f"Declare a {kind.label} option writing into an existing Slot; returns the parser.\n\n"
        f"The slot's current value is the default shown in usage."
    )
    return bind


for _kind in Kind:
    setattr(Parser, _kind.label, _declarer(_kind))
    setattr(Parser, _kind.label + "_var", _binder(_kind))
del _kind


commandline = Parser(shell=True)
"""
Process-wide parser used by the module-level convenience functions.
"""


def parse(arguments=None, /):
    return commandline.parse(arguments)


def arg(index, /):
    return commandline.arg(index)


def args():
    return commandline.args


def narg():
    return commandline.narg()


def nflag():
    return commandline.nflag()


def parsed():
    return commandline.parsed


def usage():
    """
    Show the usage of the running program (stderr unless a handler is set).
    """
    commandline.show_usage()


def print_defaults(file=None):
    commandline.print_defaults(file)


__all__ = (
    "Parser",
    "commandline",
    "parse",
    "arg",
    "args",
    "narg",
    "nflag",
    "parsed",
    "usage",
    "print_defaults",
)
