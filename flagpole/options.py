r"""
Flagpole typed options and their destinations.

Overview
- Slot[_T]
  • The destination an option writes into. Either a standalone cell
    (Slot(default)) or a view over an attribute of a caller-owned object
    (Slot.attach(namespace, "limit")).
  • Only the scanner's conversion step writes to it, once per matched
    occurrence; later occurrences overwrite earlier ones.

- Option[_T]
  • One declared flag: short and/or long identity, value kind, destination,
    default (snapshot of the slot at registration time), description, an
    optional converter (text -> value, replaces the kind's conversion) and an
    optional callback (called with each stored value).
  • Built by Registry.register(), which owns the naming and duplicate rules;
    Option itself only sanitizes the metadata types.

- Introspection & representation
  • OptionType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties (mirror()).

Quick example:
    >>> from flagpole.kinds import Kind
    >>> limit = Option(Kind.INT, Slot(0), short="l", long="limit")
    >>> limit.assign("42")
    >>> limit.slot.value
    42
"""
import functools
import operator
import re

from rich.text import Text

from .kinds import Arity, Kind
from .utils import *


class Slot[_T]:
    """
    Mutable destination cell for one option.

    Standalone slots keep their own value; attached slots read and write an
    attribute of another object, which lets callers bind flags directly onto
    their own configuration objects.
    """
    __slots__ = ("_value", "_target", "_name")

    def __init__(self, value=None, /):
        self._value = value
        self._target = Unset
        self._name = Unset

    @classmethod
    def attach(cls, target, name, /):
        """
        Build a slot that reads and writes target.<name>.

        The attribute must already exist; its current value becomes the
        option's default when the slot is registered.
        """
        if not isinstance(name, str):
            raise TypeError("Slot.attach() attribute name must be a string")
        if not hasattr(target, name):
            raise AttributeError(f"{type(target).__name__!r} object has no attribute {name!r}")
        self = cls()
        self._target = target
        self._name = name
        return self

    @property
    def value(self):
        if self._target is Unset:
            return self._value
        return getattr(self._target, self._name)

    @value.setter
    def value(self, value):
        if self._target is Unset:
            self._value = value
        else:
            setattr(self._target, self._name, value)

    @property
    def attached(self):
        return self._target is not Unset

    def __repr__(self):
        if self.attached:
            return f"slot({type(self._target).__name__}.{self._name}={self.value!r})"
        return f"slot({self.value!r})"

    def __rich_repr__(self):
        yield self.value


class OptionType(type):
    """
    Metaclass that turns option specs into introspectable, read-only records.

    Responsibilities
    - Expose every name in __introspectable__ as a read-only property backed by
      the "_{name}" field.
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    - Derive __typename__ from the class name for messages.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate the types of option metadata (not the naming rules).

    - kind: a Kind member (or its label).
    - slot: a Slot.
    - short: None or a string; long: None or a string (naming rules are the
      registry's job, so present-but-invalid values pass through here).
    - descr: string or rich Text; stripped.
    - converter / callback: None or callable.
    """
    if isinstance(kind := metadata["kind"], str):
        try:
            kind = Kind(kind)
        except ValueError:
            raise ValueError(f"{cls.__typename__} 'kind' {kind!r} is not a known value kind") from None
    if not isinstance(kind, Kind):
        raise TypeError(f"{cls.__typename__} 'kind' must be a value kind")
    metadata["kind"] = kind

    if not isinstance(metadata["slot"], Slot):
        raise TypeError(f"{cls.__typename__} 'slot' must be a Slot")

    for name in ("short", "long"):
        if not isinstance(metadata[name], str | None):
            raise TypeError(f"{cls.__typename__} '{name}' must be a string")

    if not isinstance(descr := metadata["descr"], str | Text):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    metadata["descr"] = descr.strip() if isinstance(descr, str) else descr

    for name in ("converter", "callback"):
        if metadata[name] is not None and not callable(metadata[name]):
            raise TypeError(f"{cls.__typename__} '{name}' must be callable")


class Option[_T](metaclass=OptionType):
    """
    Typed option bound to a destination slot.

    Properties
    - short: single character or None.
    - long: name without leading hyphens, or None.
    - kind: value kind (see flagpole.kinds.Kind).
    - slot: destination written by assign()/set().
    - default: slot value at construction time (usage display only).
    - descr: human-readable description (usage display only).
    - converter: optional text -> value conversion replacing kind.convert.
    - callback: optional hook called with every stored value.
    """

    __introspectable__ = (
        "short",
        "long",
        "kind",
        "slot",
        "default",
        "descr",
        "converter",
        "callback",
    )

    __displayable__ = (
        "short",
        "long",
        "kind",
        "default",
        "descr",
    )

    def __init__(
            self,
            kind,
            slot,
            /,
            short=None,
            long=None,
            descr="",
            converter=None,
            callback=None,
    ):
        metadata = {
            "kind": kind,
            "slot": slot,
            "short": short,
            "long": long,
            "descr": descr,
            "converter": converter,
            "callback": callback,
        }
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._default = slot.value

    @property
    def arity(self):
        return self.kind.arity

    @property
    def name(self):
        """
        Identifier used in messages: the long name when present, else the short one.
        """
        return self.long if self.long is not None else self.short

    @property
    def spelling(self):
        """
        Command-line spelling(s), e.g. "-l, --limit".
        """
        names = []
        if self.short is not None:
            names.append("-" + self.short)
        if self.long is not None:
            names.append("--" + self.long)
        return ", ".join(names)

    def convert(self, text, /):
        if self.converter is not None:
            return self.converter(text)
        return self.kind.convert(text)

    def assign(self, text, /):
        """
        Convert text, run the callback, then store the value in the slot.

        Conversion and callback errors propagate unchanged (the scanner wraps
        them into MalformedValueError); the slot is left untouched in both cases.
        """
        value = self.convert(text)
        if self.callback is not None:
            self.callback(value)
        self._slot.value = value

    def set(self):
        """
        Presence path for no-value kinds: run the callback, then store True.
        """
        if self.arity is not Arity.NOTHING:
            raise TypeError(f"{self.kind.label} option {self.spelling} requires a value")
        if self.callback is not None:
            self.callback(True)
        self._slot.value = True


__all__ = (
    "Slot",
    "Option",
)

# Remove the internal metaclass from the module namespace.
del OptionType
