r"""
Commando schema: commands, positional arguments and typed flags.

Overview
- Specs
  • Argument: positional, string-valued slot. Required when it has no default; the
    last declared argument may be variadic and absorb every remaining positional.
  • Flag: named option with a long name, an optional one-letter alias and a data
    kind (DataType.BOOL / INT / STRING). Booleans are never required.
  • Command: a named node of the registry owning ordered arguments, ordered flags,
    descriptions and an optional action (the host callback).

- Resolved values
  • ArgumentValue(argument, value): argument metadata + resolved string.
  • FlagValue(flag, value): flag metadata + resolved, type-coerced value.
  Both delegate attribute access to their metadata (value.name, value.descr, ...).

- Introspection & representation
  • SchemaType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields named in __introspectable__ as read-only properties (see mirror()).

Registration rules (enforced here, at registration time)
- Names are stripped of all whitespace ("dir, d" == "dir,d").
- Re-registering an existing argument/flag name is a silent no-op; the first
  registration wins and nothing is duplicated.
- At most one argument is variadic and it must be the last one declared.
- A flag default must match the flag data kind; a mismatch is a TypeError because
  it is a bug in the host program, not a user mistake.

Quick example:
    >>> command = Command("create")
    >>> command.add_argument("name", "name of the component").add_argument("version", "", "1.0.0")
    >>> command.add_flag("dir,d", "output directory", DataType.STRING)
    >>> command.add_flag("timeout", "operation timeout in seconds", int, 60)
"""
import functools
import operator
import re
from enum import IntEnum
from typing import NamedTuple

from .utils import *

_NAME = re.compile(r"[^\W_][\w-]*")
_SHORT = re.compile(r"[^\W_]")


def _compact(name, /):
    # whitespace is never significant inside a name
    return re.sub(r"\s+", "", name)


class DataType(IntEnum):
    """
    Data kinds a flag value can be coerced into.

    The builtin types bool, int and str are accepted wherever a DataType is
    expected and are normalized through DataType.of().
    """
    BOOL = 0
    INT = 1
    STRING = 2

    @classmethod
    def of(cls, kind, /):
        """
        Normalize a DataType, a builtin type (bool/int/str) or a raw kind number.

        Raises
        - TypeError: for any other kind (unsupported flag data kind).
        """
        if isinstance(kind, cls):
            return kind
        if kind in (bool, int, str):
            return {bool: cls.BOOL, int: cls.INT, str: cls.STRING}[kind]
        if type(kind) is int:
            try:
                return cls(kind)
            except ValueError:
                pass
        raise TypeError(f"unsupported flag data kind {kind!r}")

    def accepts(self, object, /):
        """
        Tell whether a Python default value matches this kind (bool is not an int here).
        """
        match self:
            case DataType.BOOL:
                return type(object) is bool
            case DataType.INT:
                return isinstance(object, int) and not isinstance(object, bool)
            case DataType.STRING:
                return isinstance(object, str)


class SchemaType(type):
    """
    Metaclass that turns schema classes into introspectable, read-only records.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the private "_<name>" attribute (containers come back as views).
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics.
    - Derive __typename__ from the class name (camel-case split with hyphens);
      it prefixes every registration error message.
    """
    __introspectable__ = ()

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
            """
            Return a concise, stable representation with key metadata.

            Example
            - flag(name='dir', short='d', descr='output directory', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers (e.g., rich).
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class Argument(metaclass=SchemaType):
    """
    Positional argument of a command.

    Fields
    - name: str, unique within its command (dots of a variadic marker removed).
    - descr: str, trimmed (may be empty).
    - default: str; "" means “no default”.
    - variadic: bool; the argument absorbs all remaining positional tokens,
      which reach the action as one comma-delimited string.
    - required: derived as default == "" and not variadic.
    """
    __introspectable__ = (
        "name",
        "descr",
        "default",
        "required",
        "variadic",
    )

    def __init__(self, name, descr="", default="", *, variadic=False):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} name must be a string")
        if not isinstance(descr, str):
            raise TypeError(f"{type(self).__typename__} {name!r} description must be a string")
        if not isinstance(default, str):
            raise TypeError(f"{type(self).__typename__} {name!r} default value must be a string")

        name = _compact(name)
        if name.endswith("..."):
            name = name.removesuffix("...")
            variadic = True
        if not _NAME.fullmatch(name):
            raise ValueError(f"{type(self).__typename__} name {name!r} is not a valid name")

        self._name = name
        self._descr = descr.strip()
        self._default = default
        self._variadic = bool(variadic)
        self._required = default == "" and not self._variadic


class Flag(metaclass=SchemaType):
    """
    Named flag of a command.

    Fields
    - name: long name (used as --name and as the key handed to the action).
    - short: one-character alias (used as -s) or None.
    - descr: str, trimmed.
    - type: DataType of the value handed to the action.
    - default: Python default value or None when there is none.
    - literal: the default in its string form, exactly as the matcher reports it
      ("false" for booleans without a default, "" when there is no default).
    - required: booleans never; other kinds when no usable default exists
      (a blank string default counts as none).
    """
    __introspectable__ = (
        "name",
        "short",
        "descr",
        "type",
        "default",
        "literal",
        "required",
    )

    def __init__(self, names, descr="", type=DataType.BOOL, default=Unset):
        if not isinstance(names, str):
            raise TypeError(f"{__class__.__typename__} names must be a string like 'long' or 'long,short'")
        if not isinstance(descr, str):
            raise TypeError(f"{__class__.__typename__} {names!r} description must be a string")

        name, _, short = _compact(names).partition(",")
        if not _NAME.fullmatch(name):
            raise ValueError(f"{__class__.__typename__} name {name!r} is not a valid long name")
        if short and not _SHORT.fullmatch(short):
            raise ValueError(f"{__class__.__typename__} --{name} short name {short!r} must be a single character")

        type = DataType.of(type)

        if default is not Unset and not type.accepts(default):
            kind = {DataType.BOOL: "a bool", DataType.INT: "an int", DataType.STRING: "a string"}[type]
            raise TypeError(f"value of the --{name} flag must be {kind} or unset")

        match type:
            case DataType.BOOL:
                literal = "true" if default is True else "false"
                required = False
            case DataType.INT:
                literal = "" if default is Unset else str(default)
                required = default is Unset
            case DataType.STRING:
                literal = "" if default is Unset or not default.strip() else default
                required = not literal

        self._name = name
        self._short = short or None
        self._descr = descr.strip()
        self._type = type
        self._default = coalesce(default)
        self._literal = literal
        self._required = required


class Command(metaclass=SchemaType):
    """
    A command (or the root command when its name is empty).

    Responsibilities
    - Own ordered arguments and flags; insertion order drives positional binding,
      validation order and the rendered Arguments/Flags sections.
    - Enforce per-command registration rules (idempotent names, one trailing
      variadic argument, unique short aliases).
    - Hold the optional action; a command without one is unimplemented.

    Lifecycle
    - Created by Registry.register(); mutable until the owning registry resolves
      its first invocation, sealed afterwards (new entries raise RuntimeError).
    """
    __introspectable__ = (
        "name",
        "descr",
        "short_descr",
        "is_root",
        "arguments",
        "flags",
        "action",
    )

    def __init__(self, name="", /, registry=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} name must be a string")
        if (name := _compact(name)) and not _NAME.fullmatch(name):
            raise ValueError(f"{type(self).__typename__} name {name!r} is not a valid name")
        self._name = name
        self._descr = ""
        self._short_descr = ""
        self._is_root = self._name == ""
        self._arguments = {}
        self._flags = {}
        self._action = None
        self._registry = registry

    @property
    def variadic(self):
        """
        Return the variadic argument of this command, or None.
        """
        for argument in self._arguments.values():
            if argument.variadic:
                return argument
        return None

    def _ensure_open(self):
        if getattr(self._registry, "sealed", False):
            raise RuntimeError(f"{type(self).__typename__} {self._name or '(root)'!r} registry is sealed")

    def set_descr(self, descr, /):
        """Set the long description shown in this command's usage banner."""
        if not isinstance(descr, str):
            raise TypeError(f"{type(self).__typename__} description must be a string")
        self._descr = descr.strip()
        return self

    def set_short_descr(self, descr, /):
        """Set the one-line description shown in the root Commands section."""
        if not isinstance(descr, str):
            raise TypeError(f"{type(self).__typename__} short description must be a string")
        self._short_descr = descr.strip()
        return self

    def add_argument(self, name, descr="", default="", *, variadic=False):
        """
        Register a positional argument; an empty default makes it required.

        Behavior
        - A name already registered on this command is a silent no-op, even when
          the other parameters would be rejected.
        - A name ending with "..." (or variadic=True) declares the variadic argument.

        Raises
        - ValueError: a second variadic argument, or any argument declared after
          the variadic one.
        - TypeError: non-string name/description/default.
        """
        if isinstance(name, str) and _compact(name).removesuffix("...") in self._arguments:
            return self

        argument = Argument(name, descr, default, variadic=variadic)

        self._ensure_open()
        if (variadic := self.variadic) is not None:
            if argument.variadic:
                raise ValueError(f"{type(self).__typename__} cannot declare a second variadic argument {argument.name!r}")
            raise ValueError(f"{type(self).__typename__} argument {argument.name!r} cannot follow the variadic argument {variadic.name!r}")

        self._arguments[argument.name] = argument
        return self

    def add_flag(self, names, descr="", type=DataType.BOOL, default=Unset):
        """
        Register a flag given as "long" or "long,short".

        Behavior
        - A long name already registered on this command is a silent no-op, even
          when the other parameters would be rejected.
        - -v (root only) and -h are taken by the built-in --version and --help
          flags once the command is registered, so they cannot be reused as aliases.
        - default=Unset means “no default”: required unless the flag is boolean.

        Raises
        - TypeError: default value not matching the data kind, or unsupported kind.
        - ValueError: malformed names, or a short alias already taken on this command.
        """
        if isinstance(names, str) and _compact(names).partition(",")[0] in self._flags:
            return self

        flag = Flag(names, descr, type, default)

        self._ensure_open()
        if flag.short and any(other.short == flag.short for other in self._flags.values()):
            raise ValueError(f"{self.__typename__} short name -{flag.short} is already in use")

        self._flags[flag.name] = flag
        return self

    def set_action(self, action, /):
        """
        Attach the host callback; the first registered action wins.

        The action is called as action(arguments, flags) with two ordered
        mappings: argument-name → ArgumentValue and flag-name → FlagValue.
        """
        if not callable(action):
            raise TypeError(f"{type(self).__typename__} action must be callable")
        if self._action is None:
            self._action = action
        return self


class ArgumentValue(NamedTuple):
    """Argument metadata plus its resolved string value."""
    argument: Argument
    value: str

    def __getattr__(self, name):
        return getattr(self.argument, name)


class FlagValue(NamedTuple):
    """
    Flag metadata plus its resolved value (bool, int or str per flag.type).

    The get_* accessors return the value only when the flag was declared with the
    matching kind, and raise TypeError otherwise.
    """
    flag: Flag
    value: bool | int | str

    def __getattr__(self, name):
        return getattr(self.flag, name)

    def get_bool(self):
        if self.flag.type is DataType.BOOL:
            return self.value
        raise TypeError(f"--{self.flag.name} flag can not be converted to bool")

    def get_int(self):
        if self.flag.type is DataType.INT:
            return self.value
        raise TypeError(f"--{self.flag.name} flag can not be converted to int")

    def get_string(self):
        if self.flag.type is DataType.STRING:
            return self.value
        raise TypeError(f"--{self.flag.name} flag can not be converted to string")


__all__ = (
    "DataType",
    "Argument",
    "Flag",
    "Command",
    "ArgumentValue",
    "FlagValue",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del SchemaType
