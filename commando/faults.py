"""
User-facing faults of a commando invocation.

Every problem the matcher or the resolver can report is a CommandException
subclass with a stable FaultCode. A fault holds its message plus free-form,
read-only options (title, code, hint, docs and whatever context the reporter
attached, such as the offending flag) and renders itself with rich:

    [ reactor — 11122 | Missing Flag ]
    value of the --dir flag can not be empty
     → pass it as --dir <value>

trigger() is the single exit for faults. In library mode the fault is raised to
the host; in shell mode it is printed on stderr and the process exits with
status 1.

Registration mistakes are not faults: they are host bugs and surface as plain
TypeError/ValueError/RuntimeError from the offending call.

Hooks read from __main__
- __styles__: palette overrides (keys of PALETTE).
- __codes__: FaultCode → label printed instead of the number.
- __docs__: FaultCode → documentation string returned by getdoc().
- __prog__: program name printed in the header.
"""
import copy
import sys
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)

PALETTE = {
    "program": "bold #F5F5F5",
    "code": "bold #38BDF8",
    "title": "bold #F472B6",
    "message": "#D4D4D8",
    "arrow": "dim #86EFAC",
    "hint": "italic #86EFAC",
}


class FaultCode(IntEnum):
    """
    Stable identifiers of user-facing faults, grouped by the stage reporting them.

    - 1110x/1111x: matcher (unknown command, unsupported or unknown flag)
    - 1112x: resolver (missing argument or flag, uncoercible flag value)
    - 1113x: host configuration only noticed when the command runs
    """
    UNKNOWN_COMMAND     = 11101
    UNSUPPORTED_FLAG    = 11111
    UNKNOWN_FLAG        = 11112

    MISSING_ARGUMENT    = 11121
    MISSING_FLAG        = 11122
    INVALID_FLAG_VALUE  = 11123

    MISSING_ACTION      = 11131

    def label(self):
        """
        Return the text printed for this code: the host's __codes__ entry, or the number.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    Base class of every user-facing fault.

    copy.replace(fault, **options) returns a new fault of the same type with the
    options merged in; trigger() relies on it to attach the runtime settings.
    """

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("fault message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __replace__(self, /, **changes):
        return type(self)(self.message, **self.options | changes)

    def __rich__(self):
        colorful = self.options.get("colorful", False)
        styles = PALETTE | getattr(__import__("__main__"), "__styles__", {})

        def piece(fragment, key, /):
            return Text(str(fragment), styles.get(key, "") if colorful else "")

        registry = self.options.get("registry")
        program = getattr(__import__("__main__"), "__prog__", getattr(registry, "executable", "commando"))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            piece(program, "program"),
            " — ",
            piece(code.label() if isinstance(code, FaultCode) else "?", "code"),
            " | ",
            piece(self.options.get("title", "error").title(), "title"),
            " ]",
        )
        body = [piece(self.message, "message")]
        if hint := self.options.get("hint"):
            body.append(Text.assemble(piece(" → ", "arrow"), piece(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*body), title=header, title_align="left", width=console.width - 4)
        return Group(header, *body)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)


class UnknownCommandError(CommandException):
    """The first positional token names no command and the root takes no arguments."""


class UnknownFlagError(CommandException):
    """A well-formed --long or -s token names no flag of the selected command."""


class UnsupportedFlagError(CommandException):
    """A token starts with a dash but has none of the supported flag shapes."""


class MissingArgumentError(CommandException): ...
class MissingFlagError(CommandException): ...
class InvalidFlagValueError(CommandException): ...


class MissingActionError(CommandException):
    """The selected sub-command was registered without an action."""


def trigger(fault, /, **options):
    """
    Surface `fault` with `options` merged in; never returns.

    Library mode (the default) raises the fault. With shell=True the fault is
    printed on the stderr console and the process exits with status 1.
    """
    if not isinstance(fault, CommandException):
        raise TypeError("trigger() argument must be a command exception")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    Return the host documentation of `code` from __main__.__docs__, or None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "CommandException",
    "UnknownCommandError",
    "UnknownFlagError",
    "UnsupportedFlagError",
    "MissingArgumentError",
    "MissingFlagError",
    "InvalidFlagValueError",
    "MissingActionError",
    "FaultCode",
    "trigger",
    "getdoc",
)
