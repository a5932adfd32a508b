r"""
Commando matcher: scan argv-style tokens against a registry.

The matcher does not validate, coerce or apply any policy beyond recognizing
the shape of the tokens. It reports literal strings and leaves every decision
(defaults, required fields, types, help/version) to Registry.resolve().

Result contract (Match)
- command: the selected command name ("" for the root command).
- arguments: declared argument name → Slot(value, default), in declaration order.
  The variadic argument receives every remaining positional token joined with ",".
- flags: declared flag long name → Slot(value, default), in declaration order.
  Booleans use the literal strings "true"/"false".
- extras: positional tokens that found no argument slot.
- fault: an untriggered CommandException when the token stream cannot be matched
  (unknown command, unknown flag, unsupported flag syntax); the mappings are then empty.

Token grammar
- "--"                    ends flag scanning; later tokens are positional.
- "--long", "--long=v"    long flag (value inline or in the next token).
- "-s", "-s=v"            one-character alias.
- "--no-long"             sets a boolean flag to "false".
- any other "-..." token  unsupported flag syntax ("---version", "-version", "-").
"""
import difflib
import re
from collections import deque
from types import MappingProxyType
from typing import NamedTuple

from .faults import *
from .schema import DataType

_FLAG = re.compile(r"(?:--(?P<long>[^\W_][\w-]*)|-(?P<short>[^\W_]))(?:=(?P<value>[^\r\n]*))?")


class Slot(NamedTuple):
    """User value (empty when absent) and default value of one argument or flag."""
    value: str
    default: str


class Match(NamedTuple):
    command: str
    arguments: MappingProxyType
    flags: MappingProxyType
    extras: tuple = ()
    fault: CommandException | None = None


def _failure(command, fault, /):
    return Match(command, MappingProxyType({}), MappingProxyType({}), (), fault)


def _hint(input, candidates, fallback, /):
    # suggest the closest spelling when there is one, otherwise point to help
    try:
        return "did you mean %r? %s" % (difflib.get_close_matches(input, candidates, 1)[0], fallback)
    except IndexError:
        return fallback


def _takes(flag, token, /):
    # whether the token following a valued flag can be consumed as its value
    if not token.startswith("-"):
        return True
    return flag.type is DataType.INT and re.fullmatch(r"-[0-9]+", token) is not None


def match(registry, tokens, /):
    """
    Match a token sequence against the commands registered in `registry`.

    Command selection
    - the first token selects a sub-command when it is not flag-shaped and names a
      registered non-root command; it is consumed.
    - otherwise the root command is selected. A positional first token that is not a
      command is an unknown command when the root declares no arguments.

    Returns
    - Match (never raises for user input; faults travel inside the result).
    """
    tokens = deque(tokens)
    commands = registry.commands
    route = registry.executable

    name = ""
    if tokens and tokens[0] and not tokens[0].startswith("-"):
        if tokens[0] in commands:
            name = tokens.popleft()
        elif not registry.root.arguments:
            return _failure(name, UnknownCommandError(
                "%s is not a valid command" % tokens[0],
                title="unknown command",
                code=FaultCode.UNKNOWN_COMMAND,
                hint=_hint(tokens[0], [key for key in commands if key], "run '%s help' to see all commands" % route),
                name=tokens[0],
                docs=getdoc(FaultCode.UNKNOWN_COMMAND),
            ))

    command = commands[name]
    if name:
        route += " " + name

    values = dict.fromkeys(command.flags, "")
    positionals = deque()
    terminated = False

    while tokens:
        token = tokens.popleft()

        if terminated or not token.startswith("-"):
            positionals.append(token)
            continue

        if token == "--":
            terminated = True
            continue

        if not (parsed := _FLAG.fullmatch(token)):
            return _failure(name, UnsupportedFlagError(
                "%s is not a supported flag" % token,
                title="unsupported flag",
                code=FaultCode.UNSUPPORTED_FLAG,
                hint="use --name, --name=value, -n or -n=value forms",
                token=token,
                docs=getdoc(FaultCode.UNSUPPORTED_FLAG),
            ))

        if long := parsed["long"]:
            flag = command.flags.get(long)
            if flag is None and long.startswith("no-") and parsed["value"] is None:
                # inverted boolean flag
                inverted = command.flags.get(long.removeprefix("no-"))
                if inverted is not None and inverted.type is DataType.BOOL:
                    values[inverted.name] = "false"
                    continue
            input = "--" + long
        else:
            flag = next((x for x in command.flags.values() if x.short == parsed["short"]), None)
            input = "-" + parsed["short"]

        if flag is None:
            candidates = ["--" + x.name for x in command.flags.values()]
            candidates += ["-" + x.short for x in command.flags.values() if x.short]
            return _failure(name, UnknownFlagError(
                "%s is not a valid flag" % input,
                title="unknown flag",
                code=FaultCode.UNKNOWN_FLAG,
                hint=_hint(input, candidates, "run '%s --help' to see all flags" % route),
                name=parsed["long"] or parsed["short"],
                short=not long,
                docs=getdoc(FaultCode.UNKNOWN_FLAG),
            ))

        if parsed["value"] is not None:
            values[flag.name] = parsed["value"]
        elif flag.type is DataType.BOOL:
            values[flag.name] = "true"
        elif tokens and _takes(flag, tokens[0]):
            values[flag.name] = tokens.popleft()
        else:
            values[flag.name] = ""

    arguments = {}
    for argument in command.arguments.values():
        if argument.variadic:
            arguments[argument.name] = Slot(",".join(positionals), argument.default)
            positionals.clear()
        else:
            arguments[argument.name] = Slot(positionals.popleft() if positionals else "", argument.default)

    flags = {key: Slot(values[key], flag.literal) for key, flag in command.flags.items()}

    return Match(name, MappingProxyType(arguments), MappingProxyType(flags), tuple(positionals))


__all__ = (
    "Slot",
    "Match",
    "match",
)
