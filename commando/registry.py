"""
Commando registry: declare a command tree, then resolve one invocation at a time.

What this module provides
- Registry: owns the executable name, version, description, the ordered command
  table (root, version, help and every host command) and the event listener.
  • register(name): idempotent command registration with built-in flag injection.
  • parse(prompt): tokenize a prompt with the matcher and resolve it.
  • resolve(match): the resolution engine (help/version dispatch, defaults,
    required fields, type coercion, action invocation).
  • print_help()/print_version(): render through rich and notify the listener.
- run(registry, prompt): convenience runner at the outermost boundary.

Resolution order (observable, preserved exactly)
1. a matcher fault terminates the invocation.
2. the `help` command renders the root usage.
3. a set --help flag renders the usage of the selected command.
4. the `version` command, or --version on the root, renders the version banner.
5. a missing action is a fault for sub-commands and a silent stop for the root.
6. arguments, then flags, are validated in declaration order; the first failing
   field ends the invocation (later fields are not looked at).
7. the action receives (arguments, flags) as ordered mappings.

Quick start
    from commando import Registry, DataType

    registry = Registry("reactor", "v1.0.0", "Reactor generates ReactJS projects.")

    @registry.command("create")
    def create(arguments, flags):
        print(arguments["name"].value, flags["dir"].value)

    create.add_argument("name", "name of the component")
    create.add_flag("dir,d", "output directory", DataType.STRING)

    registry.parse(["create", "button", "-d", "./src"])

Notes
- A registry is not thread-safe. Registration is expected to finish before the
  first resolution; afterwards the schema is sealed and new entries are rejected.
"""
import logging
import os.path
import re
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from .faults import *
from .matcher import Slot, match
from .render import render_help, render_version
from .schema import ArgumentValue, Command, DataType, FlagValue
from .utils import *

logger = logging.getLogger(__name__)

HELP = "help"
VERSION = "version"

# automatic command and flag descriptions
HELP_COMMAND_DESCR = "This command displays the usage information of this CLI application."
HELP_COMMAND_SHORT_DESCR = "displays usage information"
VERSION_COMMAND_DESCR = "This command displays the version number of this CLI application."
VERSION_COMMAND_SHORT_DESCR = "displays version number"
HELP_FLAG_DESCR = "displays usage information of the application or a command"
VERSION_FLAG_DESCR = "displays version number"


def _resolved(slot, /):
    # the user value wins unless it is empty
    return slot.value or slot.default


class Registry:
    """
    Registry of commands for one CLI application.

    Construction
    - executable: program name shown in usage lines; defaults to basename(sys.argv[0]).
      Whitespace is removed and an empty name is rejected (ValueError).
    - version, descr: trimmed strings used by the version banner and the root usage.
    - shell: when True, faults are printed on stderr and the process exits with
      status 1; when False (default), faults are raised to the host.
    - fancy, colorful: rendering chrome for help, version and faults.
    - console: rich Console used for help/version output (stdout by default).

    The root (""), `version` and `help` commands are registered eagerly; hosts
    may override their descriptions via register(name).set_descr(...).
    """
    executable = mirror("executable")
    version = mirror("version")
    descr = mirror("descr")
    commands = mirror("commands")
    listener = mirror("listener")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    console = mirror("console")
    sealed = mirror("sealed")

    def __init__(
            self,
            executable=Unset,
            /,
            version="",
            descr="",
            *,
            shell=False,
            fancy=False,
            colorful=False,
            console=Unset
    ):
        executable = coalesce(executable, os.path.basename(sys.argv[0]))
        if not isinstance(executable, str):
            raise TypeError("registry executable name must be a string")
        if not (executable := re.sub(r"\s+", "", executable)):
            raise ValueError("executable name must be a non-empty string")
        if not isinstance(version, str):
            raise TypeError("registry version must be a string")
        if not isinstance(descr, str):
            raise TypeError("registry description must be a string")

        self._executable = executable
        self._version = version.strip()
        self._descr = descr.strip()
        self._commands = {}
        self._listener = None
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._console = coalesce(console, Console())
        self._sealed = False

        self.register()
        self.register(VERSION).set_descr(VERSION_COMMAND_DESCR).set_short_descr(VERSION_COMMAND_SHORT_DESCR)
        self.register(HELP).set_descr(HELP_COMMAND_DESCR).set_short_descr(HELP_COMMAND_SHORT_DESCR)

    def __rich_repr__(self):
        yield "executable", self.executable
        yield "version", self.version
        yield "commands", tuple(self._commands)

    def __repr__(self):
        return "registry(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    @property
    def root(self):
        """
        Return the root command (registered under the empty name).
        """
        return self._commands[""]

    def register(self, name=None, /):
        """
        Register a command, or return the already registered one.

        Behavior
        - None or "" registers the root command; whitespace in names is removed.
        - The root receives a boolean --version/-v flag, then every command receives
          a boolean --help/-h flag. Both are ordinary flags afterwards.

        Raises
        - TypeError: when name is neither None nor a string.
        - RuntimeError: when a new command is added after the first resolution.
        """
        if name is None:
            name = ""
        if not isinstance(name, str):
            raise TypeError("value of the command must be a string")

        if (command := self._commands.get(re.sub(r"\s+", "", name))) is None:
            if self._sealed:
                raise RuntimeError(f"registry is sealed, cannot register command {name!r}")
            command = Command(name, self)
            self._commands[command.name] = command
            logger.debug("registered command %r", command.name)

        if command.is_root:
            command.add_flag("version,v", VERSION_FLAG_DESCR, DataType.BOOL)
        command.add_flag("help,h", HELP_FLAG_DESCR, DataType.BOOL)

        return command

    def command(self, name=None, /):
        """
        Decorator form of register(name).set_action(callback).

        Returns
        - a decorator that binds the decorated callable as the command action and
          returns the Command itself, so declarations can continue on it:

            @registry.command("serve")
            def serve(arguments, flags): ...

            serve.add_flag("port,p", "port to listen on", int, 8080)
        """
        command = self.register(name)

        @rename("command")
        def wrapper(action, /):
            command.set_action(action)
            return command

        return wrapper

    def listen(self, listener, /):
        """
        Register the event listener notified with "help" or "version" after a render.

        Contract
        - listener: callable taking one positional argument (the event name).
        - the first registered listener wins; later calls are silent no-ops.

        Returns
        - The same callable, enabling decorator-style usage: @registry.listen
        """
        if not callable(listener):
            raise TypeError("registry listener must be callable")
        if self._listener is None:
            self._listener = listener
        return listener

    def _notify(self, event, /):
        if self._listener is not None:
            self._listener(event)

    def print_help(self, command=Unset, /):
        """
        Render the usage banner of `command` (root by default) and notify "help".
        """
        command = coalesce(command, self.root)
        if isinstance(command, str):
            command = self._commands[command]
        logger.debug("rendering usage of command %r", command.name)
        self._console.print(render_help(self, command))
        self._notify("help")

    def print_version(self):
        """
        Render the version banner and notify "version".
        """
        logger.debug("rendering version %r", self._version)
        self._console.print(render_version(self))
        self._notify("version")

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this registry's runtime flags merged in.

        In non-shell mode the fault is raised; in shell mode it is printed on stderr
        and the process exits. This method never returns normally for
        CommandException instances.
        """
        trigger(
            fault,
            **options,
            registry=self,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
        )

    def parse(self, prompt=Unset, /):
        """
        Tokenize and resolve one invocation.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; will be split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, used as-is.

        Raises
        - TypeError: when prompt is not Unset/str/Iterable[str].
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        self.resolve(match(self, tokens))

    def resolve(self, result, /):
        """
        Resolve a matcher result into typed values and dispatch it.

        Parameters
        - result: Match produced by commando.matcher.match() (or any object honouring
          the same contract: command, arguments, flags, fault).

        Behavior
        - Seals the registry (first call).
        - Runs the resolution order documented at module level. Exactly one terminal
          outcome happens: a render, a fault, or the action call.
        - Faults go through trigger(); the action is never called after a failure.
        """
        self._sealed = True

        if result.fault is not None:
            return self.trigger(result.fault)

        command = self._commands[result.command]
        route = " ".join(part for part in (self._executable, command.name) if part)
        logger.debug("selected command %r", command.name)

        if command.name == HELP:
            return self.print_help(self.root)

        if HELP in command.flags and _resolved(result.flags.get(HELP, Slot("", "false"))) == "true":
            return self.print_help(command)

        if command.name == VERSION or (
                command.is_root and _resolved(result.flags.get(VERSION, Slot("", "false"))) == "true"
        ):
            return self.print_version()

        if command.action is None:
            if not command.is_root:
                return self.trigger(MissingActionError(
                    "action function for the %s command is not registered" % command.name,
                    title="missing action",
                    code=FaultCode.MISSING_ACTION,
                    hint="register one with set_action() before parsing",
                    command=command.name,
                    docs=getdoc(FaultCode.MISSING_ACTION),
                ))
            logger.debug("root command has no action, nothing to do")
            return

        if extras := getattr(result, "extras", ()):
            logger.debug("ignoring unmatched tokens %r", extras)

        arguments = {}
        for name, argument in command.arguments.items():
            value = _resolved(result.arguments.get(name, Slot("", argument.default)))
            if argument.required and not value:
                return self.trigger(MissingArgumentError(
                    "value of the %s argument can not be empty" % name,
                    title="missing argument",
                    code=FaultCode.MISSING_ARGUMENT,
                    hint="run '%s --help' to see the expected arguments" % route,
                    argument=argument,
                    docs=getdoc(FaultCode.MISSING_ARGUMENT),
                ))
            arguments[name] = ArgumentValue(argument, value)

        flags = {}
        for name, flag in command.flags.items():
            value = _resolved(result.flags.get(name, Slot("", flag.literal)))
            if flag.required and not value:
                return self.trigger(MissingFlagError(
                    "value of the --%s flag can not be empty" % name,
                    title="missing flag",
                    code=FaultCode.MISSING_FLAG,
                    hint="pass it as --%s <value>" % name,
                    flag=flag,
                    docs=getdoc(FaultCode.MISSING_FLAG),
                ))

            match flag.type:
                case DataType.BOOL:
                    value = value == "true"
                case DataType.INT:
                    if not re.fullmatch(r"[+-]?[0-9]+", value):
                        return self.trigger(InvalidFlagValueError(
                            "value of the --%s flag must be an integer" % name,
                            title="invalid flag value",
                            code=FaultCode.INVALID_FLAG_VALUE,
                            hint="pass a base-10 number (for example: --%s=10)" % name,
                            flag=flag,
                            value=value,
                            docs=getdoc(FaultCode.INVALID_FLAG_VALUE),
                        ))
                    value = int(value)

            flags[name] = FlagValue(flag, value)

        command.action(arguments, flags)


def run(registry, prompt=Unset, /):
    """
    Convenience runner for a registry.

    Parameters
    - registry: a Registry instance.
    - prompt:
      • Unset: read sys.argv[1:].
      • str: split with shlex.split.
      • Iterable[str]: use items as tokens.

    Raises
    - TypeError: when 'registry' is not a Registry.
    """
    if not isinstance(registry, Registry):
        target = "argument" if prompt is Unset else "first argument"
        raise TypeError(f"run() {target} must be a registry")
    registry.parse(prompt)


__all__ = (
    "Registry",
    "run",
    "HELP",
    "VERSION",
)
