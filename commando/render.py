"""
Usage and version renderers.

Both renderers are pure: they build rich renderables from the registry schema
and never print. Registry.print_help()/print_version() print them on the
registry console and notify the host listener.

Help layout (fixed field order, sections omitted when empty)

    <description>

    Usage:
       <exe> [<command>] <required> [optional] [variadic...] [flags]
       <exe> <command> [flags]                    (root only, with sub-commands)

    Commands:                                     (root only)
       <name>                        <short description>

    Arguments:
       <name>                        <description> (default: <value>) (variadic)

    Flags:
       -s, --<long>                  <description> (default: <value>)

Palette keys
- description-section, usage-label, usage-section, program-name, placeholder
- section-label, command-name, argument-name, flag-name, description, default, variadic
- version-label, program-version, panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

INDENT = 3
COLUMN = 30


def _palette():
    return defaultdict(str, {
        # === Head sections ===
        "description-section": "italic #A3A3A3",  # Neutral gray
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "placeholder": "bold #FFD600",  # AMBER for positional placeholders

        # === Sections ===
        "section-label": "bold #FFFFFF",  # Pure white headers
        "command-name": "bold #36C5F0",  # Sky-blue commands
        "argument-name": "bold #FFD600",
        "flag-name": "bold #22C55E",  # GREEN for flags
        "description": "#9CA3AF",  # Muted gray
        "default": "#737373",  # Dim
        "variadic": "italic #FF4D94",

        # === Version ===
        "version-label": "bold #FFFFFF",
        "program-version": "bold #00E6FF",

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",  # Magenta branding
    } | getattr(__import__("__main__"), "__styles__", {}))


def _stylers(colorful):
    styles = _palette()

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        # Normalize to Text; in non-colorful mode, strip styles
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styler(style))

    return styler, text


def _row(head, style, body, /, *, text):
    # "   <head padded to the column><body...>", at least one space between both
    row = Text(" " * INDENT)
    row.append(text(f"{head:<{COLUMN - 1}} ", style))
    if body:
        row.append(Text(" ").join(body))
    row.rstrip()
    return row


def _placeholder(argument):
    if argument.variadic:
        return "[%s...]" % argument.name
    if argument.required:
        return "<%s>" % argument.name
    return "[%s]" % argument.name


def render_help(registry, command, /):
    """
    Build the usage banner of `command` (the root command shows the registry description).
    """
    styler, text = _stylers(registry.colorful)
    renders = []

    if descr := registry.descr if command.is_root else command.descr:
        renders.append(text(descr, "description-section"))
        renders.append(Text())

    # Usage block
    renders.append(Text.assemble(text("Usage", "usage-label"), ":"))

    usage = Text(" " * INDENT)
    usage.append(text(registry.executable, "program-name"))
    if not command.is_root:
        usage.append(" ").append(text(command.name, "usage-section"))
    for argument in command.arguments.values():
        usage.append(" ").append(text(_placeholder(argument), "placeholder"))
    usage.append(" ").append(text("[flags]", "usage-section"))
    renders.append(usage)

    children = [child for child in registry.commands.values() if not child.is_root]

    if command.is_root and children:
        renders.append(Text.assemble(
            " " * INDENT,
            text(registry.executable, "program-name"),
            " ",
            text("<command>", "placeholder"),
            " ",
            text("[flags]", "usage-section"),
        ))

    # Commands (root only)
    if command.is_root and children:
        renders.append(Text())
        renders.append(Text.assemble(text("Commands", "section-label"), ":"))
        for child in children:
            body = [text(child.short_descr, "description")] if child.short_descr else []
            renders.append(_row(child.name, "command-name", body, text=text))

    # Arguments
    if command.arguments:
        renders.append(Text())
        renders.append(Text.assemble(text("Arguments", "section-label"), ":"))
        for argument in command.arguments.values():
            body = []
            if argument.descr:
                body.append(text(argument.descr, "description"))
            if argument.default:
                body.append(text("(default: %s)" % argument.default, "default"))
            if argument.variadic:
                body.append(text("(variadic)", "variadic"))
            renders.append(_row(argument.name, "argument-name", body, text=text))

    # Flags
    if command.flags:
        renders.append(Text())
        renders.append(Text.assemble(text("Flags", "section-label"), ":"))
        for flag in command.flags.values():
            head = "-%s, --%s" % (flag.short, flag.name) if flag.short else "--%s" % flag.name
            body = []
            if flag.descr:
                body.append(text(flag.descr, "description"))
            if flag.literal:
                body.append(text("(default: %s)" % flag.literal, "default"))
            renders.append(_row(head, "flag-name", body, text=text))

    renderable = Group(*renders)

    if registry.fancy:
        name = " ".join(part for part in (registry.executable, command.name) if part)
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{name} HELP".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )

    return renderable


def render_version(registry, /):
    """
    Build the single-line version banner: "Version: <version>".
    """
    styler, text = _stylers(registry.colorful)

    renderable = Text.assemble(text("Version", "version-label"), ": ", text(registry.version, "program-version"))

    if registry.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{registry.executable} VERSION".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )

    return renderable


__all__ = (
    "render_help",
    "render_version",
)
