from rich.pretty import pprint

from commando import *

registry = Registry(
    "reactor",
    "v1.0.0",
    "Reactor is a command-line tool to generate ReactJS projects.\n"
    "It helps you create components, write test cases, start a development server and much more.",
    shell=True,
)


def dump(arguments, flags):
    pprint({name: value.value for name, value in arguments.items()})
    pprint({name: value.value for name, value in flags.items()})


# $ reactor <category> --verbose|-V --version|-v --help|-h
registry.register().add_argument(
    "category", "category of the information to look for"
).add_flag(
    "verbose,V", "display log information", DataType.BOOL
).set_action(dump)


# $ reactor create <name> [version] --dir|-d <dir> --type|-t [type] --timeout [timeout] --help|-h
@registry.command("create")
def create(arguments, flags):
    dump(arguments, flags)


create.set_descr(
    "This command creates a React component of a given type and output component files in a project directory."
).set_short_descr(
    "creates a React component"
).add_argument(
    "name", "name of the component to create"
).add_argument(
    "version", "version of the component", "1.0.0"
).add_argument(
    "files...", "files to include in the component"
).add_flag(
    "dir, d", "output directory of the component files", DataType.STRING
).add_flag(
    "type, t", "type of the component to create", str, "simple_type"
).add_flag(
    "timeout", "operation timeout in seconds", int, 60
).add_flag(
    "verbose,v", "display logs while creating the component files", bool
)


# $ reactor serve --port|-p [port] --help|-h
@registry.command("serve")
def serve(arguments, flags):
    dump(arguments, flags)


serve.set_descr(
    "This command starts the Webpack dev-server on an available port."
).set_short_descr(
    "starts a development server"
).add_flag(
    "port,p", "port to listen on", int, 8080
)


if __name__ == '__main__':
    run(registry)
