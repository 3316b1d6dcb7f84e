import sys
import typing

from .command import get_command_registry
from .command import builtins  # noqa: F401  registers the builtin commands

PROG_NAME = "plexhooks"

HELP_FLAGS = ("-h", "--help")


def print_usage(stream=None) -> None:
    stream = stream or sys.stdout
    stream.write(f"usage: {PROG_NAME} <command> [options]\n\nCommands:\n")
    for name, command in sorted(get_command_registry().items()):
        stream.write(f"  {name:<10}{command.help}\n")


def main(argv: typing.Optional[typing.List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    # "plexhooks help <command>" reads as "plexhooks <command> --help"
    if len(argv) > 1 and argv[0] == "help":
        argv = [argv[1], HELP_FLAGS[1]]

    if not argv or argv[0] in HELP_FLAGS or argv[0] == "help":
        print_usage()
        return 0

    subcommand, rest = argv[0], argv[1:]
    command_class = get_command_registry().get(subcommand)
    if command_class is None:
        sys.stderr.write(f"Unknown command: '{subcommand}'\n")
        print_usage(sys.stderr)
        return 1

    command = command_class()
    if any(arg in HELP_FLAGS for arg in rest):
        command.print_help(PROG_NAME, subcommand)
        return 0

    return command.run_from_argv(PROG_NAME, subcommand, rest)
