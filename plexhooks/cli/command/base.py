import argparse
import logging
import sys
import typing
from abc import ABCMeta, abstractmethod
from typing import Optional

from .style import Style

if typing.TYPE_CHECKING:
    from plexhooks.conf import ConfigLoader
    from plexhooks.platform import WebhooksPlatform

_command_registry: typing.Dict[str, typing.Type["BaseCommand"]] = {}


logger = logging.getLogger(__name__)


def get_command_registry() -> typing.Dict[str, typing.Type["BaseCommand"]]:
    return _command_registry


class CommandError(Exception):
    """Exception raised for command errors."""

    pass


class CommandMeta(ABCMeta):
    def __new__(mcs, name, bases, namespace, **kwargs):
        """
        Register every concrete command under its ``name``.
        """
        cls = super().__new__(mcs, name, bases, namespace)

        if name != "BaseCommand" and any(
            isinstance(base, CommandMeta) for base in bases
        ):
            command_name = getattr(cls, "name", None) or name.lower()
            if command_name in _command_registry:
                logger.warning(f"Command '{command_name}' is already registered")
            else:
                _command_registry[command_name] = cls

        return cls


class BaseCommand(metaclass=CommandMeta):
    """
    Base class for all plexhooks commands.
    Similar to Django's BaseCommand.
    """

    help = ""

    # The name to use for this command. If not provided, it uses the class name
    name = None

    def __init__(self, stdout=None, stderr=None):
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.style = Style(enabled=self.stdout.isatty())

    def create_parser(self, prog_name: str, subcommand: str) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog=f"{prog_name} {subcommand}",
            description=self.help or None,
        )
        parser.add_argument(
            "--config",
            dest="config",
            default=None,
            help="Path to a settings.py file",
        )
        self.add_arguments(parser)
        return parser

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Entry point for subclassed commands to add custom arguments.
        """
        pass

    def print_help(self, prog_name: str, subcommand: str) -> None:
        """Print the command's argument help to stdout."""
        parser = self.create_parser(prog_name, subcommand)
        parser.print_help(file=self.stdout)

    def run_from_argv(self, prog_name: str, subcommand: str, argv: typing.List[str]) -> int:
        parser = self.create_parser(prog_name, subcommand)
        options = parser.parse_args(argv)
        return self.execute(**vars(options))

    def execute(self, *args, **options) -> int:
        """
        Execute the command and return the process exit code.
        """
        try:
            output = self.handle(*args, **options)
            if output:
                self.stdout.write(output)
        except CommandError as e:
            self.stderr.write(self.style.ERROR(f"Error: {e}\n"))
            return 1
        except KeyboardInterrupt:
            self.stderr.write(self.style.WARNING("\nOperation cancelled.\n"))
            return 1
        return 0

    def initialise(
        self, config_file: typing.Optional[str] = None
    ) -> typing.Tuple["ConfigLoader", "WebhooksPlatform"]:
        from plexhooks.exceptions import ImproperlyConfigured
        from plexhooks.setup import initialise

        try:
            return initialise(config_file)
        except ImproperlyConfigured as e:
            raise CommandError(str(e)) from e

    def success(self, message: str) -> None:
        self.stdout.write(self.style.SUCCESS(message))

    def warning(self, message: str) -> None:
        self.stdout.write(self.style.WARNING(message))

    def notice(self, message: str) -> None:
        self.stdout.write(self.style.NOTICE(message))

    @abstractmethod
    def handle(self, *args, **options) -> Optional[str]:
        """
        The actual logic of the command. Subclasses must implement this.
        """
        pass
