from .base import BaseCommand, CommandError, get_command_registry

__all__ = ["BaseCommand", "CommandError", "get_command_registry"]
