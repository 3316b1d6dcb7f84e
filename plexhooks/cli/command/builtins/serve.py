import argparse
from typing import Optional

from ..base import BaseCommand, CommandError


class ServeCommand(BaseCommand):
    help = "Start the webhook server and the configured sensors"
    name = "serve"

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--host", default=None, help="Address to bind to")
        parser.add_argument("--port", type=int, default=None, help="Port to listen on")

    def handle(self, *args, **options) -> Optional[str]:
        from plexhooks.server import run_server

        config, platform = self.initialise(options.get("config"))
        server_config = config.platform_config()["server"]

        host = options.get("host") or server_config["host"]
        port = options.get("port") or server_config["port"]

        try:
            run_server(platform, host, port)
        except OSError as e:
            raise CommandError(f"Cannot listen on {host}:{port}: {e}") from e
        return None
