import argparse
import json
from pathlib import Path
from typing import Optional

from asgiref.sync import async_to_sync

from plexhooks.exceptions import SensorDoesNotExist
from plexhooks.filters import FilterEvaluator
from plexhooks.verbose import TraceRecorder

from ..base import BaseCommand, CommandError


class MatchCommand(BaseCommand):
    help = "Evaluate a saved webhook payload against the configured sensors"
    name = "match"

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("payload", help="JSON file holding a Plex webhook payload")
        parser.add_argument(
            "--sensor", default=None, help="Only evaluate this sensor (name or uuid)"
        )
        parser.add_argument(
            "--dispatch",
            action="store_true",
            help="Also dispatch the payload and report the resulting sensor states",
        )

    def handle(self, *args, **options) -> Optional[str]:
        payload = self._load_payload(options["payload"])
        _, platform = self.initialise(options.get("config"))

        sensor_configs = platform.sensor_configs
        if options.get("sensor"):
            try:
                sensor_configs = [platform.get_sensor(options["sensor"]).config]
            except SensorDoesNotExist as e:
                raise CommandError(e.message) from e

        for sensor_config in sensor_configs:
            trace = TraceRecorder()
            matched = FilterEvaluator(trace, payload, sensor_config.filters).match()

            self.notice(f"[{sensor_config.name}]\n")
            for line in trace:
                self.stdout.write(f"{line}\n")
            if matched:
                self.success("=> match\n")
            else:
                self.warning("=> no match\n")

        if options.get("dispatch"):
            async_to_sync(platform.process_payload)(payload)
            for sensor in platform.sensors.values():
                self.stdout.write(f"{sensor.name}: {sensor.state}\n")
        return None

    @staticmethod
    def _load_payload(path: str):
        try:
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise CommandError(f"Payload file {path} does not exist") from e
        except json.JSONDecodeError as e:
            raise CommandError(f"Payload file {path} is not valid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise CommandError("Payload must be a JSON object")
        return payload
