from typing import Optional

from ..base import BaseCommand


class SensorsCommand(BaseCommand):
    help = "List the configured sensors"
    name = "sensors"

    def handle(self, *args, **options) -> Optional[str]:
        _, platform = self.initialise(options.get("config"))

        if not platform.sensor_configs:
            self.warning("No sensors configured.\n")
            return None

        for sensor in platform.sensor_configs:
            groups = len(sensor.filters)
            self.stdout.write(
                f"{sensor.name}\tuuid={sensor.uuid}\tserial={sensor.serial}\t"
                f"filter groups={groups}\n"
            )
        return None
