import logging
import typing
from collections.abc import Mapping

from plexhooks.event_bus import EventBusAdapterBase, InMemoryEventBus, StateChangeEvent
from plexhooks.exceptions import PayloadError, SensorDoesNotExist
from plexhooks.filters import FilterEvaluator
from plexhooks.sensors import OccupancySensor, SensorConfig, load_sensors
from plexhooks.verbose import VerboseLogger

logger = logging.getLogger(__name__)

__all__ = ["WebhooksPlatform"]


class WebhooksPlatform:
    """
    Dispatch Plex webhook payloads to the configured sensors.

    Every payload is checked against each sensor's filters. A matching
    sensor receives a StateChangeEvent carrying the payload's ``event``
    through the event bus.
    """

    def __init__(
        self,
        config: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        log: typing.Optional[VerboseLogger] = None,
        event_bus: typing.Optional[EventBusAdapterBase] = None,
    ) -> None:
        self.config = dict(config or {})
        self.log = log or VerboseLogger(
            logger, verbose=bool(self.config.get("verbose", False))
        )
        self.event_bus = event_bus or InMemoryEventBus()

        self.sensor_configs: typing.List[SensorConfig] = load_sensors(self.config)
        self.sensors: typing.Dict[str, OccupancySensor] = {
            sensor_config.uuid: OccupancySensor(sensor_config)
            for sensor_config in self.sensor_configs
        }
        self._started = False

    @property
    def is_running(self) -> bool:
        return self._started

    def get_sensor(self, name_or_uuid: str) -> OccupancySensor:
        if name_or_uuid in self.sensors:
            return self.sensors[name_or_uuid]
        for sensor in self.sensors.values():
            if sensor.name == name_or_uuid:
                return sensor
        raise SensorDoesNotExist(
            f"No sensor named '{name_or_uuid}'", params={"sensor": name_or_uuid}
        )

    async def start(self) -> None:
        if self._started:
            return

        if not self.event_bus.is_connected:
            await self.event_bus.connect()

        self._log_sensors_found()
        for sensor in self.sensors.values():
            await self.event_bus.subscribe(sensor.uuid, sensor.set_state)

        self._started = True

    async def stop(self) -> None:
        if not self._started:
            return

        for sensor in self.sensors.values():
            await self.event_bus.unsubscribe(sensor.uuid, sensor.set_state)
        await self.event_bus.disconnect()
        self._started = False

    def _log_sensors_found(self) -> None:
        if not self.sensor_configs:
            self.log.info("No accessories found in config.")
        elif len(self.sensor_configs) == 1:
            self.log.info(f"Found 1 accessory: {self.sensor_configs[0].name}")
        else:
            self.log.info(f"Found {len(self.sensor_configs)} accessories:")
            for sensor_config in self.sensor_configs:
                self.log.info(f"• {sensor_config.name}")

    def matching_sensors(
        self, payload: typing.Mapping[str, typing.Any]
    ) -> typing.List[SensorConfig]:
        """Sensors whose filters match the payload, in configuration order."""
        matched = []
        for sensor_config in self.sensor_configs:
            self.log.verbose(f"Checking rules for [{sensor_config.name}]")
            evaluator = FilterEvaluator(self.log, payload, sensor_config.filters)
            if evaluator.match():
                matched.append(sensor_config)
        return matched

    async def process_payload(
        self, payload: typing.Any
    ) -> typing.List[SensorConfig]:
        """
        Evaluate a decoded webhook payload and signal every matching sensor.
        Returns:
            The sensors that matched.
        Raises:
            PayloadError: If the payload is not a JSON object.
        """
        if not isinstance(payload, Mapping):
            raise PayloadError(
                f"Expected a JSON object payload, got {type(payload).__name__}",
                code="invalid_payload",
            )

        if not self._started:
            await self.start()

        event_type = payload.get("event")
        matched = self.matching_sensors(payload)
        for sensor_config in matched:
            await self.event_bus.publish(
                StateChangeEvent(
                    event_type=str(event_type) if event_type is not None else "",
                    sensor_uuid=sensor_config.uuid,
                    sensor_name=sensor_config.name,
                    payload=dict(payload),
                ),
                topic=sensor_config.uuid,
            )
        return matched

    def __repr__(self) -> str:
        return f"<WebhooksPlatform: sensors={len(self.sensors)}>"
