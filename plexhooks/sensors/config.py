import logging
import typing
import uuid
from collections.abc import Mapping

from pydantic_mini import Attrib, BaseModel, MiniAnnotated

from plexhooks.exceptions import ImproperlyConfigured
from plexhooks.filters import normalize_filters

logger = logging.getLogger(__name__)

SENSOR_UUID_NAMESPACE = uuid.NAMESPACE_URL

SENSOR_UUID_PREFIX = "plex-webhook-sensor"


def generate_sensor_uuid(seed: typing.Any) -> str:
    """Stable identity for a sensor; only the seed determines it."""
    return str(uuid.uuid5(SENSOR_UUID_NAMESPACE, f"{SENSOR_UUID_PREFIX}:{seed}"))


def short_serial(sensor_uuid: str) -> str:
    return sensor_uuid.split("-", 1)[0].upper()


class SensorConfig(BaseModel):
    """
    A configured sensor. Filters are normalised on construction, so a
    group made only of equality rules is stored as an empty group.
    """

    name: str
    uuid: str
    sensor_id: MiniAnnotated[typing.Optional[str], Attrib(default=None)]
    serial: MiniAnnotated[typing.Optional[str], Attrib(default=None)]
    filters: MiniAnnotated[
        list, Attrib(default_factory=list, pre_formatter=normalize_filters)
    ]

    def __hash__(self) -> int:
        return hash(self.uuid)


def expand_config(config: typing.Optional[typing.Mapping[str, typing.Any]]) -> dict:
    """
    Fill in the derived fields of each sensor in a raw platform config.

    Unnamed sensors are called ``Sensor <n>``. The identity seed is the
    sensor's ``id`` when given, its name otherwise. The input is not modified.
    """
    config = dict(config or {})
    sensors = config.get("sensors")
    if not isinstance(sensors, list):
        sensors = []

    expanded = []
    for index, sensor in enumerate(sensors, start=1):
        if not isinstance(sensor, Mapping):
            logger.warning(f"Ignoring sensor #{index}: expected a mapping, got {sensor!r}")
            continue

        name = sensor.get("name")
        if not isinstance(name, str) or not name:
            name = f"Sensor {index}"

        seed = sensor.get("id") or name
        sensor_uuid = generate_sensor_uuid(seed)
        expanded.append(
            {
                **sensor,
                "name": name,
                "id": str(seed),
                "uuid": sensor_uuid,
                "serial": short_serial(sensor_uuid),
            }
        )

    config["sensors"] = expanded
    return config


def load_sensors(
    config: typing.Optional[typing.Mapping[str, typing.Any]],
) -> typing.List[SensorConfig]:
    """
    Build sensor models from a raw platform config.
    Raises:
        ImproperlyConfigured: If two sensors share an identity.
    """
    sensors: typing.List[SensorConfig] = []
    seen: typing.Dict[str, str] = {}

    for sensor in expand_config(config)["sensors"]:
        if sensor["uuid"] in seen:
            raise ImproperlyConfigured(
                f"Sensor '{sensor['name']}' has the same identity as "
                f"'{seen[sensor['uuid']]}'. Give one of them a unique 'id'."
            )
        seen[sensor["uuid"]] = sensor["name"]

        sensors.append(
            SensorConfig(
                name=sensor["name"],
                uuid=sensor["uuid"],
                sensor_id=sensor["id"],
                serial=sensor["serial"],
                filters=sensor.get("filters"),
            )
        )
    return sensors
