from .config import (
    SensorConfig,
    expand_config,
    generate_sensor_uuid,
    load_sensors,
    short_serial,
)
from .sensor import PAUSE_EVENTS, PLAY_EVENTS, OccupancySensor

__all__ = [
    "SensorConfig",
    "OccupancySensor",
    "PLAY_EVENTS",
    "PAUSE_EVENTS",
    "expand_config",
    "generate_sensor_uuid",
    "load_sensors",
    "short_serial",
]
