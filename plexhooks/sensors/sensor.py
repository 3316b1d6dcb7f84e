import logging
import typing

from .config import SensorConfig

if typing.TYPE_CHECKING:
    from plexhooks.event_bus import StateChangeEvent

logger = logging.getLogger(__name__)

PLAY_EVENTS: typing.Tuple[str, ...] = ("media.play", "media.resume")

PAUSE_EVENTS: typing.Tuple[str, ...] = ("media.pause", "media.stop")

INITIAL_STATE = "media.stop"


class OccupancySensor:
    """
    Occupancy-style sensor driven by Plex playback events.

    The sensor is active while its last accepted event is a play event.
    Events for other sensors and events that are neither play nor pause
    events leave the state untouched.
    """

    def __init__(self, config: SensorConfig) -> None:
        self.config = config
        self.state = INITIAL_STATE

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def uuid(self) -> str:
        return self.config.uuid

    @property
    def is_active(self) -> bool:
        return self.state in PLAY_EVENTS

    @staticmethod
    def is_valid_event(event_type: typing.Any) -> bool:
        return event_type in PLAY_EVENTS or event_type in PAUSE_EVENTS

    def set_state(self, event: "StateChangeEvent") -> bool:
        """
        Apply a state-change signal.
        Returns:
            True if the signal was addressed to this sensor and accepted.
        """
        if event.sensor_uuid != self.uuid or not self.is_valid_event(event.event_type):
            return False

        self.state = event.event_type
        logger.info(f"[{self.name}] is {'active' if self.is_active else 'inactive'}")
        return True

    def identify(self) -> None:
        logger.info(f"{self.name} occupancy sensor identified!")

    def __repr__(self) -> str:
        return f"<OccupancySensor: {self.name} ({self.state})>"
