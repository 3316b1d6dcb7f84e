import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Optional


@dataclass
class StateChangeEvent:
    """
    Signal published for every sensor whose filters matched a webhook.

    ``event_type`` is the Plex event name (e.g. ``media.play``) and
    ``sensor_uuid`` addresses the sensor that should react to it.
    """

    event_type: str
    sensor_uuid: str
    sensor_name: str
    payload: Dict[str, Any] = field(default_factory=dict)
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize event to dictionary."""
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "sensor_uuid": self.sensor_uuid,
            "sensor_name": self.sensor_name,
            "timestamp": self.timestamp.isoformat(),
            "payload": self.payload,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StateChangeEvent":
        """Deserialize event from dictionary."""
        return cls(
            event_id=data["event_id"],
            event_type=data["event_type"],
            sensor_uuid=data["sensor_uuid"],
            sensor_name=data["sensor_name"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            payload=data.get("payload", {}),
        )


class EventBusAdapterBase(ABC):
    """
    Abstract adapter for the bus that carries state-change signals from
    the platform to the sensors. Each sensor listens on the topic named
    by its uuid.
    """

    @abstractmethod
    async def publish(self, event: StateChangeEvent, topic: Optional[str] = None):
        """Publish an event, by default on the topic of ``event.sensor_uuid``."""
        pass

    @abstractmethod
    async def subscribe(
        self, topic: str, callback: Callable[[StateChangeEvent], None]
    ):
        """Subscribe to events on a topic."""
        pass

    @abstractmethod
    async def unsubscribe(
        self, topic: str, callback: Callable[[StateChangeEvent], None]
    ):
        """Unsubscribe from a topic."""
        pass

    @abstractmethod
    async def connect(self):
        """Connect to the event bus."""
        pass

    @abstractmethod
    async def disconnect(self):
        """Disconnect from the event bus."""
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        pass
