import inspect
import logging
from typing import Callable, Dict, List, Optional

from .base import EventBusAdapterBase, StateChangeEvent

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBusAdapterBase):
    """
    In-process event bus. A topic is a sensor uuid, so a signal only
    reaches the callbacks of the sensor it is addressed to.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self):
        self._connected = True
        logger.info("In-memory event bus connected")

    async def disconnect(self):
        self._connected = False
        self._subscribers.clear()
        logger.info("In-memory event bus disconnected")

    async def publish(self, event: StateChangeEvent, topic: Optional[str] = None):
        if not self._connected:
            raise RuntimeError("Event bus not connected")

        topic = topic or event.sensor_uuid
        callbacks = list(self._subscribers.get(topic, []))
        if not callbacks:
            logger.debug(f"No subscriber for {event.event_type!r} on {event.sensor_name}")
            return

        for callback in callbacks:
            try:
                if inspect.iscoroutinefunction(callback):
                    await callback(event)
                else:
                    callback(event)
            except Exception as e:
                logger.error(
                    f"Sensor {event.sensor_name} failed to handle {event.event_type!r}: {e}"
                )

    async def subscribe(self, topic: str, callback: Callable[[StateChangeEvent], None]):
        self._subscribers.setdefault(topic, []).append(callback)

    async def unsubscribe(
        self, topic: str, callback: Callable[[StateChangeEvent], None]
    ):
        callbacks = self._subscribers.get(topic, [])
        if callback in callbacks:
            callbacks.remove(callback)
        if not callbacks:
            self._subscribers.pop(topic, None)
