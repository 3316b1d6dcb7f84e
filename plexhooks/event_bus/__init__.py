from .base import EventBusAdapterBase, StateChangeEvent
from .in_memory import InMemoryEventBus

__all__ = ["EventBusAdapterBase", "InMemoryEventBus", "StateChangeEvent"]
