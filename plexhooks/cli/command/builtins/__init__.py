from .match import MatchCommand
from .sensors import SensorsCommand
from .serve import ServeCommand

__all__ = ["MatchCommand", "SensorsCommand", "ServeCommand"]
