from .base import BaseHardware
from .factory import build_hardware
from .simulated import SimulatedHardware

__all__ = ["BaseHardware", "build_hardware", "SimulatedHardware"]
