"""fretlab: seven-string scale, fingering and diatonic-harmony engine."""

__version__ = "0.1.0"

from fretlab.config import DEFAULT_CONFIG, EngineConfig
from fretlab.pipeline import ScaleData, generate_scale_data
from fretlab.result import Failure, Success
from fretlab.scale_theory import SCALE_NAMES, UnknownScaleError, generate_scale

__all__ = [
    "DEFAULT_CONFIG",
    "EngineConfig",
    "Failure",
    "SCALE_NAMES",
    "ScaleData",
    "Success",
    "UnknownScaleError",
    "__version__",
    "generate_scale",
    "generate_scale_data",
]
