# Utils module initialization
from .config import Config
from .benchmark import (
    BenchmarkTracker,
    BenchmarkEvent,
    get_benchmark_tracker,
    reset_benchmark_tracker
)
from .helpers import (
    read_study_material,
    decode_study_material,
    estimate_audio_duration,
    get_timestamp,
)

__all__ = [
    "Config",
    "BenchmarkTracker",
    "BenchmarkEvent",
    "get_benchmark_tracker",
    "reset_benchmark_tracker",
    "read_study_material",
    "decode_study_material",
    "estimate_audio_duration",
    "get_timestamp",
]
