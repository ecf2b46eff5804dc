"""src/popyramid/pipelines/__init__.py"""

from .parse_file import parse_population_file
from .progress import ProcessingState, ProgressTracker, Stage
from .session import PopulationSession

__all__ = [
    "parse_population_file",
    "ProcessingState",
    "ProgressTracker",
    "Stage",
    "PopulationSession",
]
