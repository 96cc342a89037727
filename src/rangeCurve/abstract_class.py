from abc import ABC
from abc import abstractmethod
from pathlib import Path

from .models import CurveSamples


class SampleSource(ABC):
    """Abstract base class for curve sample sources."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @abstractmethod
    def load(self) -> CurveSamples:
        """Read and validate all samples from the source."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"
