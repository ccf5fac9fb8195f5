from pathlib import Path
from typing import Optional, Union


class SensCheckError(Exception):
    """Base class for every error raised by sens_checker."""


class InvalidArguments(SensCheckError):
    """Wrong number of command-line arguments."""


class InvalidInput(SensCheckError):
    """Input path is neither a `scans` dataset root nor a `.sens` file."""


class SequenceReadFailure(SensCheckError):
    """The sequence data could not be opened or decoded."""

    def __init__(self, path: Union[str, Path], reason: str, frame_index: Optional[int] = None) -> None:
        self.path = Path(path)
        self.reason = reason
        self.frame_index = frame_index
        where = "" if frame_index is None else " (frame {})".format(frame_index)
        super().__init__("cannot read {}{}: {}".format(self.path, where, reason))


class MissingSequenceFile(SequenceReadFailure):
    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__(path, "file not found")
