from pathlib import Path
from typing import Callable, Iterable, Optional, Union
import logging

import numpy as np

from ..core.models import FrameRecord, IllegalPose, SensHeader, SequenceHealth
from ..io.sens_reader import SensReader
from .pose import is_legal_pose
from .timestamps import TimestampTracker

logger = logging.getLogger(__name__)

IllegalPoseHook = Callable[[IllegalPose], None]


def _log_illegal(diag: IllegalPose) -> None:
    logger.warning("illegal transformation at frame %d: %s", diag.frame_index, diag.matrix.tolist())


def analyze_frames(
    frames: Iterable[FrameRecord],
    verbose: bool = False,
    on_illegal: Optional[IllegalPoseHook] = None,
) -> SequenceHealth:
    """
    Reduce one pass over a sequence's frames to a SequenceHealth verdict.

    With `verbose`, every illegal pose is reported as an IllegalPose
    diagnostic through `on_illegal` (or the module logger when no hook is given).
    """
    depth = TimestampTracker()
    color = TimestampTracker()
    illegal = 0
    total = 0
    emit = on_illegal or _log_illegal

    for i, frame in enumerate(frames):
        total += 1
        depth.update(frame.depth_timestamp)
        color.update(frame.color_timestamp)
        if not is_legal_pose(frame.camera_to_world):
            illegal += 1
            if verbose:
                matrix = np.array(frame.camera_to_world, copy=True).reshape(4, 4)
                emit(IllegalPose(frame_index=i, matrix=matrix))

    return SequenceHealth(
        total_frames=total,
        illegal_pose_count=illegal,
        depth_status=depth.status,
        color_status=color.status,
    )


def analyze_sens(
    sens_fp: Union[str, Path],
    verbose: bool = False,
    on_illegal: Optional[IllegalPoseHook] = None,
    on_header: Optional[Callable[[SensHeader], None]] = None,
) -> SequenceHealth:
    """Open a `.sens` file and analyze it. Raises SequenceReadFailure on unreadable data."""
    with SensReader(sens_fp) as reader:
        if on_header is not None:
            on_header(reader.header)
        return analyze_frames(reader.frames(), verbose=verbose, on_illegal=on_illegal)
