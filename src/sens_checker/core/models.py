from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable, List, Optional

import numpy as np

from .statuses import SceneStatus, TimestampStatus

@dataclass(frozen=True)
class FrameRecord:
    depth_timestamp: int
    color_timestamp: int
    camera_to_world: np.ndarray  # (4, 4) row-major


@dataclass(frozen=True)
class IllegalPose:
    frame_index: int
    matrix: np.ndarray


@dataclass(frozen=True)
class SensHeader:
    version: int
    sensor_name: str
    color_compression: str
    depth_compression: str
    color_width: int
    color_height: int
    depth_width: int
    depth_height: int
    depth_shift: float
    num_frames: int


@dataclass(frozen=True)
class SequenceHealth:
    total_frames: int
    illegal_pose_count: int
    depth_status: TimestampStatus
    color_status: TimestampStatus

    def __post_init__(self) -> None:
        if not 0 <= self.illegal_pose_count <= self.total_frames:
            raise ValueError(
                "illegal_pose_count must be within [0, total_frames], got {}/{}".format(
                    self.illegal_pose_count, self.total_frames
                )
            )

    @property
    def pose_valid(self) -> bool:
        return self.illegal_pose_count == 0

    @property
    def timestamp_valid(self) -> bool:
        return self.depth_status == TimestampStatus.GOOD and self.color_status == TimestampStatus.GOOD

    @property
    def healthy(self) -> bool:
        return self.pose_valid and self.timestamp_valid


@dataclass(frozen=True)
class SceneResult:
    scene: str
    sens_path: str
    status: SceneStatus
    health: Optional[SequenceHealth] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class DatasetReport:
    """Dataset-level counters. Every update returns a new report."""
    missing_sequence_count: int = 0
    failed_sequence_count: int = 0
    total_frames_across_sequences: int = 0
    total_illegal_poses: int = 0
    sequences_with_all_legal_poses: int = 0
    sequences_with_both_timestamps_good: int = 0
    fully_healthy_sequences: int = 0
    sequences_processed: int = 0

    @property
    def total_legal_poses(self) -> int:
        return self.total_frames_across_sequences - self.total_illegal_poses

    def fold(self, health: SequenceHealth) -> "DatasetReport":
        return replace(
            self,
            total_frames_across_sequences=self.total_frames_across_sequences + health.total_frames,
            total_illegal_poses=self.total_illegal_poses + health.illegal_pose_count,
            sequences_with_all_legal_poses=self.sequences_with_all_legal_poses + int(health.pose_valid),
            sequences_with_both_timestamps_good=self.sequences_with_both_timestamps_good + int(health.timestamp_valid),
            fully_healthy_sequences=self.fully_healthy_sequences + int(health.healthy),
            sequences_processed=self.sequences_processed + 1,
        )

    def with_missing(self) -> "DatasetReport":
        return replace(self, missing_sequence_count=self.missing_sequence_count + 1)

    def with_failure(self) -> "DatasetReport":
        return replace(self, failed_sequence_count=self.failed_sequence_count + 1)

    def add(self, result: SceneResult) -> "DatasetReport":
        if result.status == SceneStatus.MISSING:
            return self.with_missing()
        if result.status == SceneStatus.READ_FAILED:
            return self.with_failure()
        if result.health is None:
            raise ValueError("processed scene {} has no health".format(result.scene))
        return self.fold(result.health)

    @classmethod
    def from_results(cls, results: Iterable[SceneResult]) -> "DatasetReport":
        report = cls()
        for r in results:
            report = report.add(r)
        return report


@dataclass(frozen=True)
class ScanOutcome:
    """Exactly one of `health` (single sequence) or `report` (dataset root) is set."""
    input_path: Path
    health: Optional[SequenceHealth] = None
    report: Optional[DatasetReport] = None
    scenes: List[SceneResult] = field(default_factory=list)
