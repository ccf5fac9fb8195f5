"""Text rendering of sequence and dataset verdicts."""

from typing import List

import click

from .core.models import DatasetReport, IllegalPose, SceneResult, SensHeader, SequenceHealth
from .core.statuses import SceneStatus, TimestampStatus


class Reporter:
    """Formats verdicts as text lines; `color` toggles green/red yes/no highlighting."""

    def __init__(self, color: bool = True) -> None:
        self.color = color

    def yes_no(self, flag: bool, suffix: str = "") -> str:
        text = ("yes" if flag else "no") + suffix
        if not self.color:
            return text
        return click.style(text, fg="green" if flag else "red")

    def header_lines(self, header: SensHeader) -> List[str]:
        return [
            "Loading data ... done!",
            "Sensor: {} (version {})".format(header.sensor_name, header.version),
            "Color: {}x{} {}".format(header.color_width, header.color_height, header.color_compression),
            "Depth: {}x{} {} (shift {:g})".format(
                header.depth_width, header.depth_height, header.depth_compression, header.depth_shift
            ),
            "Frames: {}".format(header.num_frames),
        ]

    def illegal_pose_line(self, diag: IllegalPose) -> str:
        rows = "".join("[" + ", ".join("{:g}".format(v) for v in row) + "]" for row in diag.matrix.tolist())
        return "Found illegal transformation at frame {}: [{}]".format(diag.frame_index, rows)

    def sequence_lines(self, health: SequenceHealth) -> List[str]:
        depth, color = health.depth_status, health.color_status
        return [
            "Depth timestamps are monotonic: " + self.yes_no(depth != TimestampStatus.NOT_MONOTONIC),
            "RGB   timestamps are monotonic: " + self.yes_no(color != TimestampStatus.NOT_MONOTONIC),
            "Depth timestamps are available: " + self.yes_no(depth != TimestampStatus.NOT_AVAILABLE),
            "RGB   timestamps are available: " + self.yes_no(color != TimestampStatus.NOT_AVAILABLE),
            "All  camera  poses  were legal: " + self.yes_no(
                health.pose_valid, " {}/{}".format(health.illegal_pose_count, health.total_frames)
            ),
            "",
        ]

    def scene_lines(self, result: SceneResult) -> List[str]:
        lines = ["Processing " + result.sens_path]
        if result.status == SceneStatus.MISSING:
            lines += ["file missing, ignored.", ""]
        elif result.status == SceneStatus.READ_FAILED:
            lines += ["read failed, ignored: {}".format(result.error), ""]
        elif result.health is not None:
            lines += self.sequence_lines(result.health)
        return lines

    def dataset_lines(self, report: DatasetReport) -> List[str]:
        n = report.sequences_processed
        return [
            "======================",
            "====    Report    ====",
            "======================",
            "No .sens file inside: {}".format(report.missing_sequence_count),
            "Unreadable .sens file: {}".format(report.failed_sequence_count),
            "Total Pose Number: {}".format(report.total_frames_across_sequences),
            "Total Valid Pose Number: {}".format(report.total_legal_poses),
            "Total Invalid Pose Number: {}".format(report.total_illegal_poses),
            "Total Valid Pose Seq Number: {} / {}".format(report.sequences_with_all_legal_poses, n),
            "Total Valid Timestamp Seq Number: {} / {}".format(report.sequences_with_both_timestamps_good, n),
            "Total Healthy Seq Number: {} / {}".format(report.fully_healthy_sequences, n),
        ]
