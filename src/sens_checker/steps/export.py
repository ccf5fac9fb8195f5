
from pathlib import Path
from typing import Dict, List, Optional
import json

import polars as pl

from ..core.constants import SCENES_TABLE, FAILURES_FILE, SUMMARY_FILE
from ..core.models import DatasetReport, SceneResult, ScanOutcome
from ..core.statuses import SceneStatus

SCENES_SCHEMA = {
    "scene": pl.Utf8, "sens_path": pl.Utf8, "status": pl.Utf8,
    "total_frames": pl.Int64, "illegal_pose_count": pl.Int64,
    "depth_status": pl.Utf8, "color_status": pl.Utf8,
    "pose_valid": pl.Boolean, "timestamp_valid": pl.Boolean, "healthy": pl.Boolean,
    "error": pl.Utf8,
}

def scene_row(r: SceneResult) -> Dict[str, object]:
    h = r.health
    return {
        "scene": r.scene,
        "sens_path": r.sens_path,
        "status": r.status.value,
        "total_frames": h.total_frames if h else None,
        "illegal_pose_count": h.illegal_pose_count if h else None,
        "depth_status": h.depth_status.value if h else None,
        "color_status": h.color_status.value if h else None,
        "pose_valid": h.pose_valid if h else None,
        "timestamp_valid": h.timestamp_valid if h else None,
        "healthy": h.healthy if h else None,
        "error": r.error,
    }

def _outcome_scenes(outcome: ScanOutcome) -> List[SceneResult]:
    if outcome.report is not None:
        return list(outcome.scenes)
    # single sequence: one processed row named after the file
    return [SceneResult(
        scene=outcome.input_path.stem, sens_path=str(outcome.input_path),
        status=SceneStatus.PROCESSED, health=outcome.health,
    )]

def export_outcome(outcome: ScanOutcome, out_dir: Path) -> Dict[str, int]:
    """
    Writes:
      - scenes.parquet (one row per scene)
      - failures.jsonl (every scene that is not healthy)
      - summary.yaml (dataset counters)
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    scenes = _outcome_scenes(outcome)
    rows = [scene_row(r) for r in scenes]

    pl.DataFrame(rows, schema=SCENES_SCHEMA).write_parquet(out_dir / SCENES_TABLE)

    with open(out_dir / FAILURES_FILE, "w") as f:
        for row in rows:
            if not row["healthy"]:
                f.write(json.dumps(row) + "\n")

    report: Optional[DatasetReport] = outcome.report
    if report is None:
        report = DatasetReport.from_results(scenes)
    summary = {
        "missing_sequences": report.missing_sequence_count,
        "unreadable_sequences": report.failed_sequence_count,
        "total_frames": report.total_frames_across_sequences,
        "total_illegal_poses": report.total_illegal_poses,
        "pose_valid_sequences": report.sequences_with_all_legal_poses,
        "timestamp_valid_sequences": report.sequences_with_both_timestamps_good,
        "healthy_sequences": report.fully_healthy_sequences,
        "processed_sequences": report.sequences_processed,
    }
    (out_dir / SUMMARY_FILE).write_text("".join("{}: {}\n".format(k, v) for k, v in summary.items()))
    return summary
