from __future__ import annotations
from pathlib import Path
from typing import Callable, List, Optional, Tuple
import concurrent.futures as cf
import logging

from ..core.constants import DATASET_ROOT_NAME, SENS_SUFFIX, DEFAULT_WORKERS, MAX_WORKERS
from ..core.errors import InvalidInput, SequenceReadFailure
from ..core.models import DatasetReport, SceneResult, ScanOutcome, SensHeader
from ..core.statuses import InputKind, SceneStatus
from ..io.fs_base import FSBase
from ..io.fs_local import LocalFS
from ..validate.analyze_one import IllegalPoseHook, analyze_sens

logger = logging.getLogger(__name__)


def classify_input(path: str | Path) -> InputKind:
    """`.../scans` is a dataset root, `*.sens` a single sequence; anything else is rejected."""
    p = Path(path)  # drops a trailing separator
    if p.name == DATASET_ROOT_NAME:
        return InputKind.DATASET_ROOT
    if p.name.endswith(SENS_SUFFIX):
        return InputKind.SINGLE_SEQUENCE
    raise InvalidInput(f"wrong input name: {path}")


def analyze_scene(fs: FSBase, scene: str) -> SceneResult:
    sens_fp = fs.sens_path(scene)
    logger.info("processing %s", sens_fp)
    if not fs.exists(sens_fp):
        logger.info("%s: file missing, ignored", sens_fp)
        return SceneResult(scene=scene, sens_path=str(sens_fp), status=SceneStatus.MISSING)
    # A corrupt scene is recorded and skipped; it does not abort the rest of the scan.
    try:
        health = analyze_sens(sens_fp, verbose=False)
    except SequenceReadFailure as e:
        logger.error("%s: %s", scene, e)
        return SceneResult(scene=scene, sens_path=str(sens_fp), status=SceneStatus.READ_FAILED, error=str(e))
    return SceneResult(scene=scene, sens_path=str(sens_fp), status=SceneStatus.PROCESSED, health=health)


def scan_dataset(
    root: str | Path,
    *,
    workers: int = DEFAULT_WORKERS,
    fs: Optional[FSBase] = None,
) -> Tuple[DatasetReport, List[SceneResult]]:
    """
    Analyze every scene under a dataset root and fold the results.

    Scenes are gathered first and folded in scene-name order, so the report and
    the returned list do not depend on how the worker pool schedules them.
    """
    root = Path(root)
    if fs is None:
        if not root.is_dir():
            raise InvalidInput(f"dataset root is not a directory: {root}")
        fs = LocalFS(root)

    scenes = list(fs.list_scenes())
    workers = max(1, min(workers, MAX_WORKERS))

    if workers == 1:
        results = [analyze_scene(fs, s) for s in scenes]
    else:
        with cf.ThreadPoolExecutor(max_workers=workers) as ex:
            futs = [ex.submit(analyze_scene, fs, s) for s in scenes]
            results = [f.result() for f in cf.as_completed(futs)]

    results.sort(key=lambda r: r.scene)
    report = DatasetReport.from_results(results)
    logger.info(
        "scanned %d scenes: %d processed, %d missing, %d unreadable",
        len(results), report.sequences_processed, report.missing_sequence_count, report.failed_sequence_count,
    )
    return report, results


def scan(
    input_path: str | Path,
    *,
    workers: int = DEFAULT_WORKERS,
    on_illegal: Optional[IllegalPoseHook] = None,
    on_header: Optional[Callable[[SensHeader], None]] = None,
) -> ScanOutcome:
    """
    Dispatch on input shape: a dataset root yields a DatasetReport, a `.sens`
    file yields a verbose SequenceHealth. SequenceReadFailure propagates in
    single-sequence mode.
    """
    p = Path(input_path)
    kind = classify_input(p)
    if kind == InputKind.DATASET_ROOT:
        report, scenes = scan_dataset(p, workers=workers)
        return ScanOutcome(input_path=p, report=report, scenes=scenes)

    health = analyze_sens(p, verbose=True, on_illegal=on_illegal, on_header=on_header)
    return ScanOutcome(input_path=p, health=health)
