import itertools

import numpy as np
import pytest

from sens_checker.core.errors import InvalidInput, SequenceReadFailure
from sens_checker.core.models import DatasetReport, SceneResult, SequenceHealth
from sens_checker.core.statuses import InputKind, SceneStatus, TimestampStatus
from sens_checker.io.synthetic import generate_synthetic_sequence, write_scene
from sens_checker.steps.scan_dataset import classify_input, scan, scan_dataset


@pytest.mark.parametrize("path,kind", [
    ("/data/scannet/scans", InputKind.DATASET_ROOT),
    ("/data/scannet/scans/", InputKind.DATASET_ROOT),
    ("scans", InputKind.DATASET_ROOT),
    ("/data/scans/scene0000_00/scene0000_00.sens", InputKind.SINGLE_SEQUENCE),
    ("scene.sens/", InputKind.SINGLE_SEQUENCE),
    ("/data/.sens", InputKind.SINGLE_SEQUENCE),
])
def test_classify_input(path, kind):
    assert classify_input(path) == kind


@pytest.mark.parametrize("path", ["/data/scans_test", "/data/scene.txt", "/data/scans/scene0000_00", "x.sens.bak"])
def test_classify_rejects_other_shapes(path):
    with pytest.raises(InvalidInput):
        classify_input(path)


def test_missing_scene_is_counted_not_processed(tmp_path):
    root = tmp_path / "scans"
    rng = np.random.default_rng(0)
    write_scene(root, "scene_a", generate_synthetic_sequence(3, rng))
    write_scene(root, "scene_b", generate_synthetic_sequence(3, rng))
    (root / "scene_c").mkdir()

    report, scenes = scan_dataset(root)
    assert report.missing_sequence_count == 1
    assert report.sequences_processed == 2
    assert [s.status for s in scenes] == [SceneStatus.PROCESSED, SceneStatus.PROCESSED, SceneStatus.MISSING]


def test_all_healthy_dataset(tmp_path):
    root = tmp_path / "scans"
    rng = np.random.default_rng(0)
    for i in range(3):
        write_scene(root, "scene%04d_00" % i, generate_synthetic_sequence(4, rng))
    report, _ = scan_dataset(root)
    assert report.sequences_processed == 3
    assert report.fully_healthy_sequences == report.sequences_processed
    assert report.total_frames_across_sequences == 12
    assert report.total_illegal_poses == 0


def test_mixed_dataset_counters(scans_root):
    report, scenes = scan_dataset(scans_root)
    assert report.missing_sequence_count == 1
    assert report.sequences_processed == 3
    assert report.total_frames_across_sequences == 5 + 8 + 4
    assert report.total_illegal_poses == 1
    assert report.total_legal_poses == 16
    assert report.sequences_with_all_legal_poses == 2
    assert report.sequences_with_both_timestamps_good == 3
    assert report.fully_healthy_sequences == 2
    assert [s.scene for s in scenes] == sorted(s.scene for s in scenes)


def test_stray_files_in_root_are_not_scenes(scans_root):
    (scans_root / "README.txt").write_text("not a scene")
    report, scenes = scan_dataset(scans_root)
    assert report.missing_sequence_count == 1
    assert all(s.scene != "README.txt" for s in scenes)


def test_corrupt_scene_does_not_abort_scan(scans_root):
    corrupt = scans_root / "scene0004_00" / "scene0004_00.sens"
    corrupt.parent.mkdir()
    corrupt.write_bytes(b"garbage")
    report, scenes = scan_dataset(scans_root)
    assert report.failed_sequence_count == 1
    assert report.sequences_processed == 3
    failed = [s for s in scenes if s.status == SceneStatus.READ_FAILED]
    assert len(failed) == 1 and failed[0].scene == "scene0004_00"
    assert failed[0].error


def test_workers_do_not_change_results(scans_root):
    sequential = scan_dataset(scans_root, workers=1)
    threaded = scan_dataset(scans_root, workers=4)
    assert sequential == threaded


def test_missing_root_is_invalid(tmp_path):
    with pytest.raises(InvalidInput):
        scan_dataset(tmp_path / "scans")


def test_report_fold_is_order_independent():
    def h(frames, illegal, d, c):
        return SceneResult(scene="s", sens_path="s", status=SceneStatus.PROCESSED,
                           health=SequenceHealth(frames, illegal, d, c))

    results = [
        h(10, 0, TimestampStatus.GOOD, TimestampStatus.GOOD),
        h(5, 2, TimestampStatus.GOOD, TimestampStatus.NOT_MONOTONIC),
        h(7, 0, TimestampStatus.NOT_AVAILABLE, TimestampStatus.GOOD),
        SceneResult(scene="m", sens_path="m", status=SceneStatus.MISSING),
        SceneResult(scene="f", sens_path="f", status=SceneStatus.READ_FAILED, error="x"),
    ]
    expected = DatasetReport.from_results(results)
    for perm in itertools.permutations(results):
        assert DatasetReport.from_results(perm) == expected
    assert expected == DatasetReport(
        missing_sequence_count=1, failed_sequence_count=1,
        total_frames_across_sequences=22, total_illegal_poses=2,
        sequences_with_all_legal_poses=2, sequences_with_both_timestamps_good=1,
        fully_healthy_sequences=1, sequences_processed=3,
    )


def test_fold_returns_new_report():
    base = DatasetReport()
    health = SequenceHealth(3, 0, TimestampStatus.GOOD, TimestampStatus.GOOD)
    folded = base.fold(health)
    assert base.sequences_processed == 0
    assert folded.sequences_processed == 1


def test_scan_single_sequence(sens_file):
    outcome = scan(sens_file)
    assert outcome.report is None
    assert outcome.health is not None and outcome.health.healthy


def test_scan_dataset_root(scans_root):
    outcome = scan(str(scans_root) + "/")
    assert outcome.health is None
    assert outcome.report.sequences_processed == 3
    assert len(outcome.scenes) == 4


def test_scan_single_sequence_read_failure_propagates(tmp_path):
    fp = tmp_path / "broken.sens"
    fp.write_bytes(b"\x04\x00\x00\x00")
    with pytest.raises(SequenceReadFailure):
        scan(fp)
