from pathlib import Path

import numpy as np
import pytest

from sens_checker.core.models import FrameRecord
from sens_checker.io.synthetic import generate_synthetic_sequence, write_scene, write_sens


def frame(depth_ts, color_ts, last_row=(0.0, 0.0, 0.0, 1.0)):
    m = np.eye(4, dtype=np.float32)
    m[3] = last_row
    return FrameRecord(depth_timestamp=depth_ts, color_timestamp=color_ts, camera_to_world=m)


@pytest.fixture
def make_frame():
    return frame


@pytest.fixture
def healthy_frames():
    return generate_synthetic_sequence(10, np.random.default_rng(7))


@pytest.fixture
def sens_file(tmp_path, healthy_frames) -> Path:
    return write_sens(tmp_path / "scene0000_00.sens", healthy_frames)


@pytest.fixture
def scans_root(tmp_path):
    """scans/ with two healthy scenes, one scene without a .sens file, one with a bad pose."""
    root = tmp_path / "scans"
    rng = np.random.default_rng(1)
    write_scene(root, "scene0000_00", generate_synthetic_sequence(5, rng))
    write_scene(root, "scene0001_00", generate_synthetic_sequence(8, rng))
    (root / "scene0002_00").mkdir(parents=True)
    bad = generate_synthetic_sequence(4, rng)
    bad[2] = frame(bad[2].depth_timestamp, bad[2].color_timestamp, last_row=(0.0, 0.0, 0.0, 0.5))
    write_scene(root, "scene0003_00", bad)
    return root
