"""
Write small synthetic `.sens` sequences.

Produces version-4 files the SensReader (and ScanNet's own tooling) can read,
so dataset roots can be assembled for testing without real captures.
Color and depth payloads are opaque bytes; they default to empty.

Usage:
    python -m sens_checker.io.synthetic --output scans --num-scenes 3 --num-frames 50
"""

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union
import argparse
import struct

import numpy as np

from ..core.constants import SENS_VERSION, SENS_SUFFIX
from ..core.models import FrameRecord


def generate_synthetic_sequence(
    num_frames: int,
    rng: Optional[np.random.Generator] = None,
    start_timestamp: int = 1_000_000,
    step: int = 33_333,
) -> List[FrameRecord]:
    """Frames with strictly increasing depth/color timestamps and legal rigid poses."""
    rng = rng if rng is not None else np.random.default_rng(0)
    frames = []
    for i in range(num_frames):
        q, _ = np.linalg.qr(rng.normal(size=(3, 3)))
        pose = np.eye(4, dtype=np.float32)
        pose[:3, :3] = q.astype(np.float32)
        pose[:3, 3] = rng.uniform(-1.0, 1.0, size=3).astype(np.float32)
        ts = start_timestamp + i * step
        frames.append(FrameRecord(depth_timestamp=ts, color_timestamp=ts, camera_to_world=pose))
    return frames


def write_sens(
    path: Union[str, Path],
    frames: Iterable[FrameRecord],
    sensor_name: str = "StructureSensor",
    color_size: Sequence[int] = (1296, 968),
    depth_size: Sequence[int] = (640, 480),
    depth_shift: float = 1000.0,
    payload: bytes = b"",
    version: int = SENS_VERSION,
) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frames = list(frames)
    name = sensor_name.encode("utf-8")
    eye = np.eye(4, dtype="<f4").tobytes()

    with open(path, "wb") as f:
        f.write(struct.pack("<I", version))
        f.write(struct.pack("<Q", len(name)))
        f.write(name)
        f.write(eye * 4)  # color/depth intrinsics and extrinsics
        f.write(struct.pack("<ii", 2, 1))  # jpeg color, zlib depth
        f.write(struct.pack("<4I", color_size[0], color_size[1], depth_size[0], depth_size[1]))
        f.write(struct.pack("<f", depth_shift))
        f.write(struct.pack("<Q", len(frames)))
        for fr in frames:
            f.write(np.asarray(fr.camera_to_world, dtype="<f4").reshape(16).tobytes())
            f.write(struct.pack("<QQQQ", fr.color_timestamp, fr.depth_timestamp, len(payload), len(payload)))
            f.write(payload)
            f.write(payload)
        f.write(struct.pack("<Q", 0))  # no IMU frames
    return path


def write_scene(root: Union[str, Path], scene: str, frames: Iterable[FrameRecord], **kwargs) -> Path:
    """Write <root>/<scene>/<scene>.sens"""
    return write_sens(Path(root) / scene / f"{scene}{SENS_SUFFIX}", frames, **kwargs)


def main():
    parser = argparse.ArgumentParser(description="Generate a synthetic scans/ dataset root")
    parser.add_argument("--output", type=Path, required=True)
    parser.add_argument("--num-scenes", type=int, default=3)
    parser.add_argument("--num-frames", type=int, default=50)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    for i in range(args.num_scenes):
        scene = "scene%04d_00" % i
        out = write_scene(args.output, scene, generate_synthetic_sequence(args.num_frames, rng))
        print(f"wrote {out}")


if __name__ == "__main__":
    main()
