"""
Streaming reader for ScanNet `.sens` sequences.

Only the frame metadata is decoded: the camera-to-world matrix and the two
timestamps. Color and depth payloads are skipped with a seek, so a full pass
costs one small read per frame regardless of image size.

File layout (little-endian, version 4):
    u32 version | u64 name_len | name | 4 x f32[16] calibration
    i32 color_compression | i32 depth_compression
    u32 color_w, color_h, depth_w, depth_h | f32 depth_shift | u64 num_frames
    per frame: f32[16] camera_to_world | u64 ts_color | u64 ts_depth
               u64 color_bytes | u64 depth_bytes | <payloads>
"""

from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union
import logging
import os
import struct

import numpy as np

from ..core.constants import (
    SENS_VERSION,
    SENS_MATRIX_FLOATS,
    COLOR_COMPRESSION,
    DEPTH_COMPRESSION,
)
from ..core.errors import MissingSequenceFile, SequenceReadFailure
from ..core.models import FrameRecord, SensHeader

logger = logging.getLogger(__name__)

_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")
_MATRIX = struct.Struct("<%df" % SENS_MATRIX_FLOATS)
_CALIBRATION_BYTES = 4 * _MATRIX.size
_IMAGE_INFO = struct.Struct("<ii4If")  # compressions, 4 sizes, depth_shift
_FRAME_META = struct.Struct("<%dfQQQQ" % SENS_MATRIX_FLOATS)


class SensReader:
    """
    Single-pass FrameSource over one `.sens` file.

    Construction opens the file and decodes the header; `frames()` then yields
    one FrameRecord per frame and may be consumed only once. Any decoding
    problem surfaces as SequenceReadFailure.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        if not self.path.is_file():
            raise MissingSequenceFile(self.path)
        try:
            self._f: BinaryIO = open(self.path, "rb")
            self._size = os.fstat(self._f.fileno()).st_size
        except OSError as e:
            raise SequenceReadFailure(self.path, str(e)) from e
        self._consumed = False
        try:
            self.header = self._read_header()
        except Exception:
            self.close()
            raise
        logger.debug("opened %s: %d frames", self.path, self.header.num_frames)

    def __enter__(self) -> "SensReader":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._f.close()

    # ---------- low level ----------
    def _read_exact(self, n: int, what: str, frame_index: Optional[int] = None) -> bytes:
        try:
            data = self._f.read(n)
        except OSError as e:
            raise SequenceReadFailure(self.path, str(e), frame_index) from e
        if len(data) != n:
            raise SequenceReadFailure(self.path, "truncated %s" % what, frame_index)
        return data

    def _skip(self, n: int, what: str, frame_index: Optional[int] = None) -> None:
        if self._f.tell() + n > self._size:
            raise SequenceReadFailure(self.path, "truncated %s" % what, frame_index)
        self._f.seek(n, os.SEEK_CUR)

    def _read_header(self) -> SensHeader:
        (version,) = _U32.unpack(self._read_exact(_U32.size, "version"))
        if version != SENS_VERSION:
            raise SequenceReadFailure(self.path, "unsupported version %d (expected %d)" % (version, SENS_VERSION))

        (name_len,) = _U64.unpack(self._read_exact(_U64.size, "sensor name length"))
        if name_len > self._size:
            raise SequenceReadFailure(self.path, "sensor name length %d exceeds file size" % name_len)
        sensor_name = self._read_exact(name_len, "sensor name").decode("utf-8", errors="replace")

        self._skip(_CALIBRATION_BYTES, "calibration")

        c_comp, d_comp, c_w, c_h, d_w, d_h, depth_shift = _IMAGE_INFO.unpack(
            self._read_exact(_IMAGE_INFO.size, "image info")
        )
        (num_frames,) = _U64.unpack(self._read_exact(_U64.size, "frame count"))

        return SensHeader(
            version=version,
            sensor_name=sensor_name,
            color_compression=COLOR_COMPRESSION.get(c_comp, "unknown"),
            depth_compression=DEPTH_COMPRESSION.get(d_comp, "unknown"),
            color_width=c_w,
            color_height=c_h,
            depth_width=d_w,
            depth_height=d_h,
            depth_shift=depth_shift,
            num_frames=num_frames,
        )

    # ---------- public API ----------
    def frames(self) -> Iterator[FrameRecord]:
        if self._consumed:
            raise SequenceReadFailure(self.path, "frames already consumed")
        self._consumed = True

        for i in range(self.header.num_frames):
            meta = _FRAME_META.unpack(self._read_exact(_FRAME_META.size, "frame header", i))
            matrix = np.array(meta[:SENS_MATRIX_FLOATS], dtype=np.float32).reshape(4, 4)
            ts_color, ts_depth, color_bytes, depth_bytes = meta[SENS_MATRIX_FLOATS:]
            self._skip(color_bytes + depth_bytes, "frame payload", i)
            yield FrameRecord(
                depth_timestamp=ts_depth,
                color_timestamp=ts_color,
                camera_to_world=matrix,
            )
