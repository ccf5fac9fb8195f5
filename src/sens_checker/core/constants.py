# Input shapes
DATASET_ROOT_NAME = "scans"  # final path component that marks a dataset root
SENS_SUFFIX = ".sens"

# .sens container (ScanNet SensorData, little-endian)
SENS_VERSION = 4
SENS_MATRIX_FLOATS = 16

COLOR_COMPRESSION = {-1: "unknown", 0: "raw", 1: "png", 2: "jpeg"}
DEPTH_COMPRESSION = {-1: "unknown", 0: "raw_ushort", 1: "zlib_ushort", 2: "occi_ushort"}

# Row 3 of a camera-to-world transform (flat offsets 12..15), compared exactly
HOMOGENEOUS_ROW = (0.0, 0.0, 0.0, 1.0)

# Scene fan-out; 1 keeps the scan strictly sequential
DEFAULT_WORKERS = 1
MAX_WORKERS = 64

# Report export file names
SCENES_TABLE = "scenes.parquet"
FAILURES_FILE = "failures.jsonl"
SUMMARY_FILE = "summary.yaml"
