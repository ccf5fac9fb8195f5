from enum import Enum

class TimestampStatus(str, Enum):
    NOT_AVAILABLE = "NOT_AVAILABLE"
    NOT_MONOTONIC = "NOT_MONOTONIC"
    GOOD = "GOOD"

class SceneStatus(str, Enum):
    PROCESSED = "PROCESSED"
    MISSING = "MISSING"
    READ_FAILED = "READ_FAILED"

class InputKind(str, Enum):
    DATASET_ROOT = "DATASET_ROOT"
    SINGLE_SEQUENCE = "SINGLE_SEQUENCE"
