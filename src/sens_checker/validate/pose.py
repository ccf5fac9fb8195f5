import numpy as np

from ..core.constants import HOMOGENEOUS_ROW

def is_legal_pose(transform) -> bool:
    """True iff row 3 of the 4x4 transform is exactly [0, 0, 0, 1] (no tolerance)."""
    m = np.asarray(transform)
    if m.size != 16:
        raise ValueError("expected a 4x4 transform, got shape %s" % (m.shape,))
    return bool(np.all(m.reshape(4, 4)[3] == HOMOGENEOUS_ROW))
