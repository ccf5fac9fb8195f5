from pathlib import Path
from typing import Iterable, Union
from ..core.constants import SENS_SUFFIX
from .fs_base import FSBase

class LocalFS(FSBase):
    """Dataset root laid out as <root>/<scene>/<scene>.sens"""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def list_scenes(self) -> Iterable[str]:
        for scene_dir in sorted(self.root.iterdir()):
            if scene_dir.is_dir():
                yield scene_dir.name

    def sens_path(self, scene: str) -> Path:
        return self.root / scene / f"{scene}{SENS_SUFFIX}"
