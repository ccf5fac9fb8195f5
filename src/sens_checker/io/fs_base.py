from pathlib import Path
from typing import Iterable

class FSBase:
    def list_scenes(self) -> Iterable[str]:
        raise NotImplementedError
    def sens_path(self, scene: str) -> Path:
        raise NotImplementedError
    def exists(self, p: Path) -> bool:
        return p.is_file()
