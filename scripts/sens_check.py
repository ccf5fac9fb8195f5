from __future__ import annotations
import sys

# Allow running the CLI without installing the package (PYTHONPATH shim)
try:
    import sens_checker  # noqa: F401
except ModuleNotFoundError:  # pragma: no cover
    import pathlib as _pathlib, sys as _sys
    _sys.path.insert(0, str(_pathlib.Path(__file__).resolve().parents[1] / "src"))

from sens_checker.cli import main

if __name__ == "__main__":
    sys.exit(main())
