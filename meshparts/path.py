"""
Locating the sample meshes shipped inside the package (`meshparts/data/`).
"""

import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DATA_DIR = Path(__file__).parent / "data"


def data_path(filename: str) -> Path:
    """
    Return the path of a bundled data file, e.g. ``data_path("mesh/two_triangles.obj")``.

    Raises FileNotFoundError if the file is not part of the installed package.
    """
    p = DATA_DIR / filename
    if not p.is_file():
        raise FileNotFoundError(f"No bundled data file '{filename}' in {DATA_DIR}")
    logger.debug("Data path for '%s' -> %s", filename, p)
    return p


def sample_meshes() -> List[str]:
    """Names of the bundled OBJ samples, relative to the data directory."""
    return sorted(p.relative_to(DATA_DIR).as_posix() for p in DATA_DIR.glob("mesh/*.obj"))
