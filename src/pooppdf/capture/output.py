"""All-or-nothing writes for the PDF artifact."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def _default_mode() -> int:
    # mkstemp creates 0600 files; match what a plain open() would have produced
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_atomic(path: Path, data: bytes) -> int:
    """Write *data* to *path* so readers see either the old file or the new one.

    The bytes go to a temporary sibling first and are moved into place with
    ``os.replace``. On failure the temporary file is removed and any existing
    file at *path* is untouched.

    Returns:
        Number of bytes written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, _default_mode())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %d bytes to %s", len(data), path)
    return len(data)
