from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
import shutil
import tempfile

from retrohash.config.formats import SCRATCH_PREFIX
from retrohash.core.errors import ScratchAreaError


@contextmanager
def scratch_area(prefix: str = SCRATCH_PREFIX) -> Iterator[Path]:
    """Yield a private temporary directory that is removed on every exit path.

    Failure to create or remove the directory raises ScratchAreaError.
    """
    try:
        scratch_dir = Path(tempfile.mkdtemp(prefix=prefix))
    except OSError as exc:
        raise ScratchAreaError(f"Cannot create scratch directory: {exc}") from exc
    try:
        yield scratch_dir
    finally:
        try:
            shutil.rmtree(scratch_dir)
        except OSError as exc:
            raise ScratchAreaError(f"Cannot remove scratch directory '{scratch_dir}': {exc}") from exc
