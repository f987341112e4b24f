import os
import shutil
from typing import Optional

import pandoc  # type:ignore

PANDOC_PATH_ENV = "CUSTOM_AMSTHM_PANDOC"


def find_pandoc() -> Optional[str]:
    """The pandoc executable to generate types from: $CUSTOM_AMSTHM_PANDOC if set, otherwise pandoc on the PATH."""
    return os.environ.get(PANDOC_PATH_ENV) or shutil.which("pandoc")


def configure_pandoc() -> None:
    """Configure the `pandoc` library, if nothing has configured it yet.

    The library generates its types for the version of a real pandoc executable,
    so one has to be found - hosts that run a pandoc which isn't on the PATH should point $CUSTOM_AMSTHM_PANDOC at it.
    """
    if pandoc.configure(read=True) is not None:
        return
    path = find_pandoc()
    if path is None:
        raise RuntimeError(
            f"Can't find the pandoc program. Put it on the PATH, or set ${PANDOC_PATH_ENV} to its location."
        )
    pandoc.configure(path=path)
