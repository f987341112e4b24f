"""
The `pandoc` Python package autogenerates a bunch of types from Haskell.
Importing `pandoc.types` needs the library to know which version of pandoc-types to generate,
which it finds by running a pandoc executable.
Filters don't always have pandoc on the PATH, so this module makes sure the library is configured first.
I import the types through this module so that always happens before `pandoc.types` is loaded.
"""

from custom_amsthm.pandoc_config import configure_pandoc

configure_pandoc()

from pandoc.types import *  # type: ignore  # noqa: E402
