"""
A pandoc filter for user-declared theorem-like environments.

Nothing here imports `pandoc.types`, which needs a pandoc executable to configure itself.
Import `custom_amsthm.filter` for the filter itself.
"""

__version__ = "0.1.0"

DEFAULT_META_KEY = "custom-amsthm"
"""The metadata field holding the list of environment declarations"""
