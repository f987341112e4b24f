from dataclasses import dataclass

import pandoc  # type:ignore

from custom_amsthm import DEFAULT_META_KEY
from custom_amsthm.filter import run_filter

DEFAULT_FORMAT = "html"


@dataclass
class FilterParams:
    fmt: str
    meta_key: str = DEFAULT_META_KEY


def filter_json(json_text: str, params: FilterParams) -> str:
    """Run the filter over a pandoc JSON document, returning the filtered JSON."""
    doc = pandoc.read(json_text, format="json")
    doc = run_filter(doc, params.fmt, params.meta_key)
    output = pandoc.write(doc, format="json")
    if isinstance(output, bytes):
        output = output.decode("utf-8")
    return output
