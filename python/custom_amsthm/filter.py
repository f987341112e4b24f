from typing import List

from custom_amsthm.dfs import DocumentDfsPass, Visitors
from custom_amsthm.helpers import is_latex_format
from custom_amsthm.latex_headers import generate_latex_headers, inject_header_includes
from custom_amsthm.refs import ResolvedCite, resolve_cite
from custom_amsthm import DEFAULT_META_KEY
from custom_amsthm.registry import Registry, register_environments
from custom_amsthm.render import RenderedDiv, render_div

from . import pandoc_types as pan


class AmsthmFilter:
    """
    Adds user-declared theorem-like environments to a pandoc document.

    The filter runs in three stages, which must happen in this order:
    1. `process_meta` reads the environment declarations into the registry
       (and for LaTeX, declares them in the preamble)
    2. `process_div` renders each theorem-like Div and numbers it
    3. `process_cite` turns citations of those Divs into cross-references

    `run()` does all three as separate passes over the document.
    The stage functions can also be driven by any other traversal,
    as long as every Div has been processed before the first Cite.
    """

    fmt: str
    meta_key: str
    registry: Registry

    def __init__(self, fmt: str, meta_key: str = DEFAULT_META_KEY) -> None:
        self.fmt = fmt
        self.meta_key = meta_key
        self.registry = Registry()

    @property
    def latex(self) -> bool:
        return is_latex_format(self.fmt)

    def process_meta(self, meta: pan.Meta) -> pan.Meta:
        register_environments(meta, self.registry, self.meta_key)
        if self.latex:
            inject_header_includes(meta, generate_latex_headers(self.registry))
        return meta

    def process_div(self, div: pan.Div) -> RenderedDiv:
        return render_div(div, self.registry, self.latex)

    def process_cite(self, cite: pan.Cite) -> ResolvedCite:
        return resolve_cite(cite, self.registry, self.latex)

    def passes(self) -> List[DocumentDfsPass]:
        div_visitors: Visitors = Visitors()
        div_visitors.register_handler(pan.Div, self.process_div)
        cite_visitors: Visitors = Visitors()
        cite_visitors.register_handler(pan.Cite, self.process_cite)
        return [DocumentDfsPass(div_visitors), DocumentDfsPass(cite_visitors)]

    def run(self, doc: pan.Pandoc) -> pan.Pandoc:
        doc[0] = self.process_meta(doc[0])
        if not self.registry:
            # Nothing declared, so nothing in the document can match
            return doc
        for dfs_pass in self.passes():
            doc = dfs_pass.dfs_over_document(doc)
        return doc


def run_filter(
    doc: pan.Pandoc, fmt: str, meta_key: str = DEFAULT_META_KEY
) -> pan.Pandoc:
    return AmsthmFilter(fmt, meta_key).run(doc)
