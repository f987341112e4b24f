from dataclasses import dataclass
from typing import List

from custom_amsthm.registry import EnvironmentDefinition, NumberingScope, Registry

from . import pandoc_types as pan

HEADER_INCLUDES_KEY = "header-includes"
AMSTHM_PACKAGE_LINE = "\\usepackage{amsthm}"


@dataclass
class LatexTheoremDecl:
    """One \\newtheorem declaration for the LaTeX preamble."""

    latex_name: str
    name: str
    numbered: bool
    per_section: bool

    @classmethod
    def for_environment(cls, env: EnvironmentDefinition) -> "LatexTheoremDecl":
        return cls(
            latex_name=env.latex_name,
            name=env.name,
            numbered=env.numbered,
            per_section=env.numbering_scope == NumberingScope.SECTION,
        )

    def as_latex_preamble_line(self) -> str:
        if not self.numbered:
            return f"\\newtheorem*{{{self.latex_name}}}{{{self.name}}}"
        line = f"\\newtheorem{{{self.latex_name}}}{{{self.name}}}"
        if self.per_section:
            line += "[section]"
        return line


def generate_latex_headers(registry: Registry) -> str:
    """The amsthm preamble for every registered environment, or "" if there are none."""
    decls = [LatexTheoremDecl.for_environment(env) for env in registry.definitions()]
    if not decls:
        return ""
    lines: List[str] = [AMSTHM_PACKAGE_LINE]
    lines.extend(decl.as_latex_preamble_line() for decl in decls)
    return "\n".join(lines)


def inject_header_includes(meta: pan.Meta, latex: str) -> pan.Meta:
    """
    Add a raw LaTeX block to the document's header-includes, keeping whatever was there already.

    header-includes may be missing, a single value, or a list of values.
    """
    if not latex:
        return meta
    block = pan.MetaBlocks([pan.RawBlock(pan.Format("latex"), latex)])
    existing = meta[0].get(HEADER_INCLUDES_KEY)
    if existing is None:
        meta[0][HEADER_INCLUDES_KEY] = block
    elif isinstance(existing, pan.MetaList):
        existing[0].append(block)
    else:
        meta[0][HEADER_INCLUDES_KEY] = pan.MetaList([existing, block])
    return meta
