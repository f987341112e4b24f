from typing import Union

from custom_amsthm.helpers import warn
from custom_amsthm.registry import EnvironmentDefinition, Registry
from custom_amsthm.render import pan_attr

from . import pandoc_types as pan

XREF_CLASS = "quarto-xref"
MISSING_NUMBER = "?"
NBSP = "\u00a0"

ResolvedCite = Union[pan.Cite, pan.RawInline, pan.Link]


def make_latex_ref(env: EnvironmentDefinition, target: str) -> pan.RawInline:
    return pan.RawInline(
        pan.Format("latex"), f"{env.reference_prefix}~\\ref{{{target}}}"
    )


def make_html_ref(
    env: EnvironmentDefinition, target: str, registry: Registry
) -> pan.Link:
    # e.g. Link(
    #   ("", ["quarto-xref"], []),
    #   [Str("Theorem"), Str(nbsp), Str("1")],
    #   ("#thm-foo", "")
    # )
    number = registry.lookup_number(env, target)
    if number is None:
        warn(f"no number has been assigned to '{target}', referencing it as '{MISSING_NUMBER}'")
        number = MISSING_NUMBER
    return pan.Link(
        pan_attr("", [XREF_CLASS], []),
        [pan.Str(env.reference_prefix), pan.Str(NBSP), pan.Str(number)],
        (f"#{target}", ""),
    )


def resolve_cite(cite: pan.Cite, registry: Registry, latex: bool) -> ResolvedCite:
    """
    Replace a citation of a theorem-like block with a cross-reference.

    Only the first citation that targets a registered environment is used -
    any others in the same Cite are dropped.
    Cites that target no registered environment are returned as-is.
    """
    for citation in cite[0]:
        target = citation[0]
        env = registry.match(target)
        if env is None:
            continue
        if latex:
            return make_latex_ref(env, target)
        return make_html_ref(env, target, registry)
    return cite
