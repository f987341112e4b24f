import sys
from typing import Any, List

from custom_amsthm.dyn_dispatch import DynDispatch

from . import pandoc_types as pan

LATEX_FAMILY_FORMATS = ("pdf", "beamer")


def is_latex_format(fmt: str) -> bool:
    """Does the pandoc output format produce LaTeX, and therefore use amsthm environments?"""
    fmt = fmt.lower()
    return "latex" in fmt or fmt in LATEX_FAMILY_FORMATS


def warn(message: str) -> None:
    # stdout carries the filtered document, so warnings always go to stderr
    print(f"Warning: {message}", file=sys.stderr)


# Leaf nodes that contribute text directly.
# Everything else is stringified by concatenating its child nodes.
_STRINGIFIERS: DynDispatch[[], str] = DynDispatch()
_STRINGIFIERS.register_handler(pan.Str, lambda s: s[0])
_STRINGIFIERS.register_handler(pan.MetaString, lambda s: s[0])
_STRINGIFIERS.register_handler(pan.MetaBool, lambda b: "true" if b[0] else "false")
_STRINGIFIERS.register_handler(pan.Space, lambda _: " ")
_STRINGIFIERS.register_handler(pan.SoftBreak, lambda _: " ")
_STRINGIFIERS.register_handler(pan.LineBreak, lambda _: " ")
_STRINGIFIERS.register_handler(pan.Code, lambda c: c[1])
_STRINGIFIERS.register_handler(pan.Math, lambda m: m[1])
_STRINGIFIERS.register_handler(pan.RawInline, lambda _: "")
_STRINGIFIERS.register_handler(pan.RawBlock, lambda _: "")
_STRINGIFIERS.register_handler(pan.Note, lambda _: "")
_STRINGIFIERS.register_handler(pan.Quoted, lambda q: _stringify_quoted(q))
# A Cite holds the Citation records *and* the rendered inlines - only the latter are text.
_STRINGIFIERS.register_handler(pan.Cite, lambda c: stringify(c[1]))


def _stringify_quoted(quoted: pan.Quoted) -> str:
    # pandoc renders quotes as the typographic characters
    if isinstance(quoted[0], pan.SingleQuote):
        return f"\u2018{stringify(quoted[1])}\u2019"
    return f"\u201c{stringify(quoted[1])}\u201d"


def stringify(obj: Any) -> str:
    """
    Flatten a pandoc node, list of nodes, or metadata value to plain text.

    Mirrors pandoc's own `stringify`: formatting is dropped, spaces become " ", quotes become curly quotes,
    and attributes/targets/raw content contribute nothing.
    """
    if obj is None:
        return ""
    if isinstance(obj, str):
        return obj
    if isinstance(obj, list):
        return "".join(stringify(o) for o in obj)
    handler = _STRINGIFIERS.get_handler(obj)
    if handler:
        return handler(obj)
    parts: List[str] = []
    for child in obj:
        # Attrs and targets are tuples, levels are ints, MetaMaps hold dicts - none of them are document text.
        if isinstance(child, (str, int, float, tuple, dict)):
            continue
        parts.append(stringify(child))
    return "".join(parts)


TRUTHY_STRINGS = ("true", "yes", "on")
FALSY_STRINGS = ("false", "no", "off")


def meta_to_bool(value: Any, default: bool) -> bool:
    """Interpret a metadata value as a boolean, falling back to `default` when it isn't recognisably one."""
    if value is None:
        return default
    if isinstance(value, pan.MetaBool):
        return bool(value[0])
    text = stringify(value).strip().lower()
    if text in TRUTHY_STRINGS:
        return True
    if text in FALSY_STRINGS:
        return False
    return default
