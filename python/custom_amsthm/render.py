from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from custom_amsthm.helpers import stringify
from custom_amsthm.registry import EnvironmentDefinition, Registry

from . import pandoc_types as pan

THEOREM_CLASS = "theorem"
THEOREM_TITLE_CLASS = "theorem-title"
TITLE_HEADER_LEVEL = 2

RenderedDiv = Union[pan.Div, List[pan.Block]]


# Helper function for making pan.Attr
def pan_attr(id: str, props: List[str], keyval: List[Tuple[str, str]]) -> pan.Attr:
    return (id, props, keyval)


def latex_block(text: str) -> pan.RawBlock:
    return pan.RawBlock(pan.Format("latex"), text)


@dataclass
class TheoremInstance:
    """A Div that has been matched to an environment, with its title pulled out of the body."""

    env: EnvironmentDefinition
    block_id: str
    body: List[pan.Block]
    title: Optional[str] = None
    number: Optional[str] = None

    @property
    def label(self) -> str:
        return f"\\label{{{self.block_id}}}" if self.number is not None else ""

    @property
    def title_suffix(self) -> str:
        """The title in the form appended to headings, e.g. " (Fermat)" """
        return f" ({self.title})" if self.title is not None else ""

    def html_title(self) -> str:
        title = self.env.name
        if self.number is not None:
            title += f" {self.number}"
        return title + self.title_suffix

    def latex_begin(self) -> str:
        begin = f"\\begin{{{self.env.latex_name}}}"
        if self.title is not None:
            begin += f"[{self.title}]"
        return begin + self.label

    def latex_end(self) -> str:
        return f"\\end{{{self.env.latex_name}}}"


def split_title(blocks: List[pan.Block]) -> Tuple[Optional[str], List[pan.Block]]:
    """If the first block is a level-2 header, take its text as the title and drop it from the body."""
    if blocks:
        first = blocks[0]
        if isinstance(first, pan.Header) and first[0] == TITLE_HEADER_LEVEL:
            return stringify(first[2]), list(blocks[1:])
    return None, list(blocks)


def make_title_span(title: str) -> pan.Span:
    return pan.Span(
        pan_attr("", [THEOREM_TITLE_CLASS], []),
        [pan.Strong([pan.Str(title)])],
    )


def make_latex_blocks(instance: TheoremInstance) -> List[pan.Block]:
    return [
        latex_block(instance.latex_begin()),
        *instance.body,
        latex_block(instance.latex_end()),
    ]


def make_html_div(instance: TheoremInstance) -> pan.Div:
    # Mimics the structure of Quarto's built-in theorem rendering,
    # so the theorem CSS and anchors apply unchanged.
    title_span = make_title_span(instance.html_title())
    body = instance.body
    blocks: List[pan.Block]
    if body and isinstance(body[0], pan.Para):
        blocks = [pan.Para([title_span, pan.Space(), *body[0][0]]), *body[1:]]
    else:
        blocks = [pan.Para([title_span]), *body]
    return pan.Div(pan_attr(instance.block_id, [THEOREM_CLASS], []), blocks)


def render_div(div: pan.Div, registry: Registry, latex: bool) -> RenderedDiv:
    """
    Render a Div as a theorem-like environment if its id marks it as one.

    Divs that don't match a registered environment are returned as-is.
    For LaTeX this returns a list of blocks to splice in place of the Div,
    otherwise a new Div.
    """
    attr, contents = div[0], div[1]
    block_id = attr[0]
    env = registry.match(block_id)
    if env is None:
        return div

    title, body = split_title(contents)
    instance = TheoremInstance(env=env, block_id=block_id, body=body, title=title)
    if env.numbered:
        instance.number = registry.next_number(env, block_id)

    if latex:
        return make_latex_blocks(instance)
    return make_html_div(instance)
