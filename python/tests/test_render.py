import custom_amsthm.pandoc_types as pan
from custom_amsthm.registry import Registry, register_environments
from custom_amsthm.render import make_title_span, render_div, split_title

from pandoc_builders import amsthm_meta, div, env_entry, header, inlines, para


def latex(text):
    return pan.RawBlock(pan.Format("latex"), text)


def theorem_registry():
    return register_environments(
        amsthm_meta(
            env_entry("thm", name="Theorem"),
            env_entry("rem", name="Remark", numbered=False),
        ),
        Registry(),
    )


def test_unmatched_div_passes_through():
    registry = theorem_registry()
    for d in [div(""), div("fig-1", para("A figure")), div("lem-1", para("Not declared"))]:
        assert render_div(d, registry, latex=False) is d
        assert render_div(d, registry, latex=True) is d
    assert registry.counters["thm"] == 0


def test_split_title_only_takes_level_two_first_header():
    assert split_title([header(2, "Foo"), para("Body")]) == ("Foo", [para("Body")])
    assert split_title([header(3, "Foo"), para("Body")]) == (
        None,
        [header(3, "Foo"), para("Body")],
    )
    assert split_title([para("Body"), header(2, "Foo")]) == (
        None,
        [para("Body"), header(2, "Foo")],
    )
    assert split_title([]) == (None, [])


def test_html_numbered_untitled():
    rendered = render_div(div("thm-1", para("All cats are mammals.")), theorem_registry(), latex=False)
    assert rendered == pan.Div(
        ("thm-1", ["theorem"], []),
        [
            pan.Para(
                [make_title_span("Theorem 1"), pan.Space(), *inlines("All cats are mammals.")]
            )
        ],
    )
    assert make_title_span("Theorem 1") == pan.Span(
        ("", ["theorem-title"], []), [pan.Strong([pan.Str("Theorem 1")])]
    )


def test_html_title_is_parenthesised():
    rendered = render_div(
        div("thm-cats", header(2, "Cats"), para("All cats are mammals.")),
        theorem_registry(),
        latex=False,
    )
    first_para = rendered[1][0]
    assert first_para[0][0] == make_title_span("Theorem 1 (Cats)")
    # The heading is not kept in the body
    assert len(rendered[1]) == 1


def test_html_body_without_leading_paragraph_gets_title_paragraph():
    code = pan.CodeBlock(("", [], []), "x = 1")
    rendered = render_div(div("thm-code", code, para("After")), theorem_registry(), latex=False)
    assert rendered[1] == [pan.Para([make_title_span("Theorem 1")]), code, para("After")]


def test_html_empty_body():
    rendered = render_div(div("thm-empty", header(2, "Only a title")), theorem_registry(), latex=False)
    assert rendered[1] == [pan.Para([make_title_span("Theorem 1 (Only a title)")])]


def test_html_keeps_blocks_after_first_paragraph():
    rendered = render_div(
        div("thm-long", para("First"), para("Second")), theorem_registry(), latex=False
    )
    assert rendered[1][1] == para("Second")


def test_html_unnumbered_has_no_number():
    registry = theorem_registry()
    rendered = render_div(div("rem-1", para("Note this.")), registry, latex=False)
    assert rendered[1][0][0][0] == make_title_span("Remark")
    assert registry.assigned_numbers["rem"] == {}


def test_latex_numbered_titled():
    rendered = render_div(
        div("thm-cats", header(2, "Cats"), para("All cats are mammals.")),
        theorem_registry(),
        latex=True,
    )
    assert rendered == [
        latex("\\begin{theorem}[Cats]\\label{thm-cats}"),
        para("All cats are mammals."),
        latex("\\end{theorem}"),
    ]


def test_latex_title_keeps_inner_parentheses():
    rendered = render_div(
        div("thm-f", header(2, "Fermat (little)"), para("Body")),
        theorem_registry(),
        latex=True,
    )
    assert rendered[0] == latex("\\begin{theorem}[Fermat (little)]\\label{thm-f}")


def test_latex_unnumbered_has_no_label():
    rendered = render_div(div("rem-1", para("Note this.")), theorem_registry(), latex=True)
    assert rendered == [
        latex("\\begin{remark}"),
        para("Note this."),
        latex("\\end{remark}"),
    ]


def test_numbers_follow_render_order():
    registry = theorem_registry()
    titles = [
        render_div(div(f"thm-{i}", para("Body")), registry, latex=False)[1][0][0][0]
        for i in ["a", "b", "c"]
    ]
    assert titles == [make_title_span(f"Theorem {n}") for n in [1, 2, 3]]
    assert registry.assigned_numbers["thm"] == {"thm-a": "1", "thm-b": "2", "thm-c": "3"}


def test_quoted_title_keeps_quotes():
    title = pan.Header(
        2,
        ("", [], []),
        [pan.Str("The"), pan.Space(), pan.Quoted(pan.DoubleQuote(), [pan.Str("Big")]), pan.Space(), pan.Str("Theorem")],
    )
    html = render_div(div("thm-q", title, para("Body.")), theorem_registry(), latex=False)
    assert html[1][0][0][0] == make_title_span("Theorem 1 (The “Big” Theorem)")
    tex = render_div(div("thm-q", title, para("Body.")), theorem_registry(), latex=True)
    assert tex[0] == latex("\\begin{theorem}[The “Big” Theorem]\\label{thm-q}")
