"""Unit tests for markup emission."""

import pytest

from promptweight.core.markup import emit, escape, render
from promptweight.core.parser import parse
from promptweight.core.segments import Literal, RandomChoice, Scope, ScopeKind
from promptweight.core.style import color_for


def _span(text: str, weight: float, config) -> str:
    return f'<span style="color:{color_for(weight, config)}">{text}</span>'


class TestEscape:
    """HTML escaping of literal text."""

    def test_special_characters(self):
        """Ampersand and angle brackets are escaped."""
        assert escape("a<b & c>") == "a&lt;b &amp; c&gt;"

    def test_quotes_untouched(self):
        """Quotes are text content, not attributes, and stay as-is."""
        assert escape("\"it's\"") == "\"it's\""

    def test_already_escaped(self):
        """Escaping is applied to the raw text, so entities are re-escaped."""
        assert escape("&lt;") == "&amp;lt;"


class TestRenderBasics:
    """Entry-point behaviour."""

    @pytest.mark.parametrize("text", ["", None])
    def test_empty(self, highlight_config, text):
        """Empty or missing input renders as an empty string."""
        assert render(text, highlight_config) == ""

    def test_plain_text(self, highlight_config):
        """Weight 1 text is emitted bare."""
        assert render("plain text", highlight_config) == "plain text"

    def test_escaped_literals(self, highlight_config):
        """Literal text is escaped."""
        assert render("a & b > c", highlight_config) == "a &amp; b &gt; c"

    def test_line_break(self, highlight_config):
        """Newlines become <br/>."""
        assert render("a\nb", highlight_config) == "a<br/>b"

    def test_mix_separator(self, highlight_config):
        """A bare pipe is structural."""
        assert render("a|b", highlight_config) == 'a<span class="prompt-mix-sep">|</span>b'


class TestRenderScopes:
    """Delimiter and content markup per scope kind."""

    def test_brace(self, highlight_config):
        """Brace delimiters are structural; content is coloured."""
        expected = (
            '<span class="prompt-bracket">{</span>'
            + _span("a", 1.1, highlight_config)
            + '<span class="prompt-bracket">}</span>'
        )
        assert render("{a}", highlight_config) == expected

    def test_bracket_run(self, highlight_config):
        """The whole delimiter run is one structural unit."""
        out = render("[[a]]", highlight_config)
        assert out.startswith('<span class="prompt-bracket">[[</span>')
        assert out.endswith('<span class="prompt-bracket">]]</span>')
        assert "hsl(208" in out

    def test_numeric(self, highlight_config):
        """Prefix coloured by the declared number, close is structural."""
        expected = (
            _span("2::", 2.0, highlight_config)
            + _span("a", 2.0, highlight_config)
            + '<span class="prompt-weight-close">::</span>'
        )
        assert render("2::a::", highlight_config) == expected

    def test_explicit(self, highlight_config):
        """Suffix coloured by the composed weight, brackets structural."""
        expected = (
            '<span class="prompt-bracket">[</span>'
            + _span("t", 3.0, highlight_config)
            + _span(":3", 3.0, highlight_config)
            + '<span class="prompt-bracket">]</span>'
        )
        assert render("[t:3]", highlight_config) == expected

    def test_explicit_weight_one_uncoloured(self, highlight_config):
        """An explicit weight of 1 leaves text and suffix bare."""
        assert render("[t:1]", highlight_config) == (
            '<span class="prompt-bracket">[</span>t:1<span class="prompt-bracket">]</span>'
        )


class TestRenderSpecialSegments:
    """Snippets and random groups."""

    def test_snippet(self, highlight_config):
        """A snippet is one escaped, uncoloured unit."""
        assert render("<snippet:foo>", highlight_config) == (
            '<span class="prompt-snippet">&lt;snippet:foo&gt;</span>'
        )

    def test_snippet_inside_scope_uncoloured(self, highlight_config):
        """Snippets never take the ambient colour."""
        out = render("{{<snippet:foo>}}", highlight_config)
        assert "style=" not in out

    def test_random_group(self, highlight_config):
        """Markers and separators are structural; options are rendered in place."""
        assert render("a||b|c||d", highlight_config) == (
            'a<span class="prompt-random">||</span>b'
            '<span class="prompt-random-sep">|</span>c'
            '<span class="prompt-random">||</span>d'
        )


class TestEmit:
    """emit() renders hand-built trees too."""

    def test_hand_built_tree(self, highlight_config):
        """A constructed tree renders the same as its parsed equivalent."""
        tree = (
            Scope(
                kind=ScopeKind.BOOST_BRACE,
                open="{",
                close="}",
                own_weight=1.1,
                weight=1.1,
                children=(Literal("a", 1.1),),
            ),
        )
        assert emit(tree, highlight_config) == render("{a}", highlight_config)

    def test_empty_random_options(self, highlight_config):
        """Empty options leave only markers and separators."""
        tree = (RandomChoice(options=((), ())),)
        assert emit(tree, highlight_config) == (
            '<span class="prompt-random">||</span>'
            '<span class="prompt-random-sep">|</span>'
            '<span class="prompt-random">||</span>'
        )

    def test_parse_then_emit_matches_render(self, highlight_config):
        """render is parse followed by emit."""
        text = "1.5::a {b}::, [c:0.7] ||d|e||"
        assert emit(parse(text, highlight_config), highlight_config) == render(
            text, highlight_config
        )
