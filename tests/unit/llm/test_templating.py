"""Unit tests for prompt template rendering."""

import pytest

from prompt_universe.core.errors import TemplateRenderError
from prompt_universe.core.llm import PromptTemplateEngine


@pytest.fixture
def engine() -> PromptTemplateEngine:
    return PromptTemplateEngine()


class TestRender:
    """Tests for PromptTemplateEngine.render."""

    def test_substitutes_variables(self, engine):
        assert engine.render("Hello {{name}}", {"name": "World"}) == "Hello World"

    def test_repeated_placeholders(self, engine):
        result = engine.render("{{x}} and {{ x }}", {"x": "A"})

        assert result == "A and A"

    def test_missing_variable_renders_empty(self, engine):
        assert engine.render("Hi {{name}}!", {}) == "Hi !"

    def test_unused_variables_are_ignored(self, engine):
        assert engine.render("Static", {"unused": "x"}) == "Static"

    def test_template_without_placeholders_is_unchanged(self, engine):
        template = "Summarize the text below.\n"

        assert engine.render(template, {}) == template

    def test_values_are_not_expanded_again(self, engine):
        result = engine.render("{{a}}", {"a": "{{b}}", "b": "nested"})

        assert result == "{{b}}"

    def test_no_html_escaping(self, engine):
        assert engine.render("{{v}}", {"v": "<b>&</b>"}) == "<b>&</b>"

    def test_triple_stash_is_accepted(self, engine):
        assert engine.render("{{{html}}}", {"html": "<p>"}) == "<p>"

    def test_empty_template(self, engine):
        assert engine.render("", {"name": "x"}) == ""

    def test_malformed_template_raises(self, engine):
        with pytest.raises(TemplateRenderError):
            engine.render("Hello {{name", {"name": "World"})

    def test_dotted_paths_read_nested_values(self, engine):
        result = engine.render("{{user.name}}", {"user": {"name": "Ada"}})

        assert result == "Ada"


class TestLiteralSyntax:
    """Statement and comment syntax is plain prompt text."""

    def test_statement_tags_stay_literal(self, engine):
        template = "Explain: {% for item in items %}{{ item }}{% endfor %}"

        result = engine.render(template, {"items": "ab"})

        assert result == "Explain: {% for item in items %}{% endfor %}"

    def test_comment_tags_stay_literal(self, engine):
        template = "Style the selector {#main-title} for {{name}}"

        result = engine.render(template, {"name": "the header"})

        assert result == "Style the selector {#main-title} for the header"

    def test_unclosed_comment_marker_is_text(self, engine):
        assert engine.render("{# not a comment", {}) == "{# not a comment"


class TestRestrictedPlaceholders:
    """Only variable lookups are evaluated inside placeholders."""

    def test_module_globals_are_unreachable(self, engine):
        with pytest.raises(TemplateRenderError):
            engine.render("{{ cycler.__init__.__globals__ }}", {})

    def test_calls_are_rejected(self, engine):
        with pytest.raises(TemplateRenderError):
            engine.render("{{ cycler.__init__.__globals__.os.getcwd() }}", {})

    def test_private_attributes_of_values_are_rejected(self, engine):
        with pytest.raises(TemplateRenderError):
            engine.render("{{ name.__class__ }}", {"name": "x"})

    def test_filters_are_rejected(self, engine):
        with pytest.raises(TemplateRenderError):
            engine.render("{{ name|upper }}", {"name": "x"})

    def test_expressions_are_rejected(self, engine):
        with pytest.raises(TemplateRenderError):
            engine.render("{{ 7 * 7 }}", {})

    def test_builtin_globals_are_not_defined(self, engine):
        assert engine.render("[{{ cycler }}][{{ range }}]", {}) == "[][]"


class TestVariablesIn:
    """Tests for PromptTemplateEngine.variables_in."""

    def test_lists_referenced_names(self, engine):
        assert engine.variables_in("{{a}} {{b}} {{a}}") == {"a", "b"}

    def test_empty_template(self, engine):
        assert engine.variables_in("") == set()

    def test_rejected_syntax_raises(self, engine):
        with pytest.raises(TemplateRenderError):
            engine.variables_in("{{ a|upper }}")
