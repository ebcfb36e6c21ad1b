"""Prompt template rendering with Jinja2.

Templates use ``{{name}}`` placeholders, optionally with dotted paths
(``{{user.name}}``). Nothing else is interpreted: ``{% ... %}`` and
``{# ... #}`` stay literal text, and expressions, filters and calls inside
``{{ }}`` are rejected. Missing variables render as empty text, unused
variables are ignored and substituted values are never expanded again.
Handlebars-style ``{{{name}}}`` is accepted as ``{{name}}``.
"""

import re
from collections.abc import Mapping
from typing import Any

import structlog
from jinja2 import ChainableUndefined, TemplateError, TemplateSyntaxError, meta, nodes
from jinja2.sandbox import SandboxedEnvironment

from prompt_universe.core.errors import TemplateRenderError


logger = structlog.get_logger()

_TRIPLE_STASH = re.compile(r"\{\{\{\s*(.*?)\s*\}\}\}")

# Statement and comment delimiters moved out of reach of prompt text
_BLOCK_DELIMITERS = ("\x00<%", "%>\x00")
_COMMENT_DELIMITERS = ("\x00<#", "#>\x00")

_PLACEHOLDER_NODES = (
    nodes.Template,
    nodes.Output,
    nodes.TemplateData,
    nodes.Name,
    nodes.Getattr,
    nodes.Getitem,
    nodes.Const,
)


def _check_placeholder(node: nodes.Node) -> None:
    if not isinstance(node, _PLACEHOLDER_NODES):
        raise TemplateRenderError(
            "提示词模板只支持 {{变量名}} 形式的占位符。",
            details={"node": type(node).__name__},
        )
    if isinstance(node, nodes.Getattr) and node.attr.startswith("_"):
        raise TemplateRenderError(
            f"提示词模板不能访问私有属性: {node.attr}",
            details={"node": "Getattr"},
        )
    if isinstance(node, nodes.Getitem):
        key = node.arg
        if not isinstance(key, nodes.Const) or (
            isinstance(key.value, str) and key.value.startswith("_")
        ):
            raise TemplateRenderError(
                "提示词模板只支持 {{变量名}} 形式的占位符。",
                details={"node": "Getitem"},
            )


class PromptTemplateEngine:
    """Renders user-authored prompt templates against a variable map."""

    def __init__(self) -> None:
        self._env = SandboxedEnvironment(
            autoescape=False,  # Don't escape for prompt templates
            undefined=ChainableUndefined,
            keep_trailing_newline=True,
            block_start_string=_BLOCK_DELIMITERS[0],
            block_end_string=_BLOCK_DELIMITERS[1],
            comment_start_string=_COMMENT_DELIMITERS[0],
            comment_end_string=_COMMENT_DELIMITERS[1],
        )
        # No cycler, range, lipsum and friends
        self._env.globals.clear()

    @staticmethod
    def _normalize(template: str) -> str:
        return _TRIPLE_STASH.sub(r"{{ \1 }}", template.replace("\x00", ""))

    def _parse(self, template: str) -> nodes.Template:
        try:
            parsed = self._env.parse(self._normalize(template))
        except TemplateSyntaxError as e:
            logger.warning("template_syntax_error", error=str(e), line=e.lineno)
            raise TemplateRenderError(
                f"提示词模板语法无效: {e.message}",
                details={"line": e.lineno},
            ) from e
        _check_placeholder(parsed)
        for node in parsed.find_all(nodes.Node):
            _check_placeholder(node)
        return parsed

    def render(self, template: str, variables: Mapping[str, Any] | None = None) -> str:
        """Render ``template`` with ``variables``.

        Raises:
            TemplateRenderError: If the template is invalid, uses anything
                but placeholders, or fails to render.
        """
        if not template:
            return ""
        compiled = self._env.from_string(self._parse(template))
        try:
            return compiled.render(dict(variables or {}))
        except TemplateError as e:
            logger.warning("template_render_failed", error=str(e))
            raise TemplateRenderError(f"提示词模板渲染失败: {e}") from e

    def variables_in(self, template: str) -> set[str]:
        """Return the variable names a template references."""
        if not template:
            return set()
        return meta.find_undeclared_variables(self._parse(template))


# Stateless, safe to share
template_engine = PromptTemplateEngine()
