from __future__ import annotations

import importlib
import logging
from typing import Any, Callable, List, Mapping

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.rules_core import StateCore
from markdown_it.token import Token
from mdit_py_plugins.anchors import anchors_plugin
from mdit_py_plugins.anchors.index import slugify
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin
from mdit_py_plugins.texmath import texmath_plugin

from .config import MarkdownConfig
from .extension import sblock_plugin

logger = logging.getLogger(__name__)

_UNSET: Any = object()
_ANCHOR_CLASS = "header-anchor"

_PLUGINS: dict[str, Callable[[MarkdownIt], None]] = {
    "footnote": footnote_plugin,
    "tasklists": tasklists_plugin,
    "deflist": deflist_plugin,
    "texmath": texmath_plugin,
}


class MarkdownService:
    """Render blog Markdown, including ``::type`` blocks, to HTML."""

    def __init__(self, config: MarkdownConfig | Mapping[str, Any] | None = None):
        if not isinstance(config, MarkdownConfig):
            config = MarkdownConfig.from_mapping(config)
        self.config = config
        self._extensions: List[tuple[Callable[..., None], dict[str, Any]]] = [
            (load_extension(spec), {}) for spec in config.extensions
        ]
        self.md = self._build()

    def add_syntax_extension(self, plugin: Callable[..., None], **options: Any) -> None:
        """Register a markdown-it plugin and rebuild the parser around it."""
        self._extensions.append((plugin, options))
        self.md = self._build()

    def parse(self, text: str) -> list[Token]:
        return self.md.parse(text)

    def render(
        self,
        text: str,
        wrap: bool | None = None,
        css_class: str | None = None,
        inject_css: str | None = _UNSET,
    ) -> str:
        if wrap is None:
            wrap = self.config.wrap
        css_class = self.config.css_class if css_class is None else css_class
        if inject_css is _UNSET:
            inject_css = self.config.inject_css

        html = self.md.render(text)
        if wrap:
            html = f'<div class="{escapeHtml(css_class)}">{html}</div>'
        if inject_css:
            html = f"<style>{inject_css}</style>{html}"
        return html

    def _build(self) -> MarkdownIt:
        options = self.config.options
        md = MarkdownIt(
            "commonmark",
            {
                "html": bool(options.get("html", False)),
                "breaks": bool(options.get("breaks", False)),
                "typographer": bool(options.get("typographer", False)),
                "linkify": bool(options.get("linkify", True)),
                "maxNesting": int(options.get("max_nesting", 20)),
            },
        ).enable(["table", "strikethrough"])
        if options.get("linkify", True):
            md.enable("linkify")
        if options.get("typographer"):
            md.enable(["replacements", "smartquotes"])

        for name, enabled in self.config.plugins.items():
            if not enabled:
                continue
            if name not in _PLUGINS:
                raise ValueError(f"Unknown markdown plugin: {name}")
            md.use(_PLUGINS[name])

        permalink = self.config.heading_permalink
        if permalink.get("enabled"):
            prefix = str(permalink.get("id_prefix") or "")
            symbol = str(permalink.get("symbol") or "")
            md.use(
                anchors_plugin,
                min_level=int(permalink.get("min_level", 1)),
                max_level=int(permalink.get("max_level", 6)),
                slug_func=lambda title: prefix + slugify(title),
                permalink=True,
                permalinkBefore=True,
                permalinkSymbol=symbol,
                permalinkSpace=bool(symbol),
            )
            html_class = str(permalink.get("html_class") or "")
            if html_class and html_class != _ANCHOR_CLASS:
                md.core.ruler.after("anchor", "anchor_class", _permalink_class(html_class))

        for plugin, plugin_options in self._extensions:
            logger.debug("Registering syntax extension %s", getattr(plugin, "__name__", plugin))
            md.use(plugin, **plugin_options)

        # last, so the fold sees every token the other core rules produce
        return md.use(sblock_plugin)


def load_extension(spec: str) -> Callable[..., None]:
    """Import a ``package.module:callable`` markdown-it plugin reference."""
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Extension must look like 'module:callable', got {spec!r}")
    plugin = getattr(importlib.import_module(module_name), attr)
    if not callable(plugin):
        raise ValueError(f"Extension {spec!r} is not callable")
    return plugin


def _permalink_class(html_class: str) -> Callable[[StateCore], None]:
    """Swap the class the anchors plugin puts on heading permalinks."""

    def rule(state: StateCore) -> None:
        for token in state.tokens:
            if token.type != "inline" or not token.children:
                continue
            for child in token.children:
                if child.type == "link_open" and child.attrGet("class") == _ANCHOR_CLASS:
                    child.attrSet("class", html_class)

    return rule
