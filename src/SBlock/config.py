from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

DEFAULTS: dict[str, Any] = {
    "css_class": "markdown-body",
    "inject_css": None,
    "wrap": True,
    "options": {
        "html": False,
        "breaks": False,
        "typographer": False,
        "linkify": True,
        "max_nesting": 20,
    },
    "plugins": {
        "footnote": True,
        "tasklists": True,
        "deflist": True,
        "texmath": False,
    },
    "heading_permalink": {
        "enabled": True,
        "id_prefix": "vditorAnchor-",
        "html_class": "vditor-anchor",
        "min_level": 1,
        "max_level": 6,
        "symbol": "",
    },
    "extensions": [],
}


@dataclass
class MarkdownConfig:
    css_class: str = DEFAULTS["css_class"]
    inject_css: str | None = None
    wrap: bool = True
    options: dict[str, Any] = field(default_factory=lambda: dict(DEFAULTS["options"]))
    plugins: dict[str, bool] = field(default_factory=lambda: dict(DEFAULTS["plugins"]))
    heading_permalink: dict[str, Any] = field(
        default_factory=lambda: dict(DEFAULTS["heading_permalink"])
    )
    extensions: list[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "MarkdownConfig":
        """Build a config from user overrides, deep-merged over the defaults."""
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ValueError("Markdown config root must be a mapping.")
        merged = _merge(DEFAULTS, data)
        for section in ("options", "plugins", "heading_permalink"):
            if not isinstance(merged[section], Mapping):
                raise ValueError(f"Config section '{section}' must be a mapping.")
        extensions = merged["extensions"] or []
        if isinstance(extensions, str) or not isinstance(extensions, (list, tuple)):
            raise ValueError("Config section 'extensions' must be a list of 'module:callable' strings.")
        return cls(
            css_class=str(merged["css_class"]),
            inject_css=merged["inject_css"],
            wrap=bool(merged["wrap"]),
            options=dict(merged["options"]),
            plugins={name: bool(enabled) for name, enabled in merged["plugins"].items()},
            heading_permalink=dict(merged["heading_permalink"]),
            extensions=[str(ext) for ext in extensions],
        )


def load_config(path: str | Path) -> MarkdownConfig:
    text = Path(path).read_text(encoding="utf-8")
    return MarkdownConfig.from_mapping(yaml.safe_load(text))


def _merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged
