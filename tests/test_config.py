import textwrap
from pathlib import Path

import pytest

from SBlock.config import MarkdownConfig, load_config


def test_defaults():
    config = MarkdownConfig.from_mapping(None)
    assert config == MarkdownConfig()
    assert config.css_class == "markdown-body"
    assert config.options["max_nesting"] == 20
    assert config.options["html"] is False
    assert config.plugins["texmath"] is False
    assert config.options["linkify"] is True
    assert config.heading_permalink["id_prefix"] == "vditorAnchor-"
    assert config.heading_permalink["html_class"] == "vditor-anchor"


def test_nested_sections_are_merged():
    config = MarkdownConfig.from_mapping({"options": {"html": True}, "heading_permalink": {"id_prefix": "h-"}})
    assert config.options["html"] is True
    assert config.options["max_nesting"] == 20
    assert config.heading_permalink["id_prefix"] == "h-"
    assert config.heading_permalink["enabled"] is True


def test_invalid_shapes():
    with pytest.raises(ValueError, match="root must be a mapping"):
        MarkdownConfig.from_mapping(["css_class"])
    with pytest.raises(ValueError, match="'plugins'"):
        MarkdownConfig.from_mapping({"plugins": "all"})
    with pytest.raises(ValueError, match="'extensions'"):
        MarkdownConfig.from_mapping({"extensions": "pkg:plugin"})


def test_load_config_from_yaml(tmp_path: Path):
    path = tmp_path / "markdown.yaml"
    path.write_text(
        textwrap.dedent(
            """
            css_class: vditor-reset
            wrap: false
            plugins:
              footnote: false
            extensions:
              - mdit_py_plugins.front_matter:front_matter_plugin
            """
        ),
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.css_class == "vditor-reset"
    assert config.wrap is False
    assert config.plugins == {"footnote": False, "tasklists": True, "deflist": True, "texmath": False}
    assert config.extensions == ["mdit_py_plugins.front_matter:front_matter_plugin"]


def test_empty_yaml_gives_defaults(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == MarkdownConfig()
