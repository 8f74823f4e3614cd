from __future__ import annotations

import re

from markdown_it.common.utils import escapeHtml

from .model import BlockNode, RenderedBlock

FLAG_RE = re.compile(r"[a-zA-Z0-9\-_]+")
LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
DEFAULT_GRID_COLS = "2"


class InvalidNodeType(TypeError):
    """Raised when the block renderer is handed something other than a BlockNode."""


def render_block(
    node: BlockNode, inner: str, body_link: tuple[str, str] | None = None
) -> RenderedBlock:
    """Turn a parsed block and its rendered children into a tag/attrs/inner triple.

    ``body_link`` is the ``(href, html)`` of a link that makes up the whole body,
    used by ``btn`` blocks that carry no link parameter.
    """
    if not isinstance(node, BlockNode):
        raise InvalidNodeType(f"Incompatible node type: {type(node).__name__}")

    attrs: dict[str, str] = {"class": f"s-block s-{node.type}"}
    positional: list[tuple[int, str]] = []
    for param in node.params:
        if param.positional:
            index = len(positional)
            positional.append((index, param.value))
            if FLAG_RE.fullmatch(param.value):
                attrs[f"data-{param.value}"] = ""
            else:
                attrs[f"data-arg-{index}"] = param.value
        else:
            attrs[f"data-{param.key}"] = param.value

    if node.type == "grid" and node.params:
        cols = positional[0][1] if positional else DEFAULT_GRID_COLS
        attrs["style"] = f"--cols: {cols}"

    tag = "div"
    if node.type == "btn":
        for index, value in positional:
            match = LINK_RE.fullmatch(value.strip())
            if match is None:
                continue
            tag = "a"
            attrs["href"] = match.group(2)
            if not inner.strip():
                inner = escapeHtml(match.group(1))
            attrs.pop(f"data-arg-{index}", None)
            break
        else:
            if body_link is not None:
                tag = "a"
                attrs["href"], inner = body_link

    return RenderedBlock(tag=tag, attrs=attrs, inner=inner)


def to_html(block: RenderedBlock) -> str:
    attrs = "".join(f' {name}="{escapeHtml(value)}"' for name, value in block.attrs.items())
    if block.inner.endswith("\n"):
        return f"<{block.tag}{attrs}>\n{block.inner}</{block.tag}>\n"
    return f"<{block.tag}{attrs}>{block.inner}</{block.tag}>\n"
