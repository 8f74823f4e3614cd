from __future__ import annotations

from typing import Sequence

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from .block_parser import sblock_rule
from .block_renderer import render_block, to_html

_INTERRUPTS = ["paragraph", "reference", "blockquote", "list"]


def sblock_plugin(md: MarkdownIt) -> None:
    """Add ``::type params`` ... ``::end`` blocks to a markdown-it parser.

    Apply it after other plugins: the fold rule is pushed to the end of the core
    chain, and core rules that run later only see top-level tokens.
    """
    md.block.ruler.before("fence", "sblock", sblock_rule, {"alt": _INTERRUPTS})
    md.core.ruler.push("sblock_fold", fold_blocks)

    def render_sblock(self, tokens: Sequence[Token], idx: int, options, env) -> str:
        token = tokens[idx]
        node = token.meta.get("node")
        inner = self.render(token.children or [], options, env)
        body_link = None
        if getattr(node, "type", None) == "btn":
            body_link = _body_link(self, token.children or [], options, env)

        block = render_block(node, inner, body_link)
        if block.tag == "a" and "href" in block.attrs:
            href = md.normalizeLink(block.attrs["href"])
            if md.validateLink(href):
                block.attrs["href"] = href
            else:
                del block.attrs["href"]
        return to_html(block)

    md.add_render_rule("sblock", render_sblock)


def fold_blocks(state: StateCore) -> None:
    state.tokens = fold_tokens(state.tokens)


def fold_tokens(tokens: Sequence[Token]) -> list[Token]:
    """Collapse each ``sblock_open`` .. ``sblock_close`` range into one ``sblock`` token.

    The inner tokens become the folded token's children and the node's children,
    so rendering a block renders its content first.
    """
    levels: list[list[Token]] = [[]]
    openers: list[Token] = []
    for token in tokens:
        if token.type == "sblock_open":
            openers.append(token)
            levels.append([])
        elif token.type == "sblock_close" and openers:
            opener = openers.pop()
            children = levels.pop()
            node = opener.meta["node"]
            node.children = children
            levels[-1].append(
                Token(
                    "sblock",
                    "div",
                    0,
                    map=opener.map,
                    level=opener.level,
                    children=children,
                    markup=opener.markup,
                    info=opener.info,
                    meta=opener.meta,
                    block=True,
                )
            )
        else:
            levels[-1].append(token)
    return levels[0]


def _body_link(renderer, children: Sequence[Token], options, env) -> tuple[str, str] | None:
    """``(href, html)`` when the body is one paragraph holding a single link."""
    if len(children) != 3:
        return None
    opening, inline, _closing = children
    if opening.type != "paragraph_open" or inline.type != "inline":
        return None
    parts = inline.children or []
    if len(parts) < 2 or parts[0].type != "link_open" or parts[-1].type != "link_close":
        return None
    if any(part.type == "link_open" for part in parts[1:-1]):
        return None
    href = parts[0].attrGet("href")
    if not href:
        return None
    return str(href), renderer.renderInline(parts[1:-1], options, env)
