from __future__ import annotations

import logging
import re

from markdown_it.rules_block import StateBlock

from .model import BlockNode
from .params import parse_params

logger = logging.getLogger(__name__)

START_RE = re.compile(r"^::([a-z0-9\-]+)(?:\s+(.*))?$", re.IGNORECASE)
END_RE = re.compile(r"^::end\s*$", re.IGNORECASE)
_FENCE_RE = re.compile(r"^(`{3,}|~{3,})")


def match_start(line: str) -> BlockNode | None:
    """Return a new node if ``line`` opens a custom block, else ``None``."""
    text = line.strip()
    if END_RE.match(text):
        return None
    match = START_RE.match(text)
    if match is None:
        return None
    block_type = match.group(1).lower()
    if block_type == "end":
        return None
    return BlockNode(type=block_type, params=parse_params(match.group(2) or ""))


def is_end(line: str) -> bool:
    return END_RE.match(line.strip()) is not None


def _line_text(state: StateBlock, line: int) -> str:
    return state.src[state.bMarks[line] + state.tShift[line] : state.eMarks[line]]


def _closes_fence(text: str, marker: str) -> bool:
    return text.startswith(marker) and not text.lstrip(marker[0]).strip()


def _find_end(state: StateBlock, start_line: int, end_line: int) -> tuple[int, bool]:
    """Scan for the ``::end`` matching the block opened at ``start_line``.

    Returns the terminator line and whether it was found. Nested starts raise
    the depth so one ``::end`` closes exactly one block.
    """
    depth = 1
    fence: str | None = None
    next_line = start_line
    while True:
        next_line += 1
        if next_line >= end_line:
            return next_line, False

        text = _line_text(state, next_line)
        if text and state.sCount[next_line] < state.blkIndent:
            # non-empty line with negative indent ends the enclosing container
            return next_line, False
        if state.is_code_block(next_line):
            continue

        if fence is not None:
            if _closes_fence(text, fence):
                fence = None
            continue
        fence_match = _FENCE_RE.match(text)
        if fence_match:
            fence = fence_match.group(1)
            continue

        if is_end(text):
            depth -= 1
            if depth == 0:
                return next_line, True
        elif match_start(text) is not None:
            depth += 1


def sblock_rule(state: StateBlock, startLine: int, endLine: int, silent: bool) -> bool:
    if state.is_code_block(startLine):
        return False

    node = match_start(_line_text(state, startLine))
    if node is None:
        return False
    if silent:
        return True

    next_line, closed = _find_end(state, startLine, endLine)
    if not closed:
        logger.debug("Implicitly closing ::%s opened at line %d", node.type, startLine + 1)

    old_parent = state.parentType
    old_line_max = state.lineMax
    state.parentType = "sblock"
    state.lineMax = next_line

    token = state.push("sblock_open", "div", 1)
    token.block = True
    token.markup = "::" + node.type
    token.info = _line_text(state, startLine).strip()[len(token.markup) :].strip()
    token.map = [startLine, next_line]
    token.meta = {"node": node}

    state.md.block.tokenize(state, startLine + 1, next_line)

    token = state.push("sblock_close", "div", -1)
    token.block = True
    token.markup = "::end"

    state.parentType = old_parent
    state.lineMax = old_line_max
    state.line = next_line + (1 if closed else 0)
    return True
