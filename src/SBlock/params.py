from __future__ import annotations

import re
from typing import Callable, List

from .model import Param

_KEY = r"([a-z0-9\-_]+)"


def _keyed(match: re.Match) -> Param:
    return Param(key=match.group(1), value=match.group(2))


def _quoted(match: re.Match) -> Param:
    return Param(value=match.group(0)[1:-1])


def _bare(match: re.Match) -> Param:
    return Param(value=match.group(0))


# Tried in order at every scan position; the first one that matches wins.
_MATCHERS: tuple[tuple[re.Pattern, Callable[[re.Match], Param]], ...] = (
    (re.compile(_KEY + r'="([^"]*)"', re.IGNORECASE), _keyed),
    (re.compile(_KEY + r"='([^']*)'", re.IGNORECASE), _keyed),
    (re.compile(_KEY + r"=(\S+)", re.IGNORECASE), _keyed),
    (re.compile(r'"[^"]*"'), _quoted),
    (re.compile(r"'[^']*'"), _quoted),
    (re.compile(r"\S+"), _bare),
)


def parse_params(text: str) -> List[Param]:
    """Split a block's parameter string into keyed and positional params.

    ``title="Card Title" bordered 'two words' cols=3`` gives
    ``[title=Card Title, bordered, two words, cols=3]``. Unbalanced quotes are
    not repaired: ``title="Card`` is the keyed value ``"Card``.
    """
    params: List[Param] = []
    pos = 0
    while pos < len(text):
        if text[pos].isspace():
            pos += 1
            continue
        for pattern, build in _MATCHERS:
            match = pattern.match(text, pos)
            if match:
                params.append(build(match))
                pos = match.end()
                break
    return params
