from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List


@dataclass(frozen=True)
class Param:
    """A single block parameter: keyed (``key=value``) or positional."""

    value: str
    key: str | None = None

    @property
    def positional(self) -> bool:
        return self.key is None


@dataclass
class BlockNode:
    type: str
    params: List[Param] = field(default_factory=list)
    # markdown-it tokens between the start line and ``::end``
    children: List[Any] = field(default_factory=list)

    def positional_values(self) -> list[str]:
        return [param.value for param in self.params if param.positional]


@dataclass
class RenderedBlock:
    tag: str
    attrs: dict[str, str]
    inner: str
