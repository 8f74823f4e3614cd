from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional


def configure_logging(verbose: bool = False) -> None:
    """Console logging for the ``sblock`` command; ``--verbose`` shows parser debug output."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s" if verbose else "%(levelname)s %(message)s",
    )


def resolve_output_path(input_path: Path, output: Optional[str]) -> Path:
    """``post.md`` renders to ``post.html`` beside it, or inside ``output`` when that is a directory."""
    if output:
        out_path = Path(output)
        if out_path.is_dir():
            out_path = out_path / input_path.with_suffix(".html").name
        return out_path
    return input_path.with_suffix(".html")


def read_markdown(path: Path) -> str:
    # editor exports of posts often start with a BOM
    return path.read_text(encoding="utf-8-sig")


def write_html(path: Path, html: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
