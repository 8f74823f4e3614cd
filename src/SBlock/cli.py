from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import MarkdownConfig, load_config
from .service import MarkdownService
from .utils import configure_logging, read_markdown, resolve_output_path, write_html


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sblock",
        description="Render blog Markdown with ::type ... ::end blocks into HTML.",
    )
    parser.add_argument("input", type=str, help="Path to Markdown file")
    parser.add_argument("-o", "--output", type=str, help="Output HTML path")
    parser.add_argument("-c", "--config", type=str, help="YAML renderer config")
    parser.add_argument("--no-wrap", action="store_true", help="Do not wrap output in a container div")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    output_path = resolve_output_path(input_path, args.output)

    if args.config:
        logging.info("Loading config %s", args.config)
        config = load_config(Path(args.config).expanduser())
    else:
        config = MarkdownConfig()
    service = MarkdownService(config)

    logging.info("Reading %s", input_path)
    markdown_text = read_markdown(input_path)
    logging.debug("Markdown length: %d chars", len(markdown_text))

    logging.info("Rendering HTML to %s", output_path)
    html = service.render(markdown_text, wrap=False if args.no_wrap else None)
    write_html(output_path, html)

    logging.info("Done. Saved to %s", output_path)


if __name__ == "__main__":
    main()
