"""Command-line entry point.

    latexextr extract paper.docx                # convert with pandoc, print expressions
    latexextr extract notes.tex --latex -o out.txt
    latexextr extract paper.docx --json         # raw + cleaned lists as JSON
    latexextr serve --port 3000

Logs go to stderr so stdout only carries the result.
"""
import argparse
import json
import sys
import tempfile
from pathlib import Path

from loguru import logger

from latexextr.config import load_settings
from latexextr.converters.pandoc import convert_to_latex
from latexextr.error_utils import classify_processing_error
from latexextr.extractor.models import ConversionFailed, MathExtractorError
from latexextr.extractor.pipeline import extract_and_clean


def _configure_logging(verbose: bool = False) -> None:
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level)


def _read_source(args, settings) -> str:
    path = Path(args.path)
    if not path.is_file():
        raise ConversionFailed(f"Input file not found: {path}")

    try:
        if args.latex:
            return path.read_text(encoding="utf-8")

        with tempfile.TemporaryDirectory(prefix="latexextr_") as temp_dir:
            latex_path = Path(temp_dir) / f"{path.stem}_bulk.txt"
            convert_to_latex(
                path,
                latex_path,
                pandoc_binary=settings.pandoc_binary,
                timeout=settings.pandoc_timeout,
            )
            return latex_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConversionFailed(f"Could not read {path}: {e}") from e


def run_extract(args) -> int:
    settings = load_settings()
    try:
        source_text = _read_source(args, settings)
        result = extract_and_clean(source_text)
    except MathExtractorError as e:
        err = classify_processing_error(e)
        logger.error(f"Extraction failed for {args.path} [{err.code} @ {err.stage}]: {err.message}")
        return 1

    logger.info(f"Extracted {len(result.cleaned)} expression(s) from {args.path}")

    payload = (
        json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
        if args.json
        else result.output
    )

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(payload, encoding="utf-8")
        logger.info(f"Wrote {out_path}")
    else:
        sys.stdout.write(payload)
        sys.stdout.write("\n")
        sys.stdout.flush()
    return 0


def run_serve(args) -> int:
    import uvicorn

    settings = load_settings()
    port = args.port or settings.port
    logger.info(f"Server running on port {port}")
    uvicorn.run("latexextr.server.app:app", host=args.host, port=port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="latexextr: list the math expressions contained in a document.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level).",
    )
    subparsers = parser.add_subparsers(
        dest="command", required=True, help="Available commands"
    )

    # --- 'extract' command ---
    parser_extract = subparsers.add_parser(
        "extract", help="Extract math expressions from a document."
    )
    parser_extract.add_argument("path", help="Document to process (anything pandoc reads).")
    parser_extract.add_argument(
        "--latex",
        action="store_true",
        help="Treat the input as LaTeX text and skip the pandoc conversion.",
    )
    parser_extract.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write the result to this file instead of stdout.",
    )
    parser_extract.add_argument(
        "--json",
        action="store_true",
        help="Emit raw and cleaned expression lists as JSON.",
    )
    parser_extract.set_defaults(func=run_extract)

    # --- 'serve' command ---
    parser_serve = subparsers.add_parser("serve", help="Run the HTTP upload service.")
    parser_serve.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    parser_serve.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: $PORT or 3000).",
    )
    parser_serve.set_defaults(func=run_serve)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(verbose=args.verbose)
    return args.func(args)


def cli_main():
    """Synchronous wrapper for setuptools console_scripts entry point."""
    return main()


if __name__ == "__main__":
    sys.exit(cli_main())
