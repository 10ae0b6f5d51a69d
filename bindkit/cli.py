"""CLI entrypoints for bindkit commands."""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from bindkit.core import integrator
from bindkit.core.config import get_version
from bindkit.introspection.description import DescriptionLoadError
from bindkit.introspection.signatures import SignatureTableError


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MISSING_COVERAGE = 1
EXIT_LOAD_FAILURE = 2


def _add_common_options(parser: argparse.ArgumentParser, needs_api: bool = True) -> None:
    if needs_api:
        parser.add_argument(
            "--api",
            required=True,
            help="API description JSON (as printed by `print-api-json`), or - for stdin.",
        )
    parser.add_argument(
        "--config",
        default=None,
        help="Directory containing bindkit.config.json (defaults to current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Enable debug logging on stderr.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bindkit",
        description="Generate Go declarations from an API description and check their coverage.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Enable debug logging on stderr.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    structs_parser = subparsers.add_parser("structs", help="Print options structs for every method.")
    _add_common_options(structs_parser)

    interfaces_parser = subparsers.add_parser("interfaces", help="Print documented interface declarations.")
    _add_common_options(interfaces_parser)
    interfaces_parser.add_argument("--signatures", required=True, help="Signature table JSON (interfaces.json).")
    interfaces_parser.add_argument(
        "--with-structs",
        action="store_true",
        help="Append every synthesized options struct after the interfaces.",
    )

    must_parser = subparsers.add_parser("must", help="Print panicking Must-wrappers for error-returning methods.")
    _add_common_options(must_parser, needs_api=False)
    must_parser.add_argument("--signatures", required=True, help="Signature table JSON (interfaces.json).")

    validate_parser = subparsers.add_parser("validate", help="Report documented methods missing from the Go surface.")
    _add_common_options(validate_parser)
    surface = validate_parser.add_mutually_exclusive_group(required=True)
    surface.add_argument("--signatures", help="Signature table JSON (interfaces.json).")
    surface.add_argument("--go-doc", help="File holding `go doc -all -short` output of the binding.")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint for bindkit commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(bool(args.verbose))

    try:
        if args.command == "structs":
            _write(integrator.structs(_source(args.api), args.config))
        elif args.command == "interfaces":
            _write(integrator.interfaces(
                _source(args.api),
                args.signatures,
                args.config,
                include_structs=args.with_structs,
            ))
        elif args.command == "must":
            _write(integrator.must_wrappers(args.signatures, args.config))
        elif args.command == "validate":
            go_doc_text = _read_text(args.go_doc) if args.go_doc else None
            report = integrator.validate(_source(args.api), args.signatures, go_doc_text, args.config)
            if not report.ok:
                _write(report.format_checklist() + "\n")
                return EXIT_MISSING_COVERAGE
    except (DescriptionLoadError, SignatureTableError, ValueError) as exc:
        sys.stderr.write(f"bindkit {args.command} failed: {exc}\n")
        return EXIT_LOAD_FAILURE

    return EXIT_OK


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s', stream=sys.stderr, force=True)


def _source(path: str):
    return sys.stdin if path == "-" else path


def _read_text(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Failed to read {path}: {exc}") from exc


def _write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def run() -> None:
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    run()
