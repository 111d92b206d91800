"""complens CLI: analyze component files and print the results as JSON.

Usage::

    complens src/components/Card.tsx src/components/Badge.tsx [options]

Options::

    --include-private     Record methods whose names start with "_"
    --no-descriptions     Skip doc-comment descriptions on props
    --no-complexity       Skip complexity scoring
    --max-file-size N     Skip files larger than N bytes
    --workers N           Analyze on N threads
    --indent N            JSON indentation (default 2)
    --verbose / -v        Enable debug logging on stderr
"""

import argparse
import json
import logging
import sys

from .analyzer import ComponentAnalyzer
from .config import AnalysisConfig, ConfigError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="complens",
        description="Extract props, bindings, composition and complexity from UI component sources.",
    )
    parser.add_argument("paths", nargs="+", help="Component source files")
    parser.add_argument("--include-private", action="store_true", help="Include _private methods")
    parser.add_argument("--no-descriptions", action="store_true", help="Skip prop descriptions")
    parser.add_argument("--no-complexity", action="store_true", help="Skip complexity scoring")
    parser.add_argument("--max-file-size", type=int, default=None, metavar="N", help="Size limit in bytes")
    parser.add_argument("--workers", type=int, default=None, metavar="N", help="Worker threads")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _config_from_args(args: argparse.Namespace) -> AnalysisConfig:
    config = AnalysisConfig.from_env()
    overrides = {}
    if args.include_private:
        overrides["include_private_methods"] = True
    if args.no_descriptions:
        overrides["extract_descriptions"] = False
    if args.no_complexity:
        overrides["compute_complexity"] = False
    if args.max_file_size is not None:
        if args.max_file_size <= 0:
            raise ConfigError("--max-file-size", str(args.max_file_size), "a positive integer")
        overrides["max_file_size_bytes"] = args.max_file_size
    return config.with_overrides(**overrides) if overrides else config


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = _config_from_args(args)
    except ConfigError as e:
        print(f"complens: {e}", file=sys.stderr)
        return 2

    analyzer = ComponentAnalyzer(config)
    results = analyzer.analyze_batch(args.paths, max_workers=args.workers)

    payload = {path: result.to_dict() for path, result in results.items()}
    print(json.dumps(payload, indent=args.indent or None))
    return 0 if all(r.success for r in results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
