"""
Module: cli

Purpose:
    Command line entry point: load a document JSON file, plan its compact
    layout and cross-references, and write a JSON plan summary.

Usage:
    compact-study-plan probability.json --columns 3 --paper-size letter
    compact-study-plan probability.json --no-validate --output plan.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from compact_study import __version__
from compact_study.controller import plan_document
from compact_study.layout import LayoutError
from compact_study.loading import LoaderError, load_document
from compact_study.references import DuplicateItemError

logger = logging.getLogger("compact_study.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compact-study-plan",
        description="Plan a compact multi-column study guide with cross-references",
    )
    parser.add_argument("document", type=Path, help="Path to an AcademicDocument JSON file")
    parser.add_argument("--paper-size", choices=["a4", "letter", "legal"], help="Paper size (default a4)")
    parser.add_argument("--columns", type=int, help="Column count, 1-3 (default 2)")
    parser.add_argument("--font-size", type=float, help="Font size in points, 8-14 (default 10.5)")
    parser.add_argument("--line-height", type=float, help="Line height multiplier, 1.0-2.0 (default 1.2)")
    parser.add_argument("--no-validate", action="store_true", help="Skip cross-reference validation")
    parser.add_argument("--no-references", action="store_true", help="Disable cross-reference generation")
    parser.add_argument("--threshold", type=float, help="Minimum reference confidence, 0-1 (default 0.7)")
    parser.add_argument("--max-distance", type=int, help="Maximum structural distance (default 3)")
    parser.add_argument("--no-schema", action="store_true", help="Skip full JSON schema validation of the input")
    parser.add_argument("--output", "-o", type=Path, help="Write the plan summary here instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def layout_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Partial layout config from parsed arguments (unset options omitted)."""
    overrides: Dict[str, Any] = {}
    typography: Dict[str, Any] = {}
    if args.paper_size is not None:
        overrides["paper_size"] = args.paper_size
    if args.columns is not None:
        overrides["columns"] = args.columns
    if args.font_size is not None:
        typography["font_size_pt"] = args.font_size
    if args.line_height is not None:
        typography["line_height"] = args.line_height
    if typography:
        overrides["typography"] = typography
    return overrides


def reference_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Partial cross-reference config from parsed arguments."""
    overrides: Dict[str, Any] = {}
    if args.no_validate:
        overrides["validation_enabled"] = False
    if args.no_references:
        overrides["enable_auto_generation"] = False
    if args.threshold is not None:
        overrides["confidence_threshold"] = args.threshold
    if args.max_distance is not None:
        overrides["max_distance"] = args.max_distance
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        document = load_document(args.document, strict=not args.no_schema)
        result = plan_document(document, layout_overrides(args), reference_overrides(args))
    except LoaderError as e:
        logger.error(f"Failed to load document: {e}")
        return 1
    except LayoutError as e:
        hint = f" ({e.suggestion})" if e.suggestion else ""
        logger.error(f"Layout failed [{e.code}]: {e}{hint}")
        return 1
    except DuplicateItemError as e:
        logger.error(f"Cross-reference generation failed: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    summary = json.dumps(result.to_dict(), indent=2)
    if args.output:
        try:
            args.output.write_text(summary + "\n", encoding="utf-8")
        except OSError as e:
            logger.error(f"Cannot write {args.output}: {e}")
            return 1
        logger.info(f"Wrote plan summary to {args.output}")
    else:
        print(summary)

    if result.invalid_reference_count:
        logger.warning(f"{result.invalid_reference_count} cross-references failed validation")
    return 0


if __name__ == "__main__":
    sys.exit(main())
