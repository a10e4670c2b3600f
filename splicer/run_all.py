# splicer/run_all.py
from __future__ import annotations

import argparse
import hashlib
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

from schemas.schemas_report import Report

from .assemble import AssemblyError, assemble
from .ingest import load_source
from .io_utils import write_json, write_text_atomic
from .layout import builders_from_layout, load_layout
from .report import render_report, summarize
from .scan import scan_blocks
from .validate_blocks import SyntaxCheck, ValidatorConfig, validate_blocks

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_VALIDATION_FAILED = 2


@dataclass(frozen=True)
class SpliceConfig:
    source_path: Path
    output_path: Path
    layout_path: Path

    report_json_path: Optional[Path] = None
    max_error_message_length: int = 100
    # exit 2 instead of 0 when any block fails its syntax check
    fail_on_validation_error: bool = False


class FatalRunError(RuntimeError):
    """The run was aborted; no output was written (or an old output was left as-is)."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation


def sha256_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _default_checks() -> Tuple[SyntaxCheck, SyntaxCheck]:
    # lazy: tree-sitter is only needed when no check is injected
    from .syntax import check_javascript, check_javascript_module

    return check_javascript, check_javascript_module


def run(cfg: SpliceConfig, check: Optional[SyntaxCheck] = None) -> Report:
    """
    load -> assemble -> write -> scan -> validate -> report

    Anything before the report is fatal and raises FatalRunError. Syntax
    failures are only recorded in the returned Report.

    An injected check is used for every block, modules included.
    """
    if cfg.max_error_message_length <= 0:
        raise FatalRunError(
            "configure",
            ValueError(f"max_error_message_length must be > 0, got {cfg.max_error_message_length}"),
        )

    module_check: Optional[SyntaxCheck] = None
    if check is None:
        try:
            check, module_check = _default_checks()
        except ImportError as e:
            raise FatalRunError("configure", e) from e

    try:
        source = load_source(cfg.source_path)
    except (OSError, UnicodeDecodeError) as e:
        raise FatalRunError("read source", e) from e

    try:
        plan = load_layout(cfg.layout_path)
        builders = builders_from_layout(plan, source)
    except (OSError, ValueError) as e:
        raise FatalRunError("load layout", e) from e

    try:
        out = assemble(builders)
    except AssemblyError as e:
        raise FatalRunError("assemble", e) from e

    try:
        write_text_atomic(cfg.output_path, out.text)
    except OSError as e:
        raise FatalRunError("write output", e) from e

    print(f"[OK] Wrote: {cfg.output_path} ({out.line_count} lines, {len(out.segments)} segments)")

    results = validate_blocks(
        scan_blocks(out.text),
        out.text,
        check,
        ValidatorConfig(max_error_message_length=cfg.max_error_message_length),
        module_check=module_check,
    )
    report = summarize(
        results,
        meta={
            "layout_id": plan.layout_id,
            "source": str(cfg.source_path),
            "source_lines": source.line_count,
            "output": str(cfg.output_path),
            "output_lines": out.line_count,
            "output_sha256": sha256_text(out.text),
            "segments": [{"name": s.name, "kind": s.kind.value} for s in out.segments],
        },
    )

    if cfg.report_json_path is not None:
        write_json(cfg.report_json_path, report.model_dump(mode="json"))
        logger.debug("report written to %s", cfg.report_json_path)

    return report


def exit_code_for(report: Report, cfg: SpliceConfig) -> int:
    if cfg.fail_on_validation_error and report.total_errors > 0:
        return EXIT_VALIDATION_FAILED
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reassemble an HTML document from line ranges and syntax-check its <script> blocks (fail-closed).",
    )
    parser.add_argument("--source", required=True, help="Path to the source HTML document.")
    parser.add_argument("--output", required=True, help="Path of the reassembled document to write.")
    parser.add_argument("--layout", required=True, help="Path to the JSON layout (ordered segments).")
    parser.add_argument("--report-json", default=None, help="Also write the validation report as JSON.")
    parser.add_argument(
        "--max-error-length",
        type=int,
        default=100,
        help="Truncate syntax error messages to this many characters.",
    )
    parser.add_argument(
        "--fail-on-validation-error",
        action="store_true",
        help="Exit with status 2 when any script block fails the syntax check.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[Sequence[str]] = None, check: Optional[SyntaxCheck] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = SpliceConfig(
        source_path=Path(args.source),
        output_path=Path(args.output),
        layout_path=Path(args.layout),
        report_json_path=Path(args.report_json) if args.report_json else None,
        max_error_message_length=args.max_error_length,
        fail_on_validation_error=args.fail_on_validation_error,
    )

    try:
        report = run(cfg, check=check)
    except FatalRunError as e:
        print(f"[FAIL] {e}", file=sys.stderr)
        return EXIT_FATAL

    for line in render_report(report):
        print(line)

    return exit_code_for(report, cfg)


if __name__ == "__main__":
    raise SystemExit(main())
