# splicer/validate_blocks.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from schemas.schemas_report import BlockError, ValidationResult

from .contracts import LINE_TERMINATOR, CodeBlock


class CodeSyntaxError(Exception):
    """Raised by a syntax check when code does not parse."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line


# check(code) returns None when code parses, raises CodeSyntaxError otherwise.
# It must never execute the code.
SyntaxCheck = Callable[[str], None]


@dataclass(frozen=True)
class ValidatorConfig:
    max_error_message_length: int = 100


def approximate_line(output_text: str, offset: int) -> int:
    return output_text.count(LINE_TERMINATOR, 0, offset) + 1


def validate_block(
    block: CodeBlock,
    output_text: str,
    check: SyntaxCheck,
    cfg: ValidatorConfig = ValidatorConfig(),
    module_check: Optional[SyntaxCheck] = None,
) -> ValidationResult:
    """
    module_check, when given, is used for type="module" blocks; otherwise
    check handles every block.
    """
    if not block.executable:
        return ValidationResult(block_index=block.index, ok=True, skipped=True)

    code = block.raw_content.strip()
    if not code:
        # an empty block is trivially valid
        return ValidationResult(block_index=block.index, ok=True)

    run_check = module_check if (block.module and module_check is not None) else check
    try:
        run_check(code)
    except CodeSyntaxError as e:
        return ValidationResult(
            block_index=block.index,
            ok=False,
            error=BlockError(
                message=e.message[: cfg.max_error_message_length],
                approximate_line=approximate_line(output_text, block.start_offset),
            ),
        )

    return ValidationResult(block_index=block.index, ok=True)


def validate_blocks(
    blocks: Iterable[CodeBlock],
    output_text: str,
    check: SyntaxCheck,
    cfg: ValidatorConfig = ValidatorConfig(),
    module_check: Optional[SyntaxCheck] = None,
) -> List[ValidationResult]:
    """Validate every block. Syntax failures are recorded, never raised."""
    if cfg.max_error_message_length <= 0:
        raise ValueError("max_error_message_length must be > 0")
    return [validate_block(b, output_text, check, cfg, module_check) for b in blocks]
