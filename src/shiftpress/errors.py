"""Typed errors for shiftpress.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- Core functions raise; only the CLI maps errors to exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (`shiftpress exit-codes`).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_STRUCTURAL = 11
EXIT_ENCODING_GAP = 12
EXIT_DECODE_DESYNC = 13
EXIT_WINDOW_BOUNDS = 14


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid pipeline spec, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (corrupt token stream, unexpected error, etc.)"),
    ExitCodeInfo(EXIT_STRUCTURAL, "STRUCTURAL", "Huffman tree requested for an empty frequency table"),
    ExitCodeInfo(EXIT_ENCODING_GAP, "ENCODING_GAP", "Symbol to encode is missing from the code table"),
    ExitCodeInfo(EXIT_DECODE_DESYNC, "DECODE_DESYNC", "Bit stream does not decode with the given code table"),
    ExitCodeInfo(EXIT_WINDOW_BOUNDS, "WINDOW_BOUNDS", "LZ77 window size is not positive"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE. Do not edit manually.\n")
    lines.append("> Source of truth: `src/shiftpress/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `shiftpress exit-codes --output docs/exit_codes.md`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Every library error extends `ShiftpressError` and carries an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class ShiftpressError(Exception):
    """Base error for shiftpress."""

    exit_code: int = EXIT_GENERIC


class UsageError(ShiftpressError):
    exit_code = EXIT_USAGE


class CorruptPayload(ShiftpressError):
    exit_code = EXIT_GENERIC


class StructuralError(ShiftpressError):
    """Tree builder called with nothing to build from."""

    exit_code = EXIT_STRUCTURAL


class EncodingGapError(ShiftpressError):
    exit_code = EXIT_ENCODING_GAP


class DecodeDesyncError(ShiftpressError):
    exit_code = EXIT_DECODE_DESYNC


class WindowBoundsError(ShiftpressError):
    exit_code = EXIT_WINDOW_BOUNDS
