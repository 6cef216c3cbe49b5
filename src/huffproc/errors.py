"""Typed errors for huffproc.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- Every failure is fatal to the current operation only: no retries, no global state.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_BAD_MAGIC = 11
EXIT_TRUNCATED = 12
EXIT_UNSUPPORTED_HEADER = 13


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid config, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (corrupt tree, unexpected error, etc.)"),
    ExitCodeInfo(EXIT_BAD_MAGIC, "BAD_MAGIC", "Leading 32 bits are not a huffproc magic number"),
    ExitCodeInfo(EXIT_TRUNCATED, "TRUNCATED", "Bit source exhausted before the end-of-stream code"),
    ExitCodeInfo(
        EXIT_UNSUPPORTED_HEADER, "UNSUPPORTED_HEADER", "Header mode recognized but not implemented"
    ),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE — do not edit manually.\n")
    lines.append("> Source of truth: `src/huffproc/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Every internal error extends `HuffProcError` and carries an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append(
        "- A failed `decompress` never leaves a partial output file behind.\n"
    )
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class HuffProcError(Exception):
    """Base error for huffproc."""

    exit_code: int = EXIT_GENERIC


class UsageError(HuffProcError):
    exit_code = EXIT_USAGE


class CorruptPayload(HuffProcError):
    exit_code = EXIT_GENERIC


class BadMagic(CorruptPayload):
    exit_code = EXIT_BAD_MAGIC


class TruncatedStream(CorruptPayload):
    exit_code = EXIT_TRUNCATED


class UnsupportedHeader(HuffProcError):
    exit_code = EXIT_UNSUPPORTED_HEADER


# Names used by the format description.
FormatError = BadMagic
TruncatedStreamError = TruncatedStream
