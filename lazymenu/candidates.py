"""Candidate stream reader.

One candidate per input line, in stream order, trimmed at the line feed only.
Empty lines are kept and nothing is deduplicated.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import BinaryIO

from .errors import ResourceExhaustedError
from .log import get_logger
from .menu.matching import Candidate, build_candidates

logger = get_logger("candidates")


def decode_lines(raw_lines: Iterable[bytes]) -> list[str]:
    """Decode raw lines as UTF-8 (with replacement), dropping the trailing ``\\n``."""
    lines: list[str] = []
    for raw in raw_lines:
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        lines.append(raw.decode("utf-8", errors="replace"))
    return lines


def read_candidates(stream: BinaryIO) -> tuple[Candidate, ...]:
    """Build the master candidate list from a binary stream."""
    try:
        candidates = build_candidates(decode_lines(stream))
    except MemoryError as exc:
        raise ResourceExhaustedError("cannot allocate memory for input lines") from exc
    logger.debug("read %d candidates", len(candidates))
    return candidates
