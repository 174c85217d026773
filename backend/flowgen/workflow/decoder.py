"""Classify framed lines and decode them into operations."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from .document import OperationFormatError
from .operations import Operation, parse_operation

logger = logging.getLogger(__name__)

CODE_FENCE = "```"


def should_skip_line(line: str) -> bool:
    """Return whether a line is a blank separator or a markdown code fence."""

    trimmed = line.strip()
    return not trimmed or trimmed.startswith(CODE_FENCE)


class OperationDecoder:
    """Decode one line at a time while counting what was dropped."""

    def __init__(self) -> None:
        self.operations = 0
        self.malformed = 0
        self.ignored = 0

    def decode(self, line: str) -> Operation | None:
        if should_skip_line(line):
            return None

        trimmed = line.strip()
        try:
            record = json.loads(trimmed)
        except (ValueError, RecursionError):
            self._reject(trimmed, "invalid JSON")
            return None
        return self.decode_record(record, trimmed)

    def decode_record(self, record: Any, source: str | None = None) -> Operation | None:
        if not isinstance(record, Mapping):
            self._reject(source or repr(record), "record is not an object")
            return None

        try:
            operation = parse_operation(record)
        except OperationFormatError as exc:
            self._reject(source or repr(record), str(exc))
            return None

        if operation is None:
            self.ignored += 1
            logger.debug("Ignoring unknown operation %r", record.get("op"))
            return None

        self.operations += 1
        logger.debug("Operation %s: %s", self.operations, operation.op)
        return operation

    def _reject(self, text: str, reason: str) -> None:
        self.malformed += 1
        logger.warning("Skipping invalid line (%s): %s", reason, text[:50])
