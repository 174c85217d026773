"""Newline-delimited envelopes carrying decoded operations to a remote mirror."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from typing import Any

from ..workflow.operations import Operation
from ..workflow.session import GenerationSession

logger = logging.getLogger(__name__)

NDJSON_MIMETYPE = "application/x-ndjson"

OPERATION = "operation"
COMPLETE = "complete"
ERROR = "error"

DEFAULT_ERROR_MESSAGE = "Failed to generate workflow"


def encode_envelope(payload: dict[str, Any]) -> str:
    """Serialise one envelope as a self-contained JSON line."""

    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False) + "\n"


def operation_envelope(operation: Operation) -> str:
    return encode_envelope({"type": OPERATION, "operation": operation.to_record()})


def complete_envelope() -> str:
    return encode_envelope({"type": COMPLETE})


def error_envelope(message: str) -> str:
    return encode_envelope({"type": ERROR, "error": message or DEFAULT_ERROR_MESSAGE})


def iter_envelopes(
    fragments: Iterable[str],
    session: GenerationSession | None = None,
) -> Iterator[str]:
    """Decode ``fragments`` and yield one envelope line per applied operation.

    Ends with exactly one ``complete`` envelope, or exactly one ``error``
    envelope when the fragment source fails.
    """

    session = session or GenerationSession()
    try:
        for operation in session.run(fragments):
            yield operation_envelope(operation)
    except Exception as exc:
        logger.exception("Fragment source failed after %s operations", session.decoder.operations)
        yield error_envelope(str(exc))
        return
    yield complete_envelope()
