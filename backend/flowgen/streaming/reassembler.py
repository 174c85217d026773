"""Mirror a generation session from its envelope stream."""

from __future__ import annotations

import codecs
import json
import logging
from collections.abc import Iterable
from typing import Any

from ..workflow.decoder import OperationDecoder
from ..workflow.document import WorkflowDocument
from ..workflow.framing import LineFramer
from ..workflow.mutator import apply_operation, prepare_seed
from ..workflow.session import UpdateCallback
from .envelope import COMPLETE, DEFAULT_ERROR_MESSAGE, ERROR, OPERATION

logger = logging.getLogger(__name__)


class GenerationStreamError(Exception):
    """Raised when the origin reports a terminal fault."""


class StreamIncompleteError(GenerationStreamError):
    """Raised when the envelope stream ends without a completion signal."""


class RemoteReassembler:
    """Apply operation envelopes to a local copy of the document.

    Bytes may be split anywhere, including inside a multi-byte character.
    Invalid UTF-8 is replaced with U+FFFD rather than failing the mirror.
    """

    def __init__(
        self,
        document: WorkflowDocument | None = None,
        on_update: UpdateCallback | None = None,
    ) -> None:
        self.document = prepare_seed(document) if document is not None else WorkflowDocument()
        self._on_update = on_update
        self._text = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._framer = LineFramer()
        self.decoder = OperationDecoder()
        self.completed = False
        self.error: str | None = None
        self.malformed_envelopes = 0

    @property
    def finished(self) -> bool:
        return self.completed or self.error is not None

    def feed(self, chunk: bytes | str) -> None:
        text = self._text.decode(chunk) if isinstance(chunk, bytes) else chunk
        self._process(self._framer.feed(text))

    def feed_all(self, chunks: Iterable[bytes | str]) -> WorkflowDocument:
        for chunk in chunks:
            self.feed(chunk)
        return self.close()

    def close(self) -> WorkflowDocument:
        """Flush the trailing line and return the mirrored document."""

        self._process(self._framer.feed(self._text.decode(b"", final=True)))
        self._process(self._framer.flush())
        if self.error is not None:
            raise GenerationStreamError(self.error)
        if not self.finished:
            raise StreamIncompleteError("Stream ended before the workflow was complete")
        return self.document

    def _process(self, lines: list[str]) -> None:
        for line in lines:
            if self.finished:
                return
            trimmed = line.strip()
            if not trimmed:
                continue
            try:
                envelope = json.loads(trimmed)
            except (ValueError, RecursionError):
                self.malformed_envelopes += 1
                logger.warning("Failed to parse envelope line: %s", trimmed[:50])
                continue
            if isinstance(envelope, dict):
                self._handle(envelope)
            else:
                self.malformed_envelopes += 1

    def _handle(self, envelope: dict[str, Any]) -> None:
        kind = envelope.get("type")
        if kind == OPERATION:
            operation = self.decoder.decode_record(envelope.get("operation"))
            if operation is None:
                return
            apply_operation(self.document, operation)
            if self._on_update is not None:
                self._on_update(self.document)
        elif kind == COMPLETE:
            self.completed = True
        elif kind == ERROR:
            message = envelope.get("error")
            self.error = message if isinstance(message, str) and message else DEFAULT_ERROR_MESSAGE
            logger.error("Generation failed upstream: %s", self.error)
            raise GenerationStreamError(self.error)
        else:
            logger.debug("Ignoring envelope of type %r", kind)
