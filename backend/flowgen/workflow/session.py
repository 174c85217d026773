"""Local decode-apply pipeline over one model output stream."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from ..catalog import NodeCatalog
from .decoder import OperationDecoder
from .document import WorkflowDocument
from .framing import LineFramer
from .mutator import apply_operation, prepare_seed
from .operations import Operation
from .validator import finalize_document

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[WorkflowDocument], None]


class GenerationSession:
    """Owns one document and feeds it fragments strictly in arrival order.

    A document instance must not be shared between sessions. Every applied
    operation leaves the document structurally valid, so a consumer may stop
    iterating at any point without cleanup.
    """

    def __init__(
        self,
        document: WorkflowDocument | None = None,
        on_update: UpdateCallback | None = None,
    ) -> None:
        self.document = prepare_seed(document) if document is not None else WorkflowDocument()
        self._on_update = on_update
        self._framer = LineFramer()
        self.decoder = OperationDecoder()
        self.fragments = 0

    def _apply_lines(self, lines: Iterable[str]) -> list[Operation]:
        applied: list[Operation] = []
        for line in lines:
            operation = self.decoder.decode(line)
            if operation is None:
                continue
            apply_operation(self.document, operation)
            applied.append(operation)
            if self._on_update is not None:
                self._on_update(self.document)
        return applied

    def feed(self, fragment: str) -> list[Operation]:
        self.fragments += 1
        return self._apply_lines(self._framer.feed(fragment))

    def finish(self) -> list[Operation]:
        return self._apply_lines(self._framer.flush())

    def run(self, fragments: Iterable[str]) -> Iterator[Operation]:
        """Yield each operation after it has been applied to the document."""

        for fragment in fragments:
            yield from self.feed(fragment)
        yield from self.finish()
        logger.info(
            "Stream complete. Chunks: %s, Operations: %s, Malformed: %s",
            self.fragments,
            self.decoder.operations,
            self.decoder.malformed,
        )

    def finalize(self, catalog: NodeCatalog | None = None) -> WorkflowDocument:
        return finalize_document(self.document, catalog)

    def stats(self) -> dict[str, int]:
        return {
            "fragments": self.fragments,
            "operations": self.decoder.operations,
            "malformed": self.decoder.malformed,
            "ignored": self.decoder.ignored,
        }
