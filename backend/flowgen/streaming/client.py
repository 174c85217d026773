"""HTTP client that mirrors a remote generation session incrementally."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import requests

from ..catalog import NodeCatalog
from ..workflow.document import WorkflowDocument
from ..workflow.session import UpdateCallback
from ..workflow.validator import finalize_document
from .reassembler import RemoteReassembler

CONNECT_TIMEOUT = 10.0


class GenerationClientError(Exception):
    """Raised when the generation endpoint rejects the request."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class GenerationClient:
    """Stream a workflow from ``/api/ai/generate`` and apply it as it arrives."""

    def __init__(
        self,
        base_url: str = "http://localhost:9200",
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """
        Args:
            base_url: Base URL of the backend serving the generate endpoint
            timeout: Read timeout in seconds; ``None`` keeps the connection
                open for as long as the session runs
            session: Optional requests session, e.g. with a mounted adapter
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return "Request failed"
        if isinstance(payload, dict) and isinstance(payload.get("error"), str):
            return payload["error"]
        return "Request failed"

    def stream(
        self,
        prompt: str,
        on_update: UpdateCallback | None = None,
        existing: WorkflowDocument | None = None,
        history: Sequence[dict[str, str]] | None = None,
    ) -> WorkflowDocument:
        """Return the mirrored document once the stream reports completion."""

        body: dict[str, Any] = {"prompt": prompt, "conversationHistory": list(history or [])}
        if existing is not None:
            body["existingWorkflow"] = existing.to_dict()

        seed = WorkflowDocument.from_dict(existing.to_dict()) if existing is not None else None
        reassembler = RemoteReassembler(seed, on_update=on_update)

        with self.session.post(
            f"{self.base_url}/api/ai/generate",
            json=body,
            stream=True,
            timeout=(CONNECT_TIMEOUT, self.timeout),
        ) as response:
            if response.status_code >= 400:
                raise GenerationClientError(response.status_code, self._error_message(response))
            # Raw bytes; the reassembler decodes UTF-8 across chunk boundaries.
            for chunk in response.iter_content(chunk_size=None):
                reassembler.feed(chunk)
                if reassembler.finished:
                    break
        return reassembler.close()

    def generate(
        self,
        prompt: str,
        on_update: UpdateCallback | None = None,
        existing: WorkflowDocument | None = None,
        history: Sequence[dict[str, str]] | None = None,
        catalog: NodeCatalog | None = None,
    ) -> WorkflowDocument:
        """Stream a workflow and accept it only if every node is complete."""

        document = self.stream(prompt, on_update=on_update, existing=existing, history=history)
        return finalize_document(document, catalog)
