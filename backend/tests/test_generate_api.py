"""Tests for the streaming generation endpoint."""
from __future__ import annotations

import json

from backend.flowgen.streaming.reassembler import RemoteReassembler
from backend.flowgen.workflow.document import WorkflowDocument
from conftest import action_node, ndjson, trigger_node

MODEL_OUTPUT = [
    "```json\n",
    '{"op": "setName", "name": "Lead follow-up"}\n{"op": "addNode", "node": ',
    json.dumps(trigger_node("t1")) + "}\n",
    json.dumps({"op": "addNode", "node": action_node("mail", {"actionType": "Send Email"})}),
    "\n" + json.dumps({"op": "addEdge", "edge": {"id": "e1", "source": "t1", "target": "mail"}}),
    "\n```",
]


def _envelopes(response) -> list[dict[str, object]]:
    return [json.loads(line) for line in response.get_data(as_text=True).splitlines()]


def test_generate_streams_ndjson_envelopes(client, fragment_source):
    fragment_source(MODEL_OUTPUT)

    response = client.post("/api/ai/generate", json={"prompt": "Email new leads"})

    assert response.status_code == 200
    assert response.mimetype == "application/x-ndjson"
    assert response.headers["Cache-Control"] == "no-cache"
    envelopes = _envelopes(response)
    assert [envelope["type"] for envelope in envelopes] == ["operation"] * 4 + ["complete"]


def test_response_body_can_be_mirrored(client, fragment_source):
    fragment_source(MODEL_OUTPUT)

    response = client.post("/api/ai/generate", json={"prompt": "Email new leads"})
    body = response.get_data()
    mirror = RemoteReassembler()
    for index in range(0, len(body), 7):
        mirror.feed(body[index : index + 7])
    document = mirror.close()

    assert document.name == "Lead follow-up"
    assert [node.id for node in document.nodes] == ["t1", "mail"]
    assert [edge.id for edge in document.edges] == ["e1"]


def test_source_failure_ends_with_error_envelope(client, fragment_source):
    def failing(request):
        yield ndjson({"op": "setName", "name": "Partial"})
        raise RuntimeError("upstream timeout")

    fragment_source(failing)

    response = client.post("/api/ai/generate", json={"prompt": "anything"})

    envelopes = _envelopes(response)
    assert envelopes[-1] == {"type": "error", "error": "upstream timeout"}
    assert [envelope["type"] for envelope in envelopes].count("error") == 1
    assert "complete" not in [envelope["type"] for envelope in envelopes]


def test_existing_workflow_is_passed_to_source(client, fragment_source):
    requests = fragment_source([ndjson({"op": "setAssistantMessage", "message": "Nothing to do"})])
    existing = {
        "name": "Existing",
        "nodes": [trigger_node("t1"), action_node("a1", {"actionType": "Scrape", "url": "x"})],
        "edges": [{"id": "e1", "source": "t1", "target": "a1", "type": "default"}],
    }

    response = client.post(
        "/api/ai/generate",
        json={
            "prompt": "Rename the scraper",
            "existingWorkflow": existing,
            "conversationHistory": [{"role": "user", "content": "earlier"}, "bogus"],
        },
    )

    assert response.status_code == 200
    response.get_data()
    generation_request = requests[0]
    assert isinstance(generation_request.existing, WorkflowDocument)
    assert generation_request.history == [{"role": "user", "content": "earlier"}]
    assert "- t1 (t1)" in generation_request.user_prompt
    assert "- e1: t1 -> a1" in generation_request.user_prompt
    assert "User's request: Rename the scraper" in generation_request.user_prompt
    assert "Scrape" in generation_request.system_prompt


def test_prompt_is_required(client, fragment_source):
    fragment_source([])

    response = client.post("/api/ai/generate", json={"prompt": "  "})

    assert response.status_code == 400
    assert response.get_json() == {"error": "Prompt is required"}


def test_invalid_existing_workflow_is_rejected(client, fragment_source):
    fragment_source([])

    response = client.post(
        "/api/ai/generate",
        json={"prompt": "edit", "existingWorkflow": {"nodes": [{"label": "no id"}]}},
    )

    assert response.status_code == 400
    assert "existingWorkflow" in response.get_json()["error"]


def test_missing_source_is_a_server_error(client):
    response = client.post("/api/ai/generate", json={"prompt": "hello"})

    assert response.status_code == 500
    assert "not configured" in response.get_json()["error"]


def test_session_summary_is_logged(client, fragment_source):
    fragment_source(MODEL_OUTPUT + ["not json\n"])

    client.post("/api/ai/generate", json={"prompt": "Email new leads"}).get_data()
    logs = client.get("/api/logs", query_string={"source": "generate"}).get_json()

    assert len(logs) == 1
    summary = json.loads(logs[0]["message"])
    assert summary["operations"] == 4
    assert summary["malformed"] == 1
    assert summary["incomplete"] == 1
