"""Streaming workflow document: framing, decoding, mutation and validation."""

from .decoder import OperationDecoder, should_skip_line
from .document import Edge, Node, NodeData, OperationFormatError, Position, WorkflowDocument
from .framing import LineFramer
from .mutator import apply_operation, repair_triggers
from .operations import Operation, parse_operation
from .session import GenerationSession
from .validator import FinalizationError, IncompleteNode, finalize_document

__all__ = [
    "Edge",
    "FinalizationError",
    "GenerationSession",
    "IncompleteNode",
    "LineFramer",
    "Node",
    "NodeData",
    "Operation",
    "OperationDecoder",
    "OperationFormatError",
    "Position",
    "WorkflowDocument",
    "apply_operation",
    "finalize_document",
    "parse_operation",
    "repair_triggers",
    "should_skip_line",
]
