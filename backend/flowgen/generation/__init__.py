"""Integration point for the model call that produces operation text."""
from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from flask import Flask

from ..workflow.document import WorkflowDocument
from .prompts import build_system_prompt, build_user_prompt

_EXTENSION_KEY = "fragment_source"


@dataclass
class GenerationRequest:
    """Everything a fragment source needs to start one model call."""

    prompt: str
    user_prompt: str
    system_prompt: str
    history: list[dict[str, str]] = field(default_factory=list)
    existing: WorkflowDocument | None = None


FragmentSource = Callable[[GenerationRequest], Iterable[str]]


def set_fragment_source(app: Flask, source: FragmentSource | None) -> None:
    """Register the callable producing raw model text for ``app``."""

    if source is None:
        app.extensions.pop(_EXTENSION_KEY, None)
    else:
        app.extensions[_EXTENSION_KEY] = source


def get_fragment_source(app: Flask) -> FragmentSource | None:
    return app.extensions.get(_EXTENSION_KEY)


__all__ = [
    "FragmentSource",
    "GenerationRequest",
    "build_system_prompt",
    "build_user_prompt",
    "get_fragment_source",
    "set_fragment_source",
]
