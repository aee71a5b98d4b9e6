"""Shared fixtures."""

from __future__ import annotations

import pytest


@pytest.fixture
def granian_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict]:
    """Replace ``granian.Granian`` and record the keyword arguments it gets."""
    calls: list[dict] = []

    class FakeGranian:
        def __init__(self, **kwargs) -> None:
            calls.append(kwargs)

        def serve(self) -> None:
            calls[-1]["served"] = True

    monkeypatch.setattr("granian.Granian", FakeGranian)
    return calls
