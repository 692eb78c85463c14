"""
Workflow outcome schemas.

Mutating internal operations answer with a flash message and exactly one
navigation outcome: a redirect target on success, or the form to render
again (with the submitted state) on failure.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class Flash(BaseModel):
    """Single-display status message."""

    type: Literal["notice", "alert"]
    message: str

    @classmethod
    def notice(cls, message: str) -> Flash:
        return cls(type="notice", message=message)

    @classmethod
    def alert(cls, message: str) -> Flash:
        return cls(type="alert", message=message)


class WorkflowResponse(BaseModel):
    """Common envelope for create/update/destroy results."""

    flash: Flash
    redirect_to: str | None = None
    render: str | None = None
    errors: dict[str, list[str]] = Field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.render is None
