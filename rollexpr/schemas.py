"""Pydantic request and response models for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from rollexpr.config import settings


class RollRequest(BaseModel):
    expression: str = Field(
        min_length=1,
        max_length=settings.max_expression_length,
        description="Dice expression such as '4d6c3+2d8-1'. No whitespace.",
    )
    verbose: bool = Field(
        default=False,
        description="Include one narration line per die drawn.",
    )


class RollResponse(BaseModel):
    expression: str = Field(description="Canonical form of the parsed expression.")
    total: int
    narration: list[str] = Field(
        default_factory=list,
        description="Console-style narration lines; empty unless verbose was requested.",
    )


class RollErrorResponse(BaseModel):
    detail: str
    kind: str
