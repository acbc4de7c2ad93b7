"""Dice rolling routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from rollexpr.cli import HELP_TEXT
from rollexpr.dependencies import get_random_source
from rollexpr.evaluator import evaluate
from rollexpr.narration import NarrationLog
from rollexpr.parser import parse
from rollexpr.random_source import RandomSource
from rollexpr.schemas import RollErrorResponse, RollRequest, RollResponse

router = APIRouter()


@router.post(
    "/rolls",
    response_model=RollResponse,
    responses={422: {"model": RollErrorResponse}},
)
def create_roll(
    body: RollRequest,
    source: RandomSource = Depends(get_random_source),
) -> RollResponse:
    """Parse and roll an expression. Parse and evaluation errors become 422s."""
    tree = parse(body.expression)
    log = NarrationLog()
    total = evaluate(tree, source, verbose=body.verbose, narrate=log)
    return RollResponse(expression=str(tree), total=total, narration=log.lines())


@router.get("/rolls/help", response_class=PlainTextResponse)
def roll_help() -> str:
    return HELP_TEXT
