"""
Intraday routes.

Returns intraday data of the last completed month (premium tier) or of the
most recent window (free tier), aggregated per calendar day.
"""

from fastapi import APIRouter, Request

from dayprism.core.logging import log_context
from dayprism.core.models import DayAggregate
from dayprism.core.services.orchestrator import TieredFetchOrchestrator, normalize_symbol
from dayprism.web.models import ErrorResponse
from dayprism.web.utils import get_request_id

router = APIRouter()


@router.get(
    "/intraday/{symbol}",
    response_model=list[DayAggregate],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_intraday_data(request: Request, symbol: str) -> list[DayAggregate]:
    """
    Intraday data aggregated by day.

    - **symbol**: ticker symbol, e.g. IBM, AAPL (case-insensitive)

    Each row carries ``day``, ``lowAverage``, ``highAverage`` and ``volume``.
    """
    normalized = normalize_symbol(symbol)
    orchestrator: TieredFetchOrchestrator = request.app.state.orchestrator

    with log_context(trace_id=get_request_id(request), symbol=normalized):
        return await orchestrator.fetch_and_aggregate(normalized)
