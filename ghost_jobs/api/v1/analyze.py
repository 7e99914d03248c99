from __future__ import annotations

from typing import AsyncIterator

from fastapi import APIRouter, Depends, status

from ghost_jobs.config import settings
from ghost_jobs.core.enums import InputKind
from ghost_jobs.schemas import AnalysisResponse, AnalyzeRequest, ErrorResponse
from ghost_jobs.services.analysis import analyze_description, analyze_page
from ghost_jobs.services.fetch import PageFetcher, PageSource
from ghost_jobs.services.intake import normalize_input
from ghost_jobs.services.scoring import get_scoring_config


router = APIRouter()


async def get_page_fetcher() -> AsyncIterator[PageSource]:
    async with PageFetcher(settings) as fetcher:
        yield fetcher


@router.post(
    "/analyze",
    status_code=status.HTTP_200_OK,
    response_model=AnalysisResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def analyze(
    request: AnalyzeRequest,
    fetcher: PageSource = Depends(get_page_fetcher),
) -> AnalysisResponse:
    analysis_input = normalize_input(request.url, request.job_description)
    scoring_config = get_scoring_config(settings.scoring_config_path)

    if analysis_input.kind is InputKind.DESCRIPTION:
        result = analyze_description(analysis_input.description or "", config=scoring_config)
    else:
        outcome = await fetcher.fetch(analysis_input.link.url)
        result = analyze_page(analysis_input.link, outcome, config=scoring_config)
    return AnalysisResponse.from_result(result)
