"""
Video Analysis API Router

Endpoints for:
- Running the AI analysis of an uploaded video
- Listing an athlete's assessments
"""
from typing import List

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from core.exceptions import NotFoundError
from schemas import AnalyzeVideoResponse, AssessmentResponse, ErrorResponse
from services.athlete_store import AthleteStore, get_athlete_store
from services.gemini_client import GeminiInvoker, get_model_invoker
from services.request_validation import read_json_body, validate_analysis_request
from services.video_analysis import VideoAnalysisPipeline

router = APIRouter(prefix="/v1", tags=["Video Analysis"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post("/analyze-video", response_model=AnalyzeVideoResponse, responses=ERROR_RESPONSES)
async def analyze_video(
    request: Request,
    store: AthleteStore = Depends(get_athlete_store),
    invoker: GeminiInvoker = Depends(get_model_invoker),
):
    """
    Analyze a video with the generative model and store the assessment.

    Body: {"videoId": str, "athleteId": str}
    """
    payload = validate_analysis_request(await read_json_body(request))
    pipeline = VideoAnalysisPipeline(store, invoker)
    outcome = await run_in_threadpool(pipeline.run, payload)

    return AnalyzeVideoResponse(
        assessment=AssessmentResponse.model_validate(outcome.assessment),
        message="Video analysis completed successfully",
    )


@router.get("/athletes/{athlete_id}/assessments", response_model=List[AssessmentResponse])
def list_assessments(athlete_id: str, store: AthleteStore = Depends(get_athlete_store)):
    """All assessments of an athlete, newest first."""
    if store.get_athlete(athlete_id) is None:
        raise NotFoundError("Athlete")
    return store.list_assessments(athlete_id)
