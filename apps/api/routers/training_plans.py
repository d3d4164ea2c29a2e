"""
Training Plans API Router

Endpoints for:
- Generating an AI training plan for an athlete
- Listing an athlete's plans
"""
from typing import List

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from core.exceptions import NotFoundError
from schemas import ErrorResponse, GenerateTrainingPlanResponse, TrainingPlanResponse
from services.athlete_store import AthleteStore, get_athlete_store
from services.gemini_client import GeminiInvoker, get_model_invoker
from services.request_validation import read_json_body, validate_plan_request
from services.training_plan_generation import TrainingPlanPipeline

router = APIRouter(prefix="/v1", tags=["Training Plans"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post("/generate-training-plan", response_model=GenerateTrainingPlanResponse, responses=ERROR_RESPONSES)
async def generate_training_plan(
    request: Request,
    store: AthleteStore = Depends(get_athlete_store),
    invoker: GeminiInvoker = Depends(get_model_invoker),
):
    """
    Generate and store a new active training plan.

    Body: {"athleteId": str, "coachId"?: str, "goals"?: [str], "focusAreas"?: [str], "duration"?: int}
    """
    payload = validate_plan_request(await read_json_body(request))
    pipeline = TrainingPlanPipeline(store, invoker)
    outcome = await run_in_threadpool(pipeline.run, payload)

    return GenerateTrainingPlanResponse(
        training_plan=TrainingPlanResponse.model_validate(outcome.training_plan),
        message="Training plan generated successfully",
    )


@router.get("/athletes/{athlete_id}/training-plans", response_model=List[TrainingPlanResponse])
def list_training_plans(
    athlete_id: str,
    active_only: bool = False,
    store: AthleteStore = Depends(get_athlete_store),
):
    """Plans of an athlete, newest first. Several may be active at once."""
    if store.get_athlete(athlete_id) is None:
        raise NotFoundError("Athlete")
    return store.list_training_plans(athlete_id, active_only=active_only)
