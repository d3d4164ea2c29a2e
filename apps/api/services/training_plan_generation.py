"""Training plan generation pipeline.

validate -> load athlete + latest assessment -> prompt -> Gemini -> extract
(or fallback skeleton) -> insert plan.

Every call inserts a new active plan; earlier plans keep is_active = True.
"""
import logging
from dataclasses import dataclass

from core.exceptions import NotFoundError
from models import TrainingPlan
from schemas import GenerateTrainingPlanRequest, TrainingPlanResult
from services.athlete_store import AthleteStore
from services.fallbacks import fallback_training_plan
from services.gemini_client import PLAN_GENERATION, GeminiInvoker
from services.json_extraction import extract_or_fallback
from services.prompts import build_plan_prompt

logger = logging.getLogger(__name__)


@dataclass
class PlanOutcome:
    training_plan: TrainingPlan
    used_fallback: bool


class TrainingPlanPipeline:

    def __init__(self, store: AthleteStore, invoker: GeminiInvoker):
        self.store = store
        self.invoker = invoker

    def run(self, request: GenerateTrainingPlanRequest) -> PlanOutcome:
        athlete_id = request.athleteId
        duration = request.duration
        logger.info(f"Generating training plan for athlete {athlete_id}")

        athlete = self.store.get_athlete(athlete_id)
        if athlete is None:
            logger.error(f"Athlete not found: {athlete_id}")
            raise NotFoundError("Athlete")

        latest_assessment = self.store.latest_assessment(athlete.id)

        prompt = build_plan_prompt(
            athlete,
            latest_assessment=latest_assessment,
            goals=request.goals,
            focus_areas=request.focusAreas,
            duration=duration,
        )
        raw_text = self.invoker.generate(prompt, PLAN_GENERATION)
        extraction = extract_or_fallback(
            raw_text,
            TrainingPlanResult,
            lambda: fallback_training_plan(
                athlete.primary_sport,
                athlete.experience_years,
                duration,
                request.goals,
            ),
            context={"duration_weeks": duration},
        )

        training_plan = self.store.insert_training_plan(
            athlete_id=athlete.id,
            coach_id=request.coachId,
            sport_type=athlete.primary_sport,
            plan=extraction.result,
            payload=extraction.payload,
        )
        logger.info(
            "Training plan generated",
            extra={
                "extra_fields": {
                    "training_plan_id": training_plan.id,
                    "athlete_id": athlete.id,
                    "used_fallback": extraction.used_fallback,
                    "fallback_reason": extraction.error,
                }
            }
        )
        return PlanOutcome(training_plan=training_plan, used_fallback=extraction.used_fallback)
