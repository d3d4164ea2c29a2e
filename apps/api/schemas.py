from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional

DEFAULT_PLAN_DURATION_WEEKS = 8
MAX_PLAN_DURATION_WEEKS = 52


# ============ Requests ============

class AnalyzeVideoRequest(BaseModel):
    """Body of POST /v1/analyze-video. Presence is checked by the request validator."""
    videoId: Optional[str] = None
    athleteId: Optional[str] = None


class GenerateTrainingPlanRequest(BaseModel):
    """Body of POST /v1/generate-training-plan."""
    athleteId: Optional[str] = None
    coachId: Optional[str] = None
    goals: Optional[List[str]] = None
    focusAreas: Optional[List[str]] = None
    duration: Optional[int] = Field(default=DEFAULT_PLAN_DURATION_WEEKS, ge=1, le=MAX_PLAN_DURATION_WEEKS)

    @field_validator("duration", mode="after")
    @classmethod
    def _default_duration(cls, v: Optional[int]) -> int:
        return DEFAULT_PLAN_DURATION_WEEKS if v is None else v


# ============ Structured model results ============

Score = Annotated[float, Field(ge=0, le=100)]


class AnalysisResult(BaseModel):
    """Shape the model must return for a video analysis (and the fallback produces)."""
    model_config = ConfigDict(extra="allow")

    overall_score: Score
    technique_score: Score
    speed_score: Score
    power_score: Score
    endurance_score: Score
    flexibility_score: Score
    strengths: List[str]
    weaknesses: List[str]
    recommendations: List[str]
    detailed_feedback: str
    ai_confidence: Score


def _number_to_str(v: Any) -> Any:
    # Models often answer "reps": 12 instead of "12"
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


class PlanExercise(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    sets: int = Field(ge=0)
    reps: str
    rest: str
    notes: str = ""

    @field_validator("reps", "rest", "notes", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        return _number_to_str(v)


class PlanDay(BaseModel):
    model_config = ConfigDict(extra="allow")

    day: int
    type: str
    exercises: List[PlanExercise]
    duration_minutes: float = Field(ge=0)
    intensity: Literal["low", "medium", "high"]

    @field_validator("intensity", mode="before")
    @classmethod
    def _normalize_intensity(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class PlanWeek(BaseModel):
    model_config = ConfigDict(extra="allow")

    week_number: int
    focus: str
    days: List[PlanDay]


class TrainingPlanResult(BaseModel):
    """
    Shape the model must return for a training plan (and the fallback produces).

    Validate with context={"duration_weeks": n} to require the requested length.
    """
    model_config = ConfigDict(extra="allow")

    title: str
    description: str
    duration_weeks: int = Field(ge=1)
    difficulty_level: int = Field(ge=1, le=5)
    goals: List[str]
    weeks: List[PlanWeek]
    nutrition_tips: List[str]
    recovery_guidelines: List[str]
    progression_notes: str
    safety_considerations: List[str]

    @field_validator("duration_weeks")
    @classmethod
    def _matches_requested_duration(cls, v: int, info: ValidationInfo) -> int:
        expected = (info.context or {}).get("duration_weeks")
        if expected is not None and v != expected:
            raise ValueError(f"duration_weeks {v} does not match requested {expected}")
        return v


# ============ Responses ============

class AssessmentResponse(BaseModel):
    id: str
    video_id: str
    athlete_id: str
    overall_score: float
    technique_score: Optional[float] = None
    speed_score: Optional[float] = None
    power_score: Optional[float] = None
    endurance_score: Optional[float] = None
    flexibility_score: Optional[float] = None
    strengths: Optional[List[str]] = None
    weaknesses: Optional[List[str]] = None
    recommendations: Optional[List[str]] = None
    detailed_feedback: Optional[str] = None
    ai_confidence: Optional[float] = None
    analysis_data: Optional[Dict[str, Any]] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TrainingPlanResponse(BaseModel):
    id: str
    athlete_id: str
    coach_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    sport_type: str
    duration_weeks: Optional[int] = None
    difficulty_level: Optional[int] = None
    goals: Optional[List[str]] = None
    plan_data: Dict[str, Any]
    is_active: bool
    progress_percentage: float = 0
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AnalyzeVideoResponse(BaseModel):
    success: bool = True
    assessment: AssessmentResponse
    message: str


class GenerateTrainingPlanResponse(BaseModel):
    success: bool = True
    training_plan: TrainingPlanResponse
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: str
