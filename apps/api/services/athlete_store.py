"""
Storage contract for the AI pipelines.

The pipelines only need to read a video, an athlete and the athlete's
assessments, append assessments and plans, and flip a video's analyzed flag.
Each write commits on its own; callers decide how writes are sequenced.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from core.database import get_db
from core.exceptions import PersistenceError
from models import Assessment, Athlete, TrainingPlan, Video
from schemas import AnalysisResult, TrainingPlanResult

logger = logging.getLogger(__name__)


class AthleteStore:
    """Narrow read/insert/update access to athletes, videos, assessments and plans."""

    def __init__(self, db: Session):
        self.db = db

    # ---------------------------------------------------------------- reads

    def get_video(self, video_id: str) -> Optional[Video]:
        return self.db.get(Video, video_id)

    def get_athlete(self, athlete_id: str) -> Optional[Athlete]:
        return (
            self.db.query(Athlete)
            .options(joinedload(Athlete.profile))
            .filter(Athlete.id == athlete_id)
            .first()
        )

    def latest_assessment(self, athlete_id: str) -> Optional[Assessment]:
        """Most recent assessment of the athlete by creation time, or None."""
        return (
            self.db.query(Assessment)
            .filter(Assessment.athlete_id == athlete_id)
            .order_by(desc(Assessment.created_at))
            .first()
        )

    def list_assessments(self, athlete_id: str) -> List[Assessment]:
        return (
            self.db.query(Assessment)
            .filter(Assessment.athlete_id == athlete_id)
            .order_by(desc(Assessment.created_at))
            .all()
        )

    def list_training_plans(self, athlete_id: str, active_only: bool = False) -> List[TrainingPlan]:
        query = self.db.query(TrainingPlan).filter(TrainingPlan.athlete_id == athlete_id)
        if active_only:
            query = query.filter(TrainingPlan.is_active.is_(True))
        return query.order_by(desc(TrainingPlan.created_at)).all()

    # --------------------------------------------------------------- writes

    def insert_assessment(
        self,
        video_id: str,
        athlete_id: str,
        result: AnalysisResult,
        payload: Dict[str, Any],
    ) -> Assessment:
        """Insert one assessment row; payload is kept verbatim as analysis_data."""
        assessment = Assessment(
            video_id=video_id,
            athlete_id=athlete_id,
            overall_score=result.overall_score,
            technique_score=result.technique_score,
            speed_score=result.speed_score,
            power_score=result.power_score,
            endurance_score=result.endurance_score,
            flexibility_score=result.flexibility_score,
            strengths=result.strengths,
            weaknesses=result.weaknesses,
            recommendations=result.recommendations,
            detailed_feedback=result.detailed_feedback,
            ai_confidence=result.ai_confidence,
            analysis_data=payload,
        )
        self._commit_new(assessment, "Failed to save assessment")
        return assessment

    def mark_video_analyzed(self, video_id: str) -> None:
        try:
            self.db.query(Video).filter(Video.id == video_id).update(
                {Video.is_analyzed: True}, synchronize_session="fetch"
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error marking video {video_id} analyzed: {e}")
            raise PersistenceError("Failed to mark video as analyzed") from e

    def insert_training_plan(
        self,
        athlete_id: str,
        coach_id: Optional[str],
        sport_type: str,
        plan: TrainingPlanResult,
        payload: Dict[str, Any],
    ) -> TrainingPlan:
        """Insert one active plan row. Existing plans of the athlete are left untouched."""
        training_plan = TrainingPlan(
            athlete_id=athlete_id,
            coach_id=coach_id,
            title=plan.title,
            description=plan.description,
            sport_type=sport_type,
            duration_weeks=plan.duration_weeks,
            difficulty_level=plan.difficulty_level,
            goals=plan.goals,
            plan_data=payload,
            is_active=True,
        )
        self._commit_new(training_plan, "Failed to save training plan")
        return training_plan

    def _commit_new(self, row, failure_message: str) -> None:
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error saving {type(row).__name__}: {e}")
            raise PersistenceError(failure_message) from e


def get_athlete_store(db: Session = Depends(get_db)) -> AthleteStore:
    """FastAPI dependency: a store bound to the request's session."""
    return AthleteStore(db)
