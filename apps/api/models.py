from sqlalchemy import Column, Integer, Boolean, CheckConstraint, Float, DateTime, ForeignKey, JSON, Text, Index
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from core.database import Base
import uuid
from datetime import datetime, timezone

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")

SPORT_TYPES = (
    "cricket", "football", "basketball", "athletics", "swimming",
    "badminton", "tennis", "volleyball", "hockey", "other",
)


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Profile(Base):
    """Personal details of a platform user. Owned by the account flows."""
    __tablename__ = "profiles"

    id = Column(Text, primary_key=True, default=_new_id)
    user_id = Column(Text, nullable=False)
    full_name = Column(Text, nullable=False)
    email = Column(Text, nullable=True)
    role = Column(Text, default="athlete", nullable=False)  # 'athlete', 'coach', 'admin'
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)


class Coach(Base):
    __tablename__ = "coaches"

    id = Column(Text, primary_key=True, default=_new_id)
    profile_id = Column(Text, ForeignKey("profiles.id"), nullable=False)
    experience_years = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)

    profile = relationship("Profile")


class Athlete(Base):
    """
    Sporting profile of an athlete.

    Read-only input to the analysis and plan pipelines.
    """
    __tablename__ = "athletes"

    id = Column(Text, primary_key=True, default=_new_id)
    profile_id = Column(Text, ForeignKey("profiles.id"), nullable=False)
    coach_id = Column(Text, ForeignKey("coaches.id"), nullable=True)
    primary_sport = Column(Text, nullable=False)  # one of SPORT_TYPES
    preferred_position = Column(Text, nullable=True)
    experience_years = Column(Integer, nullable=True)
    height_cm = Column(Float, nullable=True)
    weight_kg = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)

    profile = relationship("Profile")


class Video(Base):
    """
    An uploaded training clip.

    The analysis pipeline only ever flips is_analyzed from False to True.
    """
    __tablename__ = "videos"

    id = Column(Text, primary_key=True, default=_new_id)
    athlete_id = Column(Text, ForeignKey("athletes.id"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    video_url = Column(Text, nullable=False)
    sport_type = Column(Text, nullable=False)
    video_type = Column(Text, nullable=False)  # 'practice', 'match', ...
    upload_status = Column(Text, nullable=True)
    is_analyzed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)


class Assessment(Base):
    """
    AI scorecard for one video of one athlete.

    analysis_data keeps the structured result exactly as extracted (or the
    fallback result), the score columns are copies of its fields.
    """
    __tablename__ = "assessments"

    id = Column(Text, primary_key=True, default=_new_id)
    video_id = Column(Text, ForeignKey("videos.id"), nullable=False, index=True)
    athlete_id = Column(Text, ForeignKey("athletes.id"), nullable=False)
    overall_score = Column(Float, nullable=False)
    technique_score = Column(Float, nullable=True)
    speed_score = Column(Float, nullable=True)
    power_score = Column(Float, nullable=True)
    endurance_score = Column(Float, nullable=True)
    flexibility_score = Column(Float, nullable=True)
    strengths = Column(JSONType, nullable=True)
    weaknesses = Column(JSONType, nullable=True)
    recommendations = Column(JSONType, nullable=True)
    detailed_feedback = Column(Text, nullable=True)
    ai_confidence = Column(Float, nullable=True)
    analysis_data = Column(JSONType, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("overall_score >= 0 AND overall_score <= 100", name="ck_assessment_overall_range"),
        Index("ix_assessments_athlete_created", "athlete_id", "created_at"),
    )


class TrainingPlan(Base):
    """Multi-week program generated for one athlete. Created active, never deactivated here."""
    __tablename__ = "training_plans"

    id = Column(Text, primary_key=True, default=_new_id)
    athlete_id = Column(Text, ForeignKey("athletes.id"), nullable=False)
    coach_id = Column(Text, ForeignKey("coaches.id"), nullable=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    sport_type = Column(Text, nullable=False)
    duration_weeks = Column(Integer, nullable=True)
    difficulty_level = Column(Integer, nullable=True)  # 1-5
    goals = Column(JSONType, nullable=True)
    plan_data = Column(JSONType, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    progress_percentage = Column(Float, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("difficulty_level >= 1 AND difficulty_level <= 5", name="ck_training_plan_difficulty_range"),
        Index("ix_training_plans_athlete_created", "athlete_id", "created_at"),
    )
