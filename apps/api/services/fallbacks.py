"""Deterministic stand-in results for when the model output is unusable.

Both builders use only local context and produce dicts that validate against
AnalysisResult / TrainingPlanResult, so persistence never has to tell a
fallback from a real extraction. The lower ai_confidence is the only signal.
"""
from typing import Any, Dict, List, Optional

FALLBACK_AI_CONFIDENCE = 60

PLAN_PHASES = (
    "Foundation Building",
    "Skill Development",
    "Performance Enhancement",
    "Competition Preparation",
)

DEFAULT_PLAN_GOALS = ["Improve overall fitness", "Enhance technique", "Build strength and endurance"]


def fallback_analysis() -> Dict[str, Any]:
    return {
        "overall_score": 75,
        "technique_score": 70,
        "speed_score": 80,
        "power_score": 75,
        "endurance_score": 70,
        "flexibility_score": 65,
        "strengths": ["Good athletic foundation", "Consistent effort", "Positive attitude"],
        "weaknesses": ["Technical refinement needed", "Timing could be improved", "Conditioning focus required"],
        "recommendations": ["Focus on basic technique drills", "Increase training frequency", "Work with a qualified coach"],
        "detailed_feedback": (
            "Analysis completed with basic assessment. For more detailed feedback, please ensure video "
            "quality is optimal and captures the full movement patterns."
        ),
        "ai_confidence": FALLBACK_AI_CONFIDENCE,
    }


def phase_for_week(week_index: int) -> str:
    """Two-week blocks in order; every week after the sixth is competition preparation."""
    return PLAN_PHASES[min(week_index // 2, len(PLAN_PHASES) - 1)]


def fallback_difficulty(experience_years: Optional[int]) -> int:
    return max(1, min((experience_years or 0) + 1, 5))


def _bodyweight_session() -> Dict[str, Any]:
    return {
        "day": 1,
        "type": "strength",
        "exercises": [
            {"name": "Bodyweight Squats", "sets": 3, "reps": "12-15", "rest": "60s", "notes": "Focus on proper form"},
            {"name": "Push-ups", "sets": 3, "reps": "8-12", "rest": "60s", "notes": "Modify as needed"},
            {"name": "Plank", "sets": 3, "reps": "30-45s", "rest": "60s", "notes": "Maintain straight line"},
        ],
        "duration_minutes": 45,
        "intensity": "medium",
    }


def fallback_training_plan(
    sport: str,
    experience_years: Optional[int],
    duration_weeks: int,
    goals: Optional[List[str]] = None,
) -> Dict[str, Any]:
    return {
        "title": f"{duration_weeks}-Week {sport} Development Plan",
        "description": "A comprehensive training program designed to improve overall athletic performance",
        "duration_weeks": duration_weeks,
        "difficulty_level": fallback_difficulty(experience_years),
        "goals": list(goals) if goals else list(DEFAULT_PLAN_GOALS),
        "weeks": [
            {
                "week_number": i + 1,
                "focus": phase_for_week(i),
                "days": [_bodyweight_session()],
            }
            for i in range(duration_weeks)
        ],
        "nutrition_tips": ["Stay hydrated", "Eat balanced meals", "Include protein for recovery"],
        "recovery_guidelines": ["Get 7-9 hours of sleep", "Include rest days", "Listen to your body"],
        "progression_notes": "Gradually increase intensity and complexity over the weeks",
        "safety_considerations": ["Warm up properly", "Use correct form", "Stop if you feel pain"],
    }
