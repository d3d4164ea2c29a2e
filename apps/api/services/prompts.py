"""Prompt builders for video analysis and training plan generation.

Both builders are pure: the same records and arguments always render the
same text. Each prompt ends with the exact JSON shape the result extractor
validates against.
"""
from typing import Any, List, Optional


ANALYSIS_OUTPUT_FORMAT = """Please provide a comprehensive analysis in the following JSON format:
{
  "overall_score": number (0-100),
  "technique_score": number (0-100),
  "speed_score": number (0-100),
  "power_score": number (0-100),
  "endurance_score": number (0-100),
  "flexibility_score": number (0-100),
  "strengths": ["strength1", "strength2", "strength3"],
  "weaknesses": ["weakness1", "weakness2", "weakness3"],
  "recommendations": ["recommendation1", "recommendation2", "recommendation3"],
  "detailed_feedback": "Comprehensive feedback paragraph about the athlete's performance, technique, and areas for improvement",
  "ai_confidence": number (0-100)
}

Focus on:
1. Technical execution and form
2. Athletic performance metrics
3. Areas for improvement
4. Specific actionable recommendations
5. Injury prevention insights

Provide realistic scores based on the sport and video type. Be constructive and encouraging while highlighting areas for development."""


PLAN_OUTPUT_FORMAT = """Please generate a detailed training plan in the following JSON format:

{{
  "title": "Training plan title",
  "description": "Brief description of the plan's objectives",
  "duration_weeks": {duration},
  "difficulty_level": number (1-5),
  "goals": ["goal1", "goal2", "goal3"],
  "weeks": [
    {{
      "week_number": 1,
      "focus": "Week focus theme",
      "days": [
        {{
          "day": 1,
          "type": "training_type (strength, cardio, skill, recovery, etc.)",
          "exercises": [
            {{
              "name": "Exercise name",
              "sets": number,
              "reps": "reps or duration",
              "rest": "rest time",
              "notes": "technique notes or modifications"
            }}
          ],
          "duration_minutes": number,
          "intensity": "low" | "medium" | "high"
        }}
      ]
    }}
  ],
  "nutrition_tips": ["tip1", "tip2", "tip3"],
  "recovery_guidelines": ["guideline1", "guideline2", "guideline3"],
  "progression_notes": "How to progress through the weeks",
  "safety_considerations": ["safety1", "safety2", "safety3"]
}}

REQUIREMENTS:
1. Create a progressive plan that builds intensity over {duration} weeks
2. Include sport-specific exercises and drills
3. Address the athlete's weaknesses identified in assessments
4. Include proper warm-up, main exercises, and cool-down for each session
5. Provide 4-6 training days per week with rest/recovery days
6. Include injury prevention exercises
7. Scale difficulty appropriately for the athlete's experience level
8. Include both physical and technical development
9. Provide clear exercise instructions and safety notes
10. Consider equipment limitations (basic equipment availability)

Make it practical for implementation in various training environments, including limited equipment scenarios common in rural India."""


def _fmt_number(value: Any) -> str:
    """Render 180.0 as "180" and 72.5 as "72.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _or_unspecified(value: Any) -> str:
    return _fmt_number(value) if value else "Not specified"


def _athlete_name(athlete: Any) -> Optional[str]:
    profile = getattr(athlete, "profile", None)
    return getattr(profile, "full_name", None) if profile is not None else None


def build_analysis_prompt(video: Any, athlete: Any) -> str:
    """Render the video analysis prompt from the video and athlete records."""
    lines = [
        "Analyze this sports training video for an athlete with the following details:",
        f"- Sport: {video.sport_type}",
        f"- Video Type: {video.video_type}",
        f"- Athlete Experience: {athlete.experience_years or 0} years",
        f"- Height: {_or_unspecified(athlete.height_cm)} cm",
        f"- Weight: {_or_unspecified(athlete.weight_kg)} kg",
        "",
        ANALYSIS_OUTPUT_FORMAT,
    ]
    return "\n".join(lines) + "\n"


def build_plan_prompt(
    athlete: Any,
    latest_assessment: Any = None,
    goals: Optional[List[str]] = None,
    focus_areas: Optional[List[str]] = None,
    duration: int = 8,
) -> str:
    """Render the training plan prompt.

    The assessment section is omitted when the athlete has never been
    assessed; goals and focus areas only appear when supplied.
    """
    lines = [
        f"Create a comprehensive {duration}-week training plan for an athlete with the following profile:",
        "",
        "ATHLETE PROFILE:",
    ]
    name = _athlete_name(athlete)
    if name:
        lines.append(f"- Name: {name}")
    lines.append(f"- Sport: {athlete.primary_sport}")
    lines.append(f"- Experience: {athlete.experience_years or 0} years")
    lines.append(f"- Height: {_or_unspecified(athlete.height_cm)} cm")
    lines.append(f"- Weight: {_or_unspecified(athlete.weight_kg)} kg")
    if athlete.preferred_position:
        lines.append(f"- Position: {athlete.preferred_position}")

    if latest_assessment is not None:
        a = latest_assessment
        lines += [
            "",
            "LATEST ASSESSMENT SCORES:",
            f"- Overall: {_fmt_number(a.overall_score)}/100",
            f"- Technique: {_fmt_number(a.technique_score)}/100",
            f"- Speed: {_fmt_number(a.speed_score)}/100",
            f"- Power: {_fmt_number(a.power_score)}/100",
            f"- Endurance: {_fmt_number(a.endurance_score)}/100",
            f"- Flexibility: {_fmt_number(a.flexibility_score)}/100",
            "",
            f"STRENGTHS: {', '.join(a.strengths or [])}",
            f"WEAKNESSES: {', '.join(a.weaknesses or [])}",
        ]

    if goals or focus_areas:
        lines.append("")
    if goals:
        lines.append(f"ATHLETE GOALS: {', '.join(goals)}")
    if focus_areas:
        lines.append(f"FOCUS AREAS: {', '.join(focus_areas)}")

    lines += ["", PLAN_OUTPUT_FORMAT.format(duration=duration)]
    return "\n".join(lines) + "\n"
