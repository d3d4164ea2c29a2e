"""Video analysis pipeline.

validate -> load video + athlete -> prompt -> Gemini -> extract (or fallback)
-> insert assessment -> flag video analyzed.

The two writes are separate commits. If the flag update fails after the
assessment is saved, the assessment stays and the request still succeeds;
the stale flag is logged for repair.
"""
import logging
from dataclasses import dataclass

from core.exceptions import NotFoundError, PersistenceError
from models import Assessment
from schemas import AnalysisResult, AnalyzeVideoRequest
from services.athlete_store import AthleteStore
from services.fallbacks import fallback_analysis
from services.gemini_client import ANALYSIS_GENERATION, GeminiInvoker
from services.json_extraction import extract_or_fallback
from services.prompts import build_analysis_prompt

logger = logging.getLogger(__name__)


@dataclass
class AnalysisOutcome:
    assessment: Assessment
    used_fallback: bool
    video_flag_updated: bool = True


class VideoAnalysisPipeline:
    """Produces and stores one assessment per call. Repeated calls are not deduplicated."""

    def __init__(self, store: AthleteStore, invoker: GeminiInvoker):
        self.store = store
        self.invoker = invoker

    def run(self, request: AnalyzeVideoRequest) -> AnalysisOutcome:
        video_id, athlete_id = request.videoId, request.athleteId
        logger.info(f"Analyzing video {video_id} for athlete {athlete_id}")

        video = self.store.get_video(video_id)
        if video is None:
            logger.error(f"Video not found: {video_id}")
            raise NotFoundError("Video")

        athlete = self.store.get_athlete(athlete_id)
        if athlete is None:
            logger.error(f"Athlete not found: {athlete_id}")
            raise NotFoundError("Athlete")

        if video.athlete_id != athlete.id:
            logger.warning(f"Video {video_id} belongs to athlete {video.athlete_id}, analyzing for {athlete_id}")

        prompt = build_analysis_prompt(video, athlete)
        raw_text = self.invoker.generate(prompt, ANALYSIS_GENERATION)
        extraction = extract_or_fallback(raw_text, AnalysisResult, fallback_analysis)

        assessment = self.store.insert_assessment(
            video_id=video.id,
            athlete_id=athlete.id,
            result=extraction.result,
            payload=extraction.payload,
        )

        flag_updated = True
        try:
            self.store.mark_video_analyzed(video.id)
        except PersistenceError:
            flag_updated = False
            logger.error(
                f"Assessment {assessment.id} saved but video {video.id} is still marked unanalyzed"
            )

        logger.info(
            "Analysis completed",
            extra={
                "extra_fields": {
                    "assessment_id": assessment.id,
                    "video_id": video.id,
                    "used_fallback": extraction.used_fallback,
                    "fallback_reason": extraction.error,
                }
            }
        )
        return AnalysisOutcome(
            assessment=assessment,
            used_fallback=extraction.used_fallback,
            video_flag_updated=flag_updated,
        )
