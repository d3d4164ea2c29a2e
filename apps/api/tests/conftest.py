"""
Pytest configuration and fixtures

Tests run against an in-memory SQLite database whose schema is created and
dropped around every test. The app shares the test's session through a
get_db override, and Gemini is replaced by a MagicMock client.
"""
import os
import sys

# Required settings must exist before anything imports core.config
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DATABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("LOG_FORMAT", "text")

# Add the parent directory to the path so we can import from services
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import json
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from core.database import Base, SessionLocal, engine, get_db
from main import app
from models import Athlete, Profile, Video
from services.gemini_client import GeminiInvoker, get_model_invoker


class FakeGemini:
    """MagicMock-backed Gemini client whose reply the test controls."""

    def __init__(self):
        self.client = MagicMock()
        self.reply("")

    def reply(self, text: str):
        response = MagicMock()
        candidate = MagicMock()
        part = MagicMock()
        part.text = text
        part.thought = None
        candidate.content.parts = [part]
        response.candidates = [candidate]
        response.usage_metadata.prompt_token_count = 100
        response.usage_metadata.candidates_token_count = 50
        self.client.models.generate_content.side_effect = None
        self.client.models.generate_content.return_value = response

    def reply_json(self, payload: dict, prose: str = "Here is the result:"):
        self.reply(f"{prose}\n```json\n{json.dumps(payload, indent=2)}\n```\nGood luck!")

    def fail(self, exc: Exception):
        self.client.models.generate_content.side_effect = exc

    @property
    def calls(self):
        return self.client.models.generate_content.call_args_list

    @property
    def last_prompt(self) -> str:
        return self.calls[-1].kwargs["contents"][0].parts[0].text

    @property
    def last_config(self):
        return self.calls[-1].kwargs["config"]


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_gemini():
    return FakeGemini()


@pytest.fixture
def invoker(fake_gemini):
    return GeminiInvoker(fake_gemini.client, "gemini-test")


@pytest.fixture
def client(db_session, invoker):
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_model_invoker] = lambda: invoker
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def test_athlete(db_session):
    """Athlete "a1" with a profile and no assessments."""
    profile = Profile(id="p1", user_id="u1", full_name="Asha Verma", email="asha@example.com")
    athlete = Athlete(
        id="a1",
        profile_id=profile.id,
        primary_sport="cricket",
        preferred_position="Fast bowler",
        experience_years=3,
        height_cm=172.0,
        weight_kg=61.5,
    )
    db_session.add_all([profile, athlete])
    db_session.commit()
    return athlete


@pytest.fixture
def test_video(db_session, test_athlete):
    """Unanalyzed practice video "v1" of athlete "a1"."""
    video = Video(
        id="v1",
        athlete_id=test_athlete.id,
        title="Net session",
        video_url="https://storage.example.com/videos/v1.mp4",
        sport_type="cricket",
        video_type="practice",
        upload_status="completed",
    )
    db_session.add(video)
    db_session.commit()
    return video
