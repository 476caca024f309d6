"""Shared test fixtures."""

import base64
import json
import os
from types import SimpleNamespace

# The function module validates the credential at import time
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")

import pytest

from shared_utils.exceptions import GatewayError
from shared_utils.request_utils import CallerIdentity
from video_analysis.app import VideoAnalysisHandlers
from video_analysis.config import ServiceConfig

# ftyp box of an MP4 container
SAMPLE_MP4_BYTES = b"\x00\x00\x00\x18ftypmp42\x00\x00\x00\x00mp42isom" + b"\x00" * 32


class FakeGateway:
    """Stands in for GeminiGateway and counts how often the model would be called."""

    def __init__(self, response_text="", error=None):
        self.response_text = response_text
        self.error = error
        self.calls = []
        self.response_schemas = []

    @property
    def call_count(self):
        return len(self.calls)

    async def generate_text(self, parts, response_schema=None):
        self.calls.append(list(parts))
        self.response_schemas.append(response_schema)
        if self.error is not None:
            raise self.error
        return self.response_text


class FakeModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


class FakeAsyncClient:
    def __init__(self, models):
        self.models = models
        self.closed = False

    async def aclose(self):
        self.closed = True


class FakeGenaiClient:
    """Minimal google.genai.Client double exposing the async surface the gateway uses."""

    def __init__(self, text=None, error=None):
        self.aio = FakeAsyncClient(FakeModels(text=text, error=error))
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture
def service_config() -> ServiceConfig:
    return ServiceConfig(gemini_api_key="test-gemini-key", max_video_bytes=1024)


@pytest.fixture
def analysis_payload() -> dict:
    return {
        "hook": "Creator drops a phone into a pool in the first second.",
        "retention": "Countdown overlay builds a curiosity gap about whether the phone survives.",
        "payoff": "The phone still works and the creator reveals the waterproof case.",
        "sentiment": "Playful suspense that resolves into relief.",
        "tones": [
            {"label": "Excitement", "score": 0.9},
            {"label": "Curiosity", "score": 0.8},
            {"label": "Humor", "score": 0.4},
        ],
        "score": 8,
        "improvement_tips": [
            "Show the product name on screen earlier.",
            "Cut the final two seconds of dead air.",
        ],
    }


@pytest.fixture
def analysis_json(analysis_payload) -> str:
    return json.dumps(analysis_payload)


@pytest.fixture
def remix_variables_payload() -> dict:
    return {
        "niche": "Home fitness",
        "product": "Adjustable dumbbells",
        "audience": "Busy parents",
        "tone": "Funny",
    }


@pytest.fixture
def sample_video_b64() -> str:
    return base64.b64encode(SAMPLE_MP4_BYTES).decode("ascii")


@pytest.fixture
def fake_gateway(analysis_json) -> FakeGateway:
    return FakeGateway(response_text=analysis_json)


@pytest.fixture
def failing_gateway() -> FakeGateway:
    return FakeGateway(error=GatewayError("Gemini API error 429"))


@pytest.fixture
def handlers(service_config, fake_gateway) -> VideoAnalysisHandlers:
    return VideoAnalysisHandlers(config=service_config, gateway=fake_gateway)


@pytest.fixture
def caller() -> CallerIdentity:
    return CallerIdentity(uid="user-123", email="creator@example.com")


def make_event(body=None, uid="user-123", method="POST", origin=None, http_api=False):
    """Builds an API Gateway proxy event."""
    event = {
        "headers": {"origin": origin} if origin else {},
        "body": json.dumps(body) if isinstance(body, (dict, list)) else body,
        "isBase64Encoded": False,
        "requestContext": {},
    }
    if http_api:
        event["requestContext"]["http"] = {"method": method}
        if uid:
            event["requestContext"]["authorizer"] = {"jwt": {"claims": {"sub": uid}}}
    else:
        event["httpMethod"] = method
        if uid:
            event["requestContext"]["authorizer"] = {"claims": {"sub": uid, "email": "creator@example.com"}}
    return event
