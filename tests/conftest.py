"""
Pytest fixtures for the sentiment proxy tests.
"""
import json
import os
from unittest.mock import MagicMock

import pytest

# Set test environment variables before importing app
os.environ.pop('GEMINI_API_KEY', None)
os.environ.pop('STRICT_OUTPUT_SCHEMA', None)

from sentiment_proxy import create_app

TEST_API_KEY = 'test-gemini-key'


@pytest.fixture
def app():
    """Create a test application instance with an API key configured."""
    flask_app = create_app('testing', overrides={'GEMINI_API_KEY': TEST_API_KEY})
    yield flask_app


@pytest.fixture
def client(app):
    """Create a test client for the application."""
    return app.test_client()


@pytest.fixture
def client_without_key():
    """Test client for an application that has no API key configured."""
    return create_app('testing').test_client()


@pytest.fixture
def strict_client():
    """Test client with model output checked against the analysis schema."""
    flask_app = create_app('testing', overrides={
        'GEMINI_API_KEY': TEST_API_KEY,
        'STRICT_OUTPUT_SCHEMA': True
    })
    return flask_app.test_client()


@pytest.fixture
def sample_analysis():
    """A detailed analysis as the model is asked to produce it."""
    return {
        "morphemes": [
            {"word": "시험", "pos": "명사", "sentiment": "neutral", "specific_emotion": "중립"},
            {"word": "합격하다", "pos": "동사", "sentiment": "positive", "specific_emotion": "기쁨"},
            {"word": "행복하다", "pos": "형용사", "sentiment": "positive", "specific_emotion": "기쁨"}
        ],
        "overall_sentiment": "positive",
        "sentiment_scores": {"positive": 2, "neutral": 1, "negative": 0},
        "specific_emotion_scores": {"기쁨": 2, "슬픔": 0, "분노": 0, "놀람": 0, "두려움": 0, "혐오": 0, "중립": 1}
    }


def gemini_envelope(text):
    """Wrap generated text in a generateContent response envelope."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def upstream_response(status_code=200, payload=None, text=None):
    """Build a stand-in for a ``requests.Response``."""
    response = MagicMock()
    response.status_code = status_code
    if payload is not None:
        response.json.return_value = payload
        response.text = json.dumps(payload, ensure_ascii=False)
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text or ''
    return response


@pytest.fixture
def envelope():
    return gemini_envelope


@pytest.fixture
def make_upstream_response():
    return upstream_response
