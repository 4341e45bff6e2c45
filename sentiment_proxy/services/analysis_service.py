import json
import logging
import re
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError as SchemaValidationError

from ..config import ProxySettings
from ..errors import (
    ConfigurationError,
    InternalError,
    ResponseParseError,
    Result,
    UpstreamError,
    fail,
    ok,
)
from ..models import AnalysisRequest, AnalysisResult
from ..prompts import build_generation_request, build_prompt
from ..validators import validate_analysis_request

logger = logging.getLogger(__name__)

# Markdown fence markers the model tends to wrap its JSON in
_JSON_FENCE_RE = re.compile(r"```json\n?")
_FENCE_RE = re.compile(r"```\n?")


def strip_code_fences(text: str) -> str:
    """Remove every ```json and ``` marker (plus one trailing newline each), then trim.

    Markers are removed wherever they occur, not only at the ends. This is not a
    Markdown parser.
    """
    text = _JSON_FENCE_RE.sub('', text)
    text = _FENCE_RE.sub('', text)
    return text.strip()


def extract_generated_text(payload: Any) -> str:
    """Return ``candidates[0].content.parts[0].text`` or ``''`` if any level is missing."""
    try:
        text = payload['candidates'][0]['content']['parts'][0]['text']
    except (KeyError, IndexError, TypeError):
        return ''
    return text if isinstance(text, str) else ''


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def parse_analysis_text(text: str, strict: bool = False) -> Result[Any]:
    """Parse the cleaned model output. The parsed object is returned unmodified."""
    try:
        parsed = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        logger.error(f"JSON Parse Error: {e}")
        return fail(ResponseParseError(message='AI 응답 데이터 분석 실패', raw=text))

    if strict:
        try:
            result = AnalysisResult.model_validate(parsed)
        except SchemaValidationError as e:
            logger.error(f"Model output does not match the analysis schema: {e.error_count()} error(s)")
            return fail(ResponseParseError(message='AI 응답 데이터 분석 실패', raw=text))
        if not result.scores_match_morphemes():
            logger.warning("sentiment_scores do not add up to the number of morphemes")

    return ok(parsed)


class GeminiClient:
    """Thin client for the Gemini ``generateContent`` REST endpoint."""

    def __init__(self, settings: ProxySettings, session: Optional[requests.Session] = None):
        self.settings = settings
        self._http = session or requests

    def generate(self, prompt: str, api_key: str) -> Result[Dict[str, Any]]:
        body = build_generation_request(
            prompt,
            temperature=self.settings.temperature,
            max_output_tokens=self.settings.max_output_tokens,
        )
        try:
            response = self._http.post(
                self.settings.endpoint,
                params={'key': api_key},
                headers={'Content-Type': 'application/json'},
                json=body,
                timeout=self.settings.timeout
            )
        except requests.exceptions.Timeout as e:
            logger.warning(f"Timeout while calling Gemini ({self.settings.model})")
            return fail(InternalError.from_exception(e))
        except requests.exceptions.ConnectionError as e:
            logger.warning("Could not connect to the Gemini API")
            return fail(InternalError.from_exception(e))
        except requests.exceptions.RequestException as e:
            logger.warning(f"Gemini request failed: {e}")
            return fail(InternalError.from_exception(e))

        if not 200 <= response.status_code < 300:
            logger.warning(f"Gemini API returned HTTP {response.status_code}")
            return fail(UpstreamError(
                message='Gemini API 호출 실패',
                status=response.status_code,
                details=response.text
            ))

        return ok(response.json())


class AnalysisService:
    """Runs one analysis request through validation, the upstream call and parsing."""

    def __init__(self, settings: ProxySettings, client: Optional[GeminiClient] = None):
        self.settings = settings
        self.client = client or GeminiClient(settings)

    def require_api_key(self) -> Result[str]:
        if not self.settings.api_key:
            logger.error("GEMINI_API_KEY is not configured")
            return fail(ConfigurationError(message='Worker의 GEMINI_API_KEY 환경 변수가 설정되지 않았습니다.'))
        return ok(self.settings.api_key)

    def analyze(self, body: Dict[str, Any]) -> Result[Any]:
        analysis_request, error = validate_analysis_request(body, self.settings.max_text_length)
        if error:
            return fail(error)

        api_key, error = self.require_api_key()
        if error:
            return fail(error)

        return self.run(analysis_request, api_key)

    def run(self, analysis_request: AnalysisRequest, api_key: str) -> Result[Any]:
        prompt = build_prompt(analysis_request.text, analysis_request.detail_analysis)
        payload, error = self.client.generate(prompt, api_key)
        if error:
            return fail(error)

        response_text = strip_code_fences(extract_generated_text(payload))
        return parse_analysis_text(response_text, strict=self.settings.strict_output_schema)
