"""Input validation for the analysis endpoint."""
import json
from typing import Any, Dict, Optional, Tuple

from .errors import Result, ValidationError, fail, ok
from .models import AnalysisRequest

# Validation constants
MAX_TEXT_LENGTH = 100
EMPTY_TEXT_MESSAGE = '텍스트를 입력해주세요'
NOT_A_STRING_MESSAGE = 'text 값은 문자열이어야 합니다.'


def too_long_message(max_length: int) -> str:
    return f'문장이 너무 깁니다. {max_length}글자 이내로 입력해주세요.'


def utf16_length(value: str) -> int:
    """Length in UTF-16 code units, so characters outside the BMP count twice."""
    return len(value.encode('utf-16-le', 'surrogatepass')) // 2


def parse_json_body(raw: Any) -> Dict[str, Any]:
    """Decode a request body, treating anything that is not a JSON object as ``{}``."""
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode('utf-8')
        except UnicodeDecodeError:
            return {}
    if not isinstance(raw, str) or not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def validate_text(value: Any, max_length: int = MAX_TEXT_LENGTH) -> Tuple[bool, Optional[str]]:
    """Validate the text to analyze."""
    if value is None or value == '':
        return False, EMPTY_TEXT_MESSAGE
    if not isinstance(value, str):
        return False, NOT_A_STRING_MESSAGE
    if not value.strip():
        return False, EMPTY_TEXT_MESSAGE
    if utf16_length(value) > max_length:
        return False, too_long_message(max_length)
    return True, None


def validate_analysis_request(data: Dict[str, Any], max_length: int = MAX_TEXT_LENGTH) -> Result[AnalysisRequest]:
    """Validate a decoded body and build the immutable request from it."""
    text = data.get('text')
    is_valid, error = validate_text(text, max_length)
    if not is_valid:
        return fail(ValidationError(message=error))

    detail_analysis = bool(data.get('detailAnalysis') or False)
    return ok(AnalysisRequest(text=text, detail_analysis=detail_analysis))
