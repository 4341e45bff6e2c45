# sentiment_proxy/api.py
from typing import Dict, Optional

from flask import Blueprint, Response, abort, current_app, g, jsonify, request

from .errors import InternalError, ProxyError
from .validators import parse_json_body

api_blueprint = Blueprint('api', __name__)

VERSION = '1.1.0'
HANDLED_METHODS = ['GET', 'POST', 'OPTIONS']

STATUS_PAYLOAD = {
    'status': 'running',
    'message': 'Jaccard Sentiment Analysis Worker is active.',
    'usage': 'Send a POST request with { "text": "your text" } to analyze sentiment.',
    'version': VERSION
}


def cors_headers(origin: Optional[str]) -> Dict[str, str]:
    """Any origin is echoed back; this is not a security boundary."""
    return {
        'Access-Control-Allow-Origin': origin or '*',
        'Access-Control-Allow-Methods': ', '.join(HANDLED_METHODS),
        'Access-Control-Allow-Headers': 'Content-Type, Authorization',
        'Access-Control-Max-Age': '86400',
    }


@api_blueprint.before_app_request
def compute_cors_headers():
    g.cors_headers = cors_headers(request.headers.get('Origin'))


@api_blueprint.after_app_request
def apply_cors_headers(response):
    headers = g.get('cors_headers') or cors_headers(request.headers.get('Origin'))
    for key, value in headers.items():
        response.headers[key] = value
    return response


def error_response(error: ProxyError):
    return jsonify(error.to_dict()), error.status


@api_blueprint.route('/', defaults={'path': ''}, methods=HANDLED_METHODS, provide_automatic_options=False)
@api_blueprint.route('/<path:path>', methods=HANDLED_METHODS, provide_automatic_options=False)
def handle(path):
    if request.method == 'OPTIONS':
        return Response(status=204)
    if request.method == 'HEAD':
        abort(405)
    if request.method == 'GET':
        return jsonify(STATUS_PAYLOAD), 200
    return analyze()


def analyze():
    """Run the POST pipeline; every outcome becomes a JSON response."""
    service = current_app.extensions['analysis_service']
    try:
        body = parse_json_body(request.get_data())
        result, error = service.analyze(body)
    except Exception as e:
        current_app.logger.exception("An unexpected error occurred during analysis.")
        result, error = None, InternalError.from_exception(e)

    if error:
        return error_response(error)
    return jsonify(result), 200
