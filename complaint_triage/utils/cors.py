"""
Permissive CORS for the analysis API (lets the demo page run from another origin)
"""
from flask import Flask, request, make_response

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET, POST, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type'
}


def add_cors_headers(response):
    """Attach CORS headers to any response"""
    for header, value in CORS_HEADERS.items():
        response.headers[header] = value
    return response


def answer_preflight():
    """Short-circuit OPTIONS requests with an empty 200"""
    if request.method == 'OPTIONS':
        return make_response('', 200)
    return None


def enable_cors(app: Flask) -> None:
    """Register CORS hooks on the app"""
    app.before_request(answer_preflight)
    app.after_request(add_cors_headers)
