from flask import Blueprint, request, jsonify, current_app
import logging

from complaint_triage.errors import TriageError, ProviderError

analysis_bp = Blueprint('analysis', __name__)
logger = logging.getLogger(__name__)


def get_orchestrator():
    """Orchestrator built at startup by create_app"""
    return current_app.config['ORCHESTRATOR']


@analysis_bp.errorhandler(TriageError)
def handle_triage_error(error: TriageError):
    """Render analysis errors as JSON with their status code"""
    return jsonify(error.to_dict()), error.status_code


@analysis_bp.route('/health')
def health():
    """Liveness check; reports whether the provider key is configured"""
    return jsonify({
        'ok': True,
        'service': 'claude-complaint-analysis',
        'hasKey': get_orchestrator().has_api_key
    })


@analysis_bp.route('/analyze-complaints', methods=['POST'])
def analyze_complaints():
    """Triage a batch of complaints"""
    body = request.get_json(silent=True)
    complaints = body.get('complaints') if isinstance(body, dict) else None

    try:
        result = get_orchestrator().analyze_batch(complaints)
    except TriageError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected analysis failure: {e}")
        raise ProviderError(str(e))

    return jsonify(result)
