from flask import Flask
import logging
from typing import Optional

from complaint_triage.config import Settings
from complaint_triage.routes.analysis_routes import analysis_bp
from complaint_triage.services.analysis_orchestrator import AnalysisOrchestrator
from complaint_triage.utils.cors import enable_cors

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 1024 * 1024  # 1 MB JSON bodies


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )


def create_app(settings: Optional[Settings] = None, client=None) -> Flask:
    """
    Build the Flask app.

    Args:
        settings: Runtime settings. Read from the environment when omitted.
        client: Optional completion client (tests inject a fake here).

    Returns:
        Configured Flask application.
    """
    settings = settings or Settings.from_env()

    if settings.serve_static:
        # Static files served at / (e.g. the demo results page)
        app = Flask(__name__, static_folder=settings.static_dir, static_url_path='')
        logger.info(f"Static file serving enabled at / (dir: {settings.static_dir})")
    else:
        app = Flask(__name__, static_folder=None)

    app.config['MAX_CONTENT_LENGTH'] = MAX_BODY_BYTES
    app.json.sort_keys = False
    app.config['SETTINGS'] = settings
    app.config['ORCHESTRATOR'] = AnalysisOrchestrator(settings, client=client)

    enable_cors(app)
    app.register_blueprint(analysis_bp)

    return app


_settings = Settings.from_env()
configure_logging(_settings.log_level)
app = create_app(_settings)


if __name__ == '__main__':
    logger.info(f"Claude analysis service listening on :{_settings.port}")
    app.run(debug=False, host=_settings.host, port=_settings.port)
