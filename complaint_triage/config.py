"""
Service configuration loaded from the environment (.env supported).
"""
import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_API_URL = 'https://api.anthropic.com/v1/messages'
DEFAULT_MODEL = 'claude-3-opus-20240229'
DEFAULT_MAX_TOKENS = 8000
DEFAULT_TEMPERATURE = 0.2
DEFAULT_TIMEOUT = 60.0
DEFAULT_PORT = 3001


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {name}={value!r}, using default {default}")
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Invalid number for {name}={value!r}, using default {default}")
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() == 'true'


@dataclass(frozen=True)
class Settings:
    """
    Immutable runtime settings.

    Built once at startup and handed to the orchestrator, so request
    handling never reads the environment directly.
    """
    api_key: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    timeout: float = DEFAULT_TIMEOUT
    host: str = '0.0.0.0'
    port: int = DEFAULT_PORT
    serve_static: bool = False
    static_dir: str = str(PROJECT_ROOT)
    log_level: str = 'INFO'

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, dotenv: bool = True) -> 'Settings':
        """
        Read settings from environment variables.

        Args:
            dotenv: Load a .env file first (existing variables win).

        Returns:
            Settings instance.
        """
        if dotenv:
            load_dotenv()

        settings = cls(
            api_key=os.getenv('CLAUDE_API_KEY') or None,
            api_url=os.getenv('CLAUDE_API_URL', DEFAULT_API_URL),
            model=os.getenv('CLAUDE_MODEL', DEFAULT_MODEL),
            max_tokens=_env_int('CLAUDE_MAX_TOKENS', DEFAULT_MAX_TOKENS),
            temperature=_env_float('CLAUDE_TEMPERATURE', DEFAULT_TEMPERATURE),
            timeout=_env_float('CLAUDE_TIMEOUT', DEFAULT_TIMEOUT),
            host=os.getenv('HOST', '0.0.0.0'),
            port=_env_int('PORT', DEFAULT_PORT),
            serve_static=_env_bool('SERVE_STATIC'),
            static_dir=str(Path(os.getenv('STATIC_DIR') or PROJECT_ROOT).resolve()),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        )

        if not settings.has_api_key:
            logger.warning(
                "CLAUDE_API_KEY is not set. /analyze-complaints will return 500 until configured."
            )

        return settings
