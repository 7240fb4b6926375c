"""
Completion client for complaint triage using the Anthropic Messages API.
"""
import logging
import time
from typing import Optional

import requests

from complaint_triage.config import Settings
from complaint_triage.errors import ConfigError, ProviderError

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = '2023-06-01'
CONNECT_TIMEOUT = 10.0  # seconds to establish the connection


def _extract_text(data: dict) -> str:
    """Return content[0].text from a Messages API response, or empty string."""
    if not isinstance(data, dict):
        return ''
    content = data.get('content')
    if not isinstance(content, list) or not content:
        return ''
    first = content[0]
    if not isinstance(first, dict):
        return ''
    text = first.get('text')
    return text if isinstance(text, str) else ''


class ClaudeClient:
    """
    Thin wrapper around a single Messages API call.

    One request per call; failures are raised immediately, never retried.

    The timeout is passed to requests as a (connect, read) pair. The read
    value bounds each wait for data from the socket, not the whole call:
    a provider that keeps trickling bytes can hold the request longer than
    settings.timeout.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        # module-level requests.post by default; no session shared across threads
        self.http = session or requests

    def _headers(self) -> dict:
        if not self.settings.has_api_key:
            raise ConfigError()
        return {
            'x-api-key': self.settings.api_key,
            'anthropic-version': ANTHROPIC_VERSION,
            'content-type': 'application/json'
        }

    def _timeout(self) -> tuple:
        return (min(CONNECT_TIMEOUT, self.settings.timeout), self.settings.timeout)

    def complete(self, payload: dict) -> str:
        """
        Send a request body and return the model's text.

        Args:
            payload: Request body built by the prompt builder.

        Returns:
            Raw text of the first content block (may be empty).

        Raises:
            ConfigError: If no API key is configured.
            ProviderError: On network error, timeout, or non-2xx response.
        """
        headers = self._headers()
        start_time = time.time()

        try:
            response = self.http.post(
                self.settings.api_url,
                json=payload,
                headers=headers,
                timeout=self._timeout()
            )
            response.raise_for_status()
        except requests.exceptions.Timeout:
            logger.error(f"Completion request timed out after {self.settings.timeout}s")
            raise ProviderError(f"timeout of {self.settings.timeout:g}s exceeded")
        except requests.exceptions.HTTPError as e:
            body = e.response.text if e.response is not None else ''
            logger.error(f"Completion provider returned an error: {e} {body[:1000]}")
            raise ProviderError(str(e))
        except requests.exceptions.RequestException as e:
            logger.error(f"Completion request failed: {type(e).__name__} - {e}")
            raise ProviderError(str(e))

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Completion provider returned non-JSON body: {e}")
            raise ProviderError(f"Invalid response body from provider: {e}")

        text = _extract_text(data)
        duration = time.time() - start_time
        logger.info(
            f"Completion received: model={payload.get('model')}, "
            f"chars={len(text)}, duration={duration:.2f}s"
        )
        return text
