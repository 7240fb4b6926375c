"""
Analysis orchestrator - coordinates the complaint triage workflow.
Validates the batch, prompts the completion provider once, then extracts
and normalizes the response.
"""
import logging
from typing import Any, List, Optional

from complaint_triage.config import Settings
from complaint_triage.errors import (
    ConfigError,
    InputError,
    ProviderError,
    TriageError,
    UnparseableOutputError
)
from complaint_triage.services.json_extractor import extract_json
from complaint_triage.services.llm_client import ClaudeClient
from complaint_triage.services.prompt_builder import build_prompt, limit_batch
from complaint_triage.services.result_normalizer import normalize_results

logger = logging.getLogger(__name__)

RAW_EXCERPT_CHARS = 1000


class AnalysisOrchestrator:
    """
    Runs one analysis per request.

    Holds only immutable settings and the completion client, so a single
    instance is shared safely across concurrent requests.
    """

    def __init__(self, settings: Settings, client: Optional[Any] = None):
        """
        Args:
            settings: Runtime settings (credential, model, limits).
            client: Object with complete(payload) -> str. Defaults to ClaudeClient.
        """
        self.settings = settings
        self.client = client or ClaudeClient(settings)

    @property
    def has_api_key(self) -> bool:
        return self.settings.has_api_key

    def _validate(self, complaints: Any) -> List[Any]:
        if not isinstance(complaints, list) or not complaints:
            logger.info("Rejected analysis request: complaints missing or empty")
            raise InputError()
        return complaints

    def analyze_batch(self, complaints: Any) -> dict:
        """
        Analyze a batch of complaints.

        Args:
            complaints: Submitted complaint records (list).

        Returns:
            Dictionary with keys:
            - count (int): Number of results
            - results (list): Normalized AnalysisResult dictionaries

        Raises:
            InputError: If complaints is missing, not a list, or empty.
            ConfigError: If the provider credential is not configured.
            ProviderError: If the completion call fails or times out.
            UnparseableOutputError: If no usable JSON array was returned.
        """
        complaints = self._validate(complaints)

        if not self.has_api_key:
            logger.error("Analysis requested but CLAUDE_API_KEY is not configured")
            raise ConfigError()

        limited = limit_batch(complaints)
        if len(limited) < len(complaints):
            logger.info(f"Batch truncated from {len(complaints)} to {len(limited)} complaints")

        payload = build_prompt(
            limited,
            model=self.settings.model,
            max_tokens=self.settings.max_tokens,
            temperature=self.settings.temperature
        )
        logger.debug(f"Prompt built for {len(limited)} complaints")

        try:
            raw_text = self.client.complete(payload)
        except TriageError:
            raise
        except Exception as e:
            logger.error(f"AI analysis error: {type(e).__name__} - {e}")
            raise ProviderError(str(e))

        if not isinstance(raw_text, str):
            raw_text = ''

        parsed = extract_json(raw_text)
        logger.debug(f"Extracted payload type: {type(parsed).__name__}")

        results = normalize_results(parsed, limited)
        if not results:
            logger.warning(f"Unable to parse AI response ({len(raw_text)} chars)")
            raise UnparseableOutputError(raw_text[:RAW_EXCERPT_CHARS])

        logger.info(f"Analysis complete: {len(results)} results for {len(limited)} complaints")
        return {'count': len(results), 'results': results}
