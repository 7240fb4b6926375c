"""
Analysis pipeline: prompt, completion, extraction, normalization.
"""
from complaint_triage.services.json_extractor import extract_json
from complaint_triage.services.result_normalizer import normalize_results
from complaint_triage.services.prompt_builder import build_prompt, MAX_BATCH_SIZE
from complaint_triage.services.analysis_orchestrator import AnalysisOrchestrator

__all__ = [
    'extract_json',
    'normalize_results',
    'build_prompt',
    'MAX_BATCH_SIZE',
    'AnalysisOrchestrator'
]
