"""
Coerce parsed model output into the strict per-complaint result schema.

Every field degrades to a safe default instead of failing the batch:
priorities outside the allowed set become 'medium', scores are clamped
into [0, 100], issue lists are capped at MAX_ISSUES, and ids fall back to
the submitted complaint at the same position.
"""
import logging
from typing import Any, List, Optional, TypedDict

logger = logging.getLogger(__name__)

ALLOWED_PRIORITIES = ('urgent', 'medium', 'low')
DEFAULT_PRIORITY = 'medium'
MAX_ISSUES = 10
MIN_RISK_SCORE = 0
MAX_RISK_SCORE = 100


class Issue(TypedDict):
    text: str
    rationale: str
    risk_category: Optional[str]


class AnalysisResult(TypedDict):
    id: str
    priority: str
    summary: str
    risk_score: Optional[float]
    issues: List[Issue]
    raw: Any


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _is_present_id(value: Any) -> bool:
    # Scalars only; objects, lists and booleans fall through to the next candidate
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return value != ''
    return isinstance(value, (int, float))


def _first_text(*values: Any) -> Optional[str]:
    """Return the first non-empty string among values."""
    for value in values:
        if isinstance(value, str) and value:
            return value
    return None


def _resolve_id(item: dict, base: dict, index: int) -> str:
    for candidate in (item.get('id'), base.get('id'), base.get('complaintId')):
        if _is_present_id(candidate):
            return candidate if isinstance(candidate, str) else str(candidate)
    return f"row-{index}"


def _normalize_priority(value: Any) -> str:
    if isinstance(value, str):
        priority = value.lower()
        if priority in ALLOWED_PRIORITIES:
            return priority
    return DEFAULT_PRIORITY


def _normalize_risk_score(value: Any) -> Optional[float]:
    # bool is an int subclass but never a score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return min(MAX_RISK_SCORE, max(MIN_RISK_SCORE, value))


def _normalize_issue(value: Any) -> Issue:
    issue = _as_dict(value)
    return {
        'text': _first_text(issue.get('text')) or '',
        'rationale': _first_text(issue.get('rationale'), issue.get('reason')) or '',
        'risk_category': _first_text(issue.get('risk_category'), issue.get('category')),
    }


def _normalize_issues(value: Any) -> List[Issue]:
    if not isinstance(value, list):
        return []
    return [_normalize_issue(issue) for issue in value[:MAX_ISSUES]]


def normalize_result(item: Any, base: Any, index: int) -> AnalysisResult:
    """
    Normalize a single model element.

    Args:
        item: Element of the model's array at this position.
        base: Submitted complaint at the same position (or None).
        index: Position in the model's array.

    Returns:
        AnalysisResult dictionary; `raw` is the unmodified item.
    """
    fields = _as_dict(item)
    summary = fields.get('summary')

    return {
        'id': _resolve_id(fields, _as_dict(base), index),
        'priority': _normalize_priority(fields.get('priority')),
        'summary': summary if isinstance(summary, str) else '',
        'risk_score': _normalize_risk_score(fields.get('risk_score')),
        'issues': _normalize_issues(fields.get('issues')),
        'raw': item,
    }


def normalize_results(parsed: Any, complaints: Optional[List[Any]]) -> List[AnalysisResult]:
    """
    Normalize the model's parsed output against the submitted batch.

    Output length follows the model's array, not the batch. A non-array
    top-level value yields an empty list.

    Args:
        parsed: Value returned by the extractor.
        complaints: Size-bounded batch that was sent to the model.

    Returns:
        List of AnalysisResult, one per model element.
    """
    if not isinstance(parsed, list):
        return []

    complaints = complaints if isinstance(complaints, list) else []

    if len(parsed) != len(complaints):
        logger.warning(
            f"Model returned {len(parsed)} results for {len(complaints)} complaints"
        )

    return [
        normalize_result(item, complaints[i] if i < len(complaints) else None, i)
        for i, item in enumerate(parsed)
    ]
