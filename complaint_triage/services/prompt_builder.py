"""
Prompt construction for complaint triage.
Renders the instruction, a worked example and the batch into a Messages API request body.
"""
import json
from typing import Any, List

MAX_BATCH_SIZE = 50  # guard token usage; complaints past this are dropped

RISK_CATEGORIES = (
    'disclosure',
    'fair-lending',
    'udaa',
    'servicing',
    'data-accuracy',
    'fees',
    'collections',
    'credit-reporting',
    'other',
)

SYSTEM_INSTRUCTION = f"""You are a compliance assistant specializing in CFPB consumer financial complaints.
Return ONLY valid JSON (no markdown, no commentary) as an array. Each element MUST have:
id (string), priority (urgent|medium|low), summary (string, <= 240 chars), risk_score (0-100 number), issues (array up to 10) where each issue has text, rationale, risk_category (one of: {', '.join(RISK_CATEGORIES)}).
Prioritize 'urgent' if there are regulatory time sensitivity, potential consumer harm escalation, past due risk, or legal exposure.
If unsure, choose medium. Avoid hallucination: base findings ONLY on provided complaint text."""

# Format anchor only, never treated as data
STRUCTURED_EXAMPLE = [
    {
        "id": "160614-000000",
        "priority": "urgent",
        "summary": "Servicer obstacles while borrower is delinquent risk foreclosure and missing loss mitigation timelines.",
        "risk_score": 82,
        "issues": [
            {
                "text": "Problems with the mortgage servicer when you are unable to pay",
                "rationale": "Indicates potential servicing rule violations (Reg X loss mitigation handling).",
                "risk_category": "servicing"
            }
        ]
    }
]

USER_PROMPT_TEMPLATE = '''Example format (DO NOT explain):
{example}

Now analyze these complaints:
{payload}'''


def limit_batch(complaints: List[Any]) -> List[Any]:
    """Return at most the first MAX_BATCH_SIZE complaints."""
    return list(complaints[:MAX_BATCH_SIZE])


def render_user_prompt(complaints: List[Any]) -> str:
    """
    Render the single user-turn text for a batch.

    Args:
        complaints: Complaint records (truncated to MAX_BATCH_SIZE here).

    Returns:
        Prompt text embedding the example and the batch as JSON.
    """
    prompt_object = {
        'system': SYSTEM_INSTRUCTION,
        'complaints': limit_batch(complaints),
    }
    return USER_PROMPT_TEMPLATE.format(
        example=json.dumps(STRUCTURED_EXAMPLE, indent=2, ensure_ascii=False),
        payload=json.dumps(prompt_object, indent=2, ensure_ascii=False),
    )


def build_prompt(
    complaints: List[Any],
    model: str,
    max_tokens: int,
    temperature: float
) -> dict:
    """
    Build the completion request body.

    Args:
        complaints: Complaint records to analyze.
        model: Provider model identifier.
        max_tokens: Response token limit.
        temperature: Decoding temperature (kept low for literal output).

    Returns:
        Request body dictionary ready to be sent as JSON.
    """
    return {
        'model': model,
        'max_tokens': max_tokens,
        'messages': [
            {
                'role': 'user',
                'content': render_user_prompt(complaints)
            }
        ],
        'temperature': temperature
    }
