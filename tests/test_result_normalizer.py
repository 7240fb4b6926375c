"""
Unit tests for result_normalizer module.
Tests defaulting, clamping, synonyms and positional id fallback.
"""
import pytest

from complaint_triage.services.result_normalizer import (
    normalize_results,
    normalize_result,
    ALLOWED_PRIORITIES,
    MAX_ISSUES
)


def make_item(**overrides) -> dict:
    """Create a well-formed model element with optional overrides."""
    item = {
        "id": "160614-000000",
        "priority": "urgent",
        "summary": "Servicer obstacles while delinquent.",
        "risk_score": 82,
        "issues": [
            {"text": "Unable to pay", "rationale": "Reg X loss mitigation", "risk_category": "servicing"}
        ]
    }
    item.update(overrides)
    return item


class TestNormalizeResults:
    """Tests for batch-level behavior."""

    def test_non_array_returns_empty(self):
        """Test top-level shapes other than a list."""
        assert normalize_results(None, [{"id": "a"}]) == []
        assert normalize_results({"id": "a"}, [{"id": "a"}]) == []
        assert normalize_results("[]", [{"id": "a"}]) == []
        assert normalize_results(3, [{"id": "a"}]) == []

    def test_empty_array_returns_empty(self):
        assert normalize_results([], [{"id": "a"}]) == []

    def test_well_formed_item(self):
        """Test a fully valid element passes through."""
        item = make_item()
        results = normalize_results([item], [{"id": "160614-000000"}])

        assert len(results) == 1
        result = results[0]
        assert result['id'] == "160614-000000"
        assert result['priority'] == "urgent"
        assert result['summary'] == "Servicer obstacles while delinquent."
        assert result['risk_score'] == 82
        assert result['issues'] == [
            {"text": "Unable to pay", "rationale": "Reg X loss mitigation", "risk_category": "servicing"}
        ]
        assert result['raw'] is item

    def test_length_follows_model_array_when_longer(self):
        """Test extra model elements still produce rows."""
        results = normalize_results([{}, {}, {}], [{"id": "a"}])

        assert [r['id'] for r in results] == ["a", "row-1", "row-2"]

    def test_length_follows_model_array_when_shorter(self):
        results = normalize_results([{}], [{"id": "a"}, {"id": "b"}])
        assert len(results) == 1
        assert results[0]['id'] == "a"

    def test_raw_is_positional(self):
        """Test each raw value matches the element at the same index."""
        parsed = [{"summary": "first"}, "oops", {"summary": "third"}]
        results = normalize_results(parsed, [{}, {}, {}])

        assert [r['raw'] for r in results] == parsed

    def test_totality_on_malformed_elements(self):
        """Test wrong-typed elements never raise and degrade to defaults."""
        parsed = [None, 5, "text", [], True, {"priority": {}, "issues": "many", "risk_score": "90"}]
        results = normalize_results(parsed, [])

        assert len(results) == len(parsed)
        for i, result in enumerate(results):
            assert result['id'] == f"row-{i}"
            assert result['priority'] == "medium"
            assert result['summary'] == ""
            assert result['risk_score'] is None
            assert result['issues'] == []

    def test_extra_unknown_fields_ignored(self):
        results = normalize_results([make_item(extra="x", nested={"a": 1})], [])
        assert set(results[0].keys()) == {'id', 'priority', 'summary', 'risk_score', 'issues', 'raw'}

    def test_complaints_not_a_list(self):
        """Test a missing batch still normalizes with synthetic ids."""
        results = normalize_results([{}], None)
        assert results[0]['id'] == "row-0"


class TestIdFallback:
    """Tests for the id fallback chain."""

    def test_model_id_wins(self):
        result = normalize_result({"id": "model"}, {"id": "input", "complaintId": "cid"}, 0)
        assert result['id'] == "model"

    def test_input_id_used(self):
        result = normalize_result({}, {"id": "input", "complaintId": "cid"}, 0)
        assert result['id'] == "input"

    def test_empty_model_id_falls_back(self):
        result = normalize_result({"id": ""}, {"id": "input"}, 0)
        assert result['id'] == "input"

    def test_complaint_id_used(self):
        result = normalize_result({"id": None}, {"complaintId": "cid-7"}, 0)
        assert result['id'] == "cid-7"

    def test_placeholder_from_position(self):
        result = normalize_result({}, None, 4)
        assert result['id'] == "row-4"

    @pytest.mark.parametrize("model_id", [{"x": 1}, [], ["a"], True, False])
    def test_non_scalar_model_id_falls_back(self, model_id):
        """Test objects, lists and booleans are not used as ids."""
        result = normalize_result({"id": model_id}, {"id": "input"}, 0)
        assert result['id'] == "input"

    def test_non_scalar_ids_fall_through_to_placeholder(self):
        result = normalize_result({"id": {"x": 1}}, {"id": [], "complaintId": {}}, 3)
        assert result['id'] == "row-3"

    def test_non_scalar_input_id_falls_to_complaint_id(self):
        result = normalize_result({}, {"id": {"nested": True}, "complaintId": "cid-9"}, 0)
        assert result['id'] == "cid-9"

    def test_numeric_id_coerced_to_string(self):
        result = normalize_result({"id": 1234}, {}, 0)
        assert result['id'] == "1234"


class TestPriority:
    """Tests for priority domain closure."""

    @pytest.mark.parametrize("value,expected", [
        ("urgent", "urgent"),
        ("low", "low"),
        ("medium", "medium"),
        ("URGENT", "urgent"),
        ("Low", "low"),
        ("high", "medium"),
        ("", "medium"),
        (None, "medium"),
        (3, "medium"),
        (["urgent"], "medium"),
    ])
    def test_priority_values(self, value, expected):
        result = normalize_result({"priority": value}, {}, 0)
        assert result['priority'] == expected
        assert result['priority'] in ALLOWED_PRIORITIES

    def test_missing_priority(self):
        assert normalize_result({}, {}, 0)['priority'] == "medium"


class TestRiskScore:
    """Tests for risk_score clamping."""

    @pytest.mark.parametrize("value,expected", [
        (-5, 0),
        (150, 100),
        (0, 0),
        (100, 100),
        (42.5, 42.5),
    ])
    def test_numeric_scores_clamped(self, value, expected):
        assert normalize_result({"risk_score": value}, {}, 0)['risk_score'] == expected

    @pytest.mark.parametrize("value", [None, "80", True, False, [], {}])
    def test_non_numeric_scores_absent(self, value):
        assert normalize_result({"risk_score": value}, {}, 0)['risk_score'] is None

    def test_missing_score_absent(self):
        assert normalize_result({}, {}, 0)['risk_score'] is None


class TestSummary:
    """Tests for summary defaulting."""

    def test_string_copied_verbatim(self):
        text = "  Keeps  spacing\nand newlines "
        assert normalize_result({"summary": text}, {}, 0)['summary'] == text

    @pytest.mark.parametrize("value", [None, 12, ["a"], {"a": 1}])
    def test_non_string_becomes_empty(self, value):
        assert normalize_result({"summary": value}, {}, 0)['summary'] == ""


class TestIssues:
    """Tests for issue mapping, synonyms and cap."""

    def test_issue_cap(self):
        """Test 15 issues are truncated to 10."""
        issues = [{"text": f"issue {i}"} for i in range(15)]
        result = normalize_result({"issues": issues}, {}, 0)

        assert len(result['issues']) == MAX_ISSUES == 10
        assert [i['text'] for i in result['issues']] == [f"issue {i}" for i in range(10)]

    def test_reason_synonym(self):
        result = normalize_result({"issues": [{"text": "t", "reason": "because"}]}, {}, 0)
        assert result['issues'][0]['rationale'] == "because"

    def test_rationale_preferred_over_reason(self):
        result = normalize_result({"issues": [{"rationale": "r", "reason": "other"}]}, {}, 0)
        assert result['issues'][0]['rationale'] == "r"

    def test_category_synonym(self):
        result = normalize_result({"issues": [{"category": "fees"}]}, {}, 0)
        assert result['issues'][0]['risk_category'] == "fees"

    def test_risk_category_preferred_over_category(self):
        result = normalize_result({"issues": [{"risk_category": "udaa", "category": "fees"}]}, {}, 0)
        assert result['issues'][0]['risk_category'] == "udaa"

    def test_missing_issue_fields_default(self):
        result = normalize_result({"issues": [{}]}, {}, 0)
        assert result['issues'] == [{"text": "", "rationale": "", "risk_category": None}]

    def test_non_object_issue_entries(self):
        """Test strings and nulls in the issue list degrade to empty issues."""
        result = normalize_result({"issues": ["text only", None, 7]}, {}, 0)
        assert result['issues'] == [{"text": "", "rationale": "", "risk_category": None}] * 3

    @pytest.mark.parametrize("value", [None, "many", {"text": "t"}, 3])
    def test_non_array_issues(self, value):
        assert normalize_result({"issues": value}, {}, 0)['issues'] == []
