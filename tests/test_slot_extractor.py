"""
Unit Tests — Slot Extractor
===========================
Keyword / list extraction for each slot, and apply_response bookkeeping.
"""
import pytest

from intake.models.slot_model import SlotModel
from intake.models.ticket import Evidence
from intake.parser.slot_extractor import (
    SLOT_MATCHERS,
    apply_response,
    extract_components,
    extract_evidence,
    extract_reproducibility,
    extract_severity,
)


# ---------------------------------------------------------------------------
# 1. Severity
# ---------------------------------------------------------------------------
class TestSeverity:

    @pytest.mark.parametrize("text,expected", [
        ("critical", "critical"),
        ("It's HIGH priority", "high"),
        ("medium I guess", "medium"),
        ("pretty low", "low"),
    ])
    def test_each_level_detected_case_insensitively(self, text, expected):
        assert extract_severity(text) == expected

    def test_critical_wins_over_high(self):
        assert extract_severity("high, maybe even critical") == "critical"

    def test_priority_order_not_text_order(self):
        assert extract_severity("low or medium") == "medium"

    def test_no_keyword_returns_none(self):
        assert extract_severity("not sure, it is annoying") is None

    def test_substring_match_counts(self):
        # "highly" contains "high"
        assert extract_severity("highly disruptive") == "high"


# ---------------------------------------------------------------------------
# 2. Reproducibility
# ---------------------------------------------------------------------------
class TestReproducibility:

    def test_text_kept_verbatim(self):
        text = "  Every time I click Save  "
        assert extract_reproducibility(text) == text

    def test_blank_text_is_a_miss(self):
        assert extract_reproducibility("") is None
        assert extract_reproducibility("   \n") is None


# ---------------------------------------------------------------------------
# 3. Evidence
# ---------------------------------------------------------------------------
class TestEvidence:

    def test_logs_and_video(self):
        evidence = extract_evidence("I have logs and a video")
        assert evidence == Evidence(screenshots=False, logs=True, videos=True)

    def test_all_three(self):
        evidence = extract_evidence("Screenshots, LOGS, Videos")
        assert evidence == Evidence(screenshots=True, logs=True, videos=True)

    def test_no_keyword_leaves_everything_false(self):
        evidence = extract_evidence("nothing, sorry")
        assert not evidence.any_present()


# ---------------------------------------------------------------------------
# 4. Affected components
# ---------------------------------------------------------------------------
class TestComponents:

    def test_comma_and_newline_split(self):
        assert extract_components("Login, Payments\nCheckout") == ["Login", "Payments", "Checkout"]

    def test_empty_segments_dropped(self):
        assert extract_components("Login,, ,\n\nPayments,") == ["Login", "Payments"]

    def test_only_separators_is_a_miss(self):
        assert extract_components(" , \n ,") is None


# ---------------------------------------------------------------------------
# 5. apply_response
# ---------------------------------------------------------------------------
class TestApplyResponse:

    def test_matcher_table_covers_every_slot(self):
        assert set(SLOT_MATCHERS) == {"severity", "reproducibility", "evidence", "affected_components"}

    def test_records_raw_response_and_sets_slot(self):
        model = SlotModel(problem_statement="App crashes on save.")
        updated = apply_response(model, "severity", "High severity issue")
        assert updated.severity == "high"
        assert updated.responses == {"severity": "High severity issue"}

    def test_input_model_not_mutated(self):
        model = SlotModel(problem_statement="App crashes on save.")
        apply_response(model, "affected_components", "Editor")
        assert model.affected_components is None
        assert model.responses == {}

    def test_miss_still_records_response(self):
        model = SlotModel(problem_statement="x")
        updated = apply_response(model, "severity", "dunno")
        assert updated.severity is None
        assert updated.responses["severity"] == "dunno"

    def test_missing_info_is_not_touched(self):
        model = SlotModel(problem_statement="x")
        updated = apply_response(model, "severity", "critical")
        assert updated.missing_info == model.missing_info
        assert updated.missing_info.severity is True

    def test_unknown_field_raises(self):
        with pytest.raises(ValueError, match="Unknown slot field"):
            apply_response(SlotModel(), "priority", "high")
