"""
Unit Tests — Summarizer & Ticket Formatter
==========================================
Exact-string checks for the draft layout, the title heuristic and the
markdown description.
"""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from intake.core.exceptions import IncompleteTicketError
from intake.core.summarizer import summarize
from intake.core.ticket_formatter import build_title, finalize, generate_ticket_id
from intake.models.slot_model import SlotModel
from intake.models.ticket import Evidence


@pytest.fixture
def complete_model():
    return SlotModel(
        problem_statement="App crashes on save.",
        severity="high",
        reproducibility="Happens every time I click save",
        evidence=Evidence(logs=True),
        affected_components=["Save button", "Editor"],
    )


# ---------------------------------------------------------------------------
# 1. Summarizer
# ---------------------------------------------------------------------------
class TestSummarize:

    def test_exact_layout(self, complete_model):
        summary = summarize(complete_model)
        assert summary.summary == (
            "Issue Summary:\n"
            "--------------\n"
            "Problem: App crashes on save.\n"
            "Severity: high\n"
            "Reproducibility: Happens every time I click save\n"
            "Evidence: Screenshots ✗, Logs ✓, Videos ✗\n"
            "Affected Components: Save button, Editor"
        )

    def test_structured_copy(self, complete_model):
        summary = summarize(complete_model)
        assert summary.severity == "high"
        assert summary.affected_components == ["Save button", "Editor"]
        assert summary.evidence.logs is True

    def test_does_not_mutate_model(self, complete_model):
        before = complete_model.model_dump()
        summarize(complete_model)
        assert complete_model.model_dump() == before

    def test_incomplete_model_rejected(self, complete_model):
        complete_model.severity = None
        with pytest.raises(IncompleteTicketError) as exc_info:
            summarize(complete_model)
        assert exc_info.value.missing == ["severity"]


# ---------------------------------------------------------------------------
# 2. Title heuristic
# ---------------------------------------------------------------------------
class TestTitle:

    def test_first_sentence_without_period(self):
        assert build_title("App crashes on save.") == "App crashes on save"

    def test_first_sentence_only(self):
        assert build_title("Login page is broken. Also slow.") == "Login page is broken"

    def test_short_first_sentence_falls_back_to_60_chars(self):
        statement = "It broke. " + "x" * 80
        assert build_title(statement) == statement[:60]

    def test_exactly_ten_chars_falls_back(self):
        statement = "0123456789. rest of the text"
        assert build_title(statement) == statement[:60]

    def test_short_statement_used_whole(self):
        assert build_title("Crash.") == "Crash."

    def test_no_period_long_statement_is_not_truncated(self):
        statement = "y" * 100
        assert build_title(statement) == statement


# ---------------------------------------------------------------------------
# 3. finalize
# ---------------------------------------------------------------------------
class TestFinalize:

    def test_ticket_fields(self, complete_model):
        now = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
        ticket = finalize(complete_model, now=now, ticket_id="TICKET-1")
        assert ticket.id == "TICKET-1"
        assert ticket.title == "App crashes on save"
        assert ticket.status == "pending"
        assert ticket.created_at == now
        assert ticket.severity == "high"
        assert ticket.affected_components == ["Save button", "Editor"]

    def test_description_template(self, complete_model):
        ticket = finalize(complete_model)
        assert ticket.description == (
            "## Problem Description\n"
            "App crashes on save.\n"
            "\n"
            "## Reproducibility\n"
            "Happens every time I click save\n"
            "\n"
            "## Evidence\n"
            "- Logs available\n"
            "\n"
            "## Affected Components\n"
            "- Save button\n"
            "- Editor"
        )

    def test_ticket_is_frozen(self, complete_model):
        ticket = finalize(complete_model)
        with pytest.raises(ValidationError):
            ticket.title = "changed"

    def test_generated_ids_are_unique(self):
        ids = {generate_ticket_id() for _ in range(200)}
        assert len(ids) == 200
        assert all(i.startswith("TICKET-") for i in ids)

    def test_incomplete_model_rejected(self, complete_model):
        complete_model.affected_components = None
        with pytest.raises(IncompleteTicketError):
            finalize(complete_model)
