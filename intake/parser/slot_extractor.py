"""
Slot Extractor
==============
Maps one raw user answer onto the slot it was asked for.

Extraction Strategy:
    1. EXPLICIT MATCHER TABLE — one matcher per slot, no conditional chain
    2. Case-insensitive substring matching and list splitting only
    3. NEVER inference or LLM

A miss (no keyword matched, empty list) is not an error: the matcher
returns None for the slot and the field stays missing.
"""
import re
import logging
from typing import Any, Callable, Dict, List, Optional

from intake.core.constants import (
    AFFECTED_COMPONENTS,
    EVIDENCE,
    EVIDENCE_KEYWORDS,
    REPRODUCIBILITY,
    SEVERITY,
    SEVERITY_LEVELS,
)
from intake.models.slot_model import SlotModel
from intake.models.ticket import Evidence

logger = logging.getLogger(__name__)

_COMPONENT_SEPARATORS = re.compile(r",|\n")


# ---------------------------------------------------------------------------
# Per-slot matchers
# ---------------------------------------------------------------------------
def extract_severity(raw_text: str) -> Optional[str]:
    """Return the first severity level found, scanning in priority order."""
    lowered = raw_text.lower()
    for level in SEVERITY_LEVELS:
        if level in lowered:
            return level
    return None


def extract_reproducibility(raw_text: str) -> Optional[str]:
    """Accept the answer verbatim unless it is blank."""
    return raw_text if raw_text.strip() else None


def extract_evidence(raw_text: str) -> Evidence:
    lowered = raw_text.lower()
    return Evidence(**{
        flag: keyword in lowered for flag, keyword in EVIDENCE_KEYWORDS.items()
    })


def extract_components(raw_text: str) -> Optional[List[str]]:
    """Split on comma / newline, trim, drop empty segments."""
    components = [
        segment.strip()
        for segment in _COMPONENT_SEPARATORS.split(raw_text)
        if segment.strip()
    ]
    return components or None


# slot name → matcher producing the slot's new value
SLOT_MATCHERS: Dict[str, Callable[[str], Any]] = {
    SEVERITY: extract_severity,
    REPRODUCIBILITY: extract_reproducibility,
    EVIDENCE: extract_evidence,
    AFFECTED_COMPONENTS: extract_components,
}


def apply_response(model: SlotModel, field: str, raw_text: str) -> SlotModel:
    """
    Apply one user answer to the slot it targets.

    Parameters
    ----------
    model : SlotModel
        Current slot model. Not mutated.
    field : str
        Slot the answered question was asked for.
    raw_text : str
        The user's answer, unmodified.

    Returns
    -------
    SlotModel
        Updated copy with ``responses[field]`` recorded and the slot set
        from the matcher. missing_info is left untouched.
    """
    matcher = SLOT_MATCHERS.get(field)
    if matcher is None:
        raise ValueError(f"Unknown slot field: {field!r}")

    responses = dict(model.responses)
    responses[field] = raw_text

    value = matcher(raw_text)
    if value is None:
        logger.debug("No value extracted for '%s' from %r", field, raw_text)

    return model.model_copy(
        update={"responses": responses, field: value},
        deep=True,
    )
