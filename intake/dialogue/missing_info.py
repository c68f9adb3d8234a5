"""
Missing-Info Evaluator
======================
Derives which required slots are still unset from the slot values alone.

Presence rules:
    severity            — set to one of the four levels
    reproducibility     — non-blank text
    evidence            — at least one of screenshots / logs / videos is true
    affected_components — non-empty list
"""
from typing import List

from intake.core.constants import SLOT_FIELDS
from intake.models.slot_model import MissingInfo, SlotModel


def evaluate_missing_info(model: SlotModel) -> MissingInfo:
    return MissingInfo(
        severity=model.severity is None,
        reproducibility=not (model.reproducibility or "").strip(),
        evidence=not model.evidence.any_present(),
        affected_components=not model.affected_components,
    )


def missing_fields(missing: MissingInfo) -> List[str]:
    """Missing slot names, in question priority order."""
    return [field for field in SLOT_FIELDS if getattr(missing, field)]


def has_missing_info(missing: MissingInfo) -> bool:
    return bool(missing_fields(missing))
