"""Threshold selection rule: which approval levels an amount triggers."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Protocol


class ThresholdLike(Protocol):
    threshold_id: str
    entity_type: str
    threshold_amount: Decimal
    approval_level: int
    is_active: bool


@dataclass(frozen=True)
class ThresholdEvaluation:
    """Outcome of evaluating one amount against an entity type's thresholds."""

    needs_approval: bool
    requires_level2: bool
    applied_levels: frozenset[int] = field(default_factory=frozenset)
    matched_threshold_ids: tuple[str, ...] = ()


def threshold_applies(threshold: ThresholdLike, amount: Decimal) -> bool:
    return threshold.is_active and amount >= threshold.threshold_amount


def evaluate_thresholds(
    thresholds: Iterable[ThresholdLike],
    amount: Decimal,
    entity_type: str | None = None,
) -> ThresholdEvaluation:
    """Evaluate ``amount`` against a threshold set.

    This is an existence check per level, not a search for the single
    highest threshold: any applying level-2 threshold is enough to require
    level 2, and duplicates at the same level change nothing. An empty set
    never requires approval.

    Inactive thresholds, and thresholds of another entity type when
    ``entity_type`` is given, are ignored.
    """
    amount = Decimal(amount)
    matched = [
        t
        for t in thresholds
        if (entity_type is None or t.entity_type == entity_type) and threshold_applies(t, amount)
    ]
    levels = frozenset(t.approval_level for t in matched)
    return ThresholdEvaluation(
        needs_approval=bool(matched),
        requires_level2=2 in levels,
        applied_levels=levels,
        matched_threshold_ids=tuple(t.threshold_id for t in matched),
    )
