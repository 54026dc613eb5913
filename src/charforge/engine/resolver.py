"""Rule resolver: base value plus modifiers to a total with a breakdown.

Stacking policy:

- Named bonus categories in ``NON_STACKING_BONUS_TYPES`` do not stack.
  Only the single highest modifier in each such bucket counts; on a tie
  the first one encountered wins.
- Every other category stacks, including categories this module has
  never heard of. Stacking is the default rule, not a fallback.

The resolver is a pure function. It never mutates its inputs and is safe
to call from several readers against the same modifier snapshot.

Example:
    >>> belt = Modifier(source="Belt", target="strength", bonus_type="enhancement", value=2)
    >>> potion = Modifier(source="Potion", target="strength", bonus_type="enhancement", value=1)
    >>> resolve_stat(10, [belt, potion]).total
    12
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import ConfigDict, Field

from charforge.core.constants import ABILITY_SCORE_BASELINE
from charforge.models.base import CharforgeModel
from charforge.models.enums import BonusType
from charforge.models.modifiers import Modifier


NON_STACKING_BONUS_TYPES: frozenset[str] = frozenset(
    {
        BonusType.ENHANCEMENT.value,
        BonusType.MORALE.value,
        BonusType.COMPETENCE.value,
        BonusType.LUCK.value,
    }
)
"""Categories where only the best modifier applies."""


def stacks(bonus_type: str) -> bool:
    """Return True if modifiers of ``bonus_type`` accumulate."""
    return bonus_type not in NON_STACKING_BONUS_TYPES


class BreakdownEntry(CharforgeModel):
    """One contributing modifier in a stat resolution."""

    model_config = ConfigDict(frozen=True)

    source: str
    bonus_type: str
    value: int


class StatResult(CharforgeModel):
    """Resolved stat: ``total`` plus the itemized contributions."""

    model_config = ConfigDict(frozen=True)

    total: int
    breakdown: list[BreakdownEntry] = Field(default_factory=list)

    @property
    def bonus(self) -> int:
        """Sum of all contributions, excluding the base value."""
        return sum(entry.value for entry in self.breakdown)


def _entry(modifier: Modifier) -> BreakdownEntry:
    return BreakdownEntry(
        source=modifier.source,
        bonus_type=modifier.bonus_type,
        value=modifier.value,
    )


def resolve_stat(base_value: int, modifiers: Iterable[Modifier]) -> StatResult:
    """Combine a base value with a collection of modifiers.

    Args:
        base_value: The stat's raw value.
        modifiers: Candidate modifiers. Inactive ones are ignored; target
            filtering is the caller's job.

    Returns:
        The total and one breakdown entry per contributing modifier.
    """
    # dicts keep insertion order, so bucket and tie-break order is stable
    buckets: dict[str, list[Modifier]] = {}
    for modifier in modifiers:
        if not modifier.active:
            continue
        buckets.setdefault(modifier.bonus_type, []).append(modifier)

    breakdown: list[BreakdownEntry] = []
    total_bonus = 0

    for bonus_type, bucket in buckets.items():
        if stacks(bonus_type):
            for modifier in bucket:
                total_bonus += modifier.value
                breakdown.append(_entry(modifier))
        else:
            # max() returns the first maximal element
            best = max(bucket, key=lambda m: m.value)
            total_bonus += best.value
            breakdown.append(_entry(best))

    return StatResult(total=base_value + total_bonus, breakdown=breakdown)


def ability_modifier(score: int) -> int:
    """Calculate the ability modifier for a score.

    Example:
        >>> ability_modifier(10)
        0
        >>> ability_modifier(7)
        -2
    """
    return (score - ABILITY_SCORE_BASELINE) // 2


__all__ = [
    "NON_STACKING_BONUS_TYPES",
    "BreakdownEntry",
    "StatResult",
    "ability_modifier",
    "resolve_stat",
    "stacks",
]
