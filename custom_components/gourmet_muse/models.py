"""Data model for the Gourmet Muse progression engine.

Definitions (recipes, badges, challenges) are immutable and come from the
catalog. ProgressState is an immutable snapshot of the user's progression;
the only mutable copy lives inside ProgressStore.

Unlock rules are a tagged variant: each rule class carries its serialized
``type`` tag and is dispatched structurally by the engine's handler
registry, never by badge name.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from types import MappingProxyType
from typing import Any, ClassVar

from . import const

# =============================================================================
# ENUMS
# =============================================================================


class BadgeCategory(StrEnum):
    """Badge categories."""

    COOKING = const.BADGE_CATEGORY_COOKING
    EXPLORATION = const.BADGE_CATEGORY_EXPLORATION
    SOCIAL = const.BADGE_CATEGORY_SOCIAL
    ACHIEVEMENT = const.BADGE_CATEGORY_ACHIEVEMENT
    SEASONAL = const.BADGE_CATEGORY_SEASONAL


class BadgeRarity(StrEnum):
    """Badge rarities, each with a fixed point multiplier."""

    COMMON = const.BADGE_RARITY_COMMON
    UNCOMMON = const.BADGE_RARITY_UNCOMMON
    RARE = const.BADGE_RARITY_RARE
    EPIC = const.BADGE_RARITY_EPIC
    LEGENDARY = const.BADGE_RARITY_LEGENDARY

    @property
    def multiplier(self) -> float:
        """Return the point multiplier for this rarity."""
        return const.RARITY_MULTIPLIERS[self.value]


# =============================================================================
# UNLOCK RULES
# =============================================================================


@dataclass(frozen=True, slots=True)
class UnlockRule:
    """Base class for badge unlock rules."""

    rule_type: ClassVar[str] = ""

    def as_dict(self) -> dict[str, Any]:
        """Serialize the rule to its tagged dict form."""
        return {const.RULE_FIELD_TYPE: self.rule_type}

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> UnlockRule:
        """Build a rule from its tagged dict form.

        Raises:
            ValueError: Unknown rule type or missing/invalid parameters.
        """
        rule_type = data.get(const.RULE_FIELD_TYPE)
        rule_cls = _RULE_TYPES.get(rule_type)  # type: ignore[arg-type]
        if rule_cls is None:
            raise ValueError(f"Unknown unlock rule type: {rule_type!r}")
        if rule_cls is ManualFlag:
            return ManualFlag()
        if rule_cls is ChallengeCompletion:
            challenge_id = data.get(const.RULE_FIELD_CHALLENGE_ID)
            if not isinstance(challenge_id, str) or not challenge_id:
                raise ValueError("challenge_completion rule requires a challenge_id")
            return ChallengeCompletion(challenge_id)
        threshold = data.get(const.RULE_FIELD_THRESHOLD)
        if isinstance(threshold, bool) or not isinstance(threshold, int):
            raise ValueError(f"{rule_type} rule requires an integer threshold")
        return rule_cls(threshold)


@dataclass(frozen=True, slots=True)
class CountThreshold(UnlockRule):
    """Satisfied when at least ``threshold`` recipes are completed."""

    rule_type: ClassVar[str] = const.RULE_TYPE_COUNT_THRESHOLD
    threshold: int

    def __post_init__(self) -> None:
        if self.threshold < 0:
            raise ValueError("threshold must be non-negative")

    def as_dict(self) -> dict[str, Any]:
        return {
            const.RULE_FIELD_TYPE: self.rule_type,
            const.RULE_FIELD_THRESHOLD: self.threshold,
        }


@dataclass(frozen=True, slots=True)
class DistinctCuisineThreshold(UnlockRule):
    """Satisfied when completed recipes span at least ``threshold`` cuisines."""

    rule_type: ClassVar[str] = const.RULE_TYPE_DISTINCT_CUISINE_THRESHOLD
    threshold: int

    def __post_init__(self) -> None:
        if self.threshold < 0:
            raise ValueError("threshold must be non-negative")

    def as_dict(self) -> dict[str, Any]:
        return {
            const.RULE_FIELD_TYPE: self.rule_type,
            const.RULE_FIELD_THRESHOLD: self.threshold,
        }


@dataclass(frozen=True, slots=True)
class ChallengeCompletion(UnlockRule):
    """Satisfied when every recipe of a challenge is completed."""

    rule_type: ClassVar[str] = const.RULE_TYPE_CHALLENGE_COMPLETION
    challenge_id: str

    def as_dict(self) -> dict[str, Any]:
        return {
            const.RULE_FIELD_TYPE: self.rule_type,
            const.RULE_FIELD_CHALLENGE_ID: self.challenge_id,
        }


@dataclass(frozen=True, slots=True)
class ManualFlag(UnlockRule):
    """Never satisfied by evaluation; unlocked only through force unlock."""

    rule_type: ClassVar[str] = const.RULE_TYPE_MANUAL_FLAG


_RULE_TYPES: dict[str, type[UnlockRule]] = {
    rule_cls.rule_type: rule_cls
    for rule_cls in (
        CountThreshold,
        DistinctCuisineThreshold,
        ChallengeCompletion,
        ManualFlag,
    )
}


# =============================================================================
# CATALOG DEFINITIONS
# =============================================================================


@dataclass(frozen=True, slots=True)
class RecipeRef:
    """Recipe identity as seen by the progression engine."""

    recipe_id: str
    name: str
    cuisine: str


@dataclass(frozen=True, slots=True)
class BadgeDefinition:
    """An awardable badge with its reward and unlock rule."""

    badge_id: str
    name: str
    category: BadgeCategory
    rarity: BadgeRarity
    points: int
    rule: UnlockRule
    description: str = ""
    icon: str = ""
    requirement: str = ""

    def __post_init__(self) -> None:
        if self.points <= 0:
            raise ValueError(f"Badge {self.badge_id} must award positive points")

    @property
    def award_points(self) -> int:
        """Points granted on unlock: base points times rarity, rounded half up."""
        weighted = Decimal(self.points) * Decimal(str(self.rarity.multiplier))
        return int(weighted.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    def as_dict(self) -> dict[str, Any]:
        """Serialize the full definition snapshot."""
        return {
            const.DATA_BADGE_ID: self.badge_id,
            const.DATA_BADGE_NAME: self.name,
            const.DATA_BADGE_DESCRIPTION: self.description,
            const.DATA_BADGE_ICON: self.icon,
            const.DATA_BADGE_CATEGORY: self.category.value,
            const.DATA_BADGE_RARITY: self.rarity.value,
            const.DATA_BADGE_POINTS: self.points,
            const.DATA_BADGE_REQUIREMENT: self.requirement,
            const.DATA_BADGE_RULE: self.rule.as_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BadgeDefinition:
        """Build a definition from its snapshot.

        Raises:
            KeyError, ValueError: Snapshot is incomplete or invalid.
        """
        return cls(
            badge_id=data[const.DATA_BADGE_ID],
            name=data[const.DATA_BADGE_NAME],
            description=data.get(const.DATA_BADGE_DESCRIPTION, ""),
            icon=data.get(const.DATA_BADGE_ICON, ""),
            category=BadgeCategory(data[const.DATA_BADGE_CATEGORY]),
            rarity=BadgeRarity(data[const.DATA_BADGE_RARITY]),
            points=data[const.DATA_BADGE_POINTS],
            requirement=data.get(const.DATA_BADGE_REQUIREMENT, ""),
            rule=UnlockRule.from_dict(data[const.DATA_BADGE_RULE]),
        )


@dataclass(frozen=True, slots=True)
class Challenge:
    """A named, date-windowed bundle of recipes."""

    challenge_id: str
    name: str
    recipe_ids: tuple[str, ...]
    start_date: date
    end_date: date
    description: str = ""
    reward_badge_id: str | None = None
    participants: int = 0
    is_active: bool = True


# =============================================================================
# PROGRESS
# =============================================================================


@dataclass(frozen=True, slots=True)
class UnlockedBadge:
    """A badge definition plus the moment it was unlocked."""

    badge: BadgeDefinition
    unlocked_at: datetime

    @property
    def badge_id(self) -> str:
        """Return the id of the unlocked badge."""
        return self.badge.badge_id


@dataclass(frozen=True, slots=True)
class ProgressState:
    """Immutable snapshot of the user's progression."""

    completed_recipe_ids: frozenset[str] = frozenset()
    unlocked_badges: Mapping[str, UnlockedBadge] = field(
        default_factory=lambda: MappingProxyType({})
    )
    points: int = 0
    level: int = const.MIN_LEVEL
    active_challenge_id: str | None = None
    distinct_cuisine_count: int = 0

    def as_dict(self) -> dict[str, Any]:
        """Render a JSON-serializable view for service responses and attributes."""
        return {
            const.ATTR_COMPLETED_RECIPES: sorted(self.completed_recipe_ids),
            const.ATTR_UNLOCKED_BADGES: [
                {
                    const.DATA_BADGE_ID: unlocked.badge_id,
                    const.DATA_BADGE_NAME: unlocked.badge.name,
                    const.DATA_BADGE_RARITY: unlocked.badge.rarity.value,
                    const.DATA_BADGE_UNLOCKED_AT: unlocked.unlocked_at.isoformat(),
                }
                for unlocked in self.unlocked_badges.values()
            ],
            const.ATTR_POINTS: self.points,
            const.ATTR_LEVEL: self.level,
            const.ATTR_ACTIVE_CHALLENGE: self.active_challenge_id,
            const.ATTR_DISTINCT_CUISINES: self.distinct_cuisine_count,
        }
