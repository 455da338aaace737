"""Read-only catalog of recipes, badges and challenges.

The catalog is the engine's reference data: recipe identities (for cuisine
resolution), badge definitions in evaluation order, challenges, and the seed
badge every fresh progression starts with. Nothing in the integration
mutates it after construction.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from . import const
from .models import (
    BadgeCategory,
    BadgeDefinition,
    BadgeRarity,
    Challenge,
    ChallengeCompletion,
    CountThreshold,
    DistinctCuisineThreshold,
    ManualFlag,
    RecipeRef,
)


class Catalog:
    """Indexed, immutable view over recipe, badge and challenge definitions."""

    def __init__(
        self,
        recipes: Iterable[RecipeRef],
        badges: Iterable[BadgeDefinition],
        challenges: Iterable[Challenge] = (),
        *,
        seed_badge_id: str,
    ) -> None:
        """Index the definitions.

        Args:
            recipes: Recipe references.
            badges: Badge definitions, in evaluation order.
            challenges: Challenge definitions.
            seed_badge_id: Badge unlocked on every fresh or reset progression.

        Raises:
            ValueError: Duplicate ids, a missing seed badge, or a challenge or
                rule referencing an unknown recipe, badge or challenge.
        """
        self._recipes = _index(recipes, lambda r: r.recipe_id, "recipe")
        self._badges = _index(badges, lambda b: b.badge_id, "badge")
        self._challenges = _index(challenges, lambda c: c.challenge_id, "challenge")

        if seed_badge_id not in self._badges:
            raise ValueError(f"Seed badge '{seed_badge_id}' is not in the catalog")
        self._seed_badge_id = seed_badge_id

        for challenge in self._challenges.values():
            if len(set(challenge.recipe_ids)) != len(challenge.recipe_ids):
                raise ValueError(
                    f"Challenge '{challenge.challenge_id}' lists a recipe twice"
                )
            missing = [rid for rid in challenge.recipe_ids if rid not in self._recipes]
            if missing:
                raise ValueError(
                    f"Challenge '{challenge.challenge_id}' references unknown "
                    f"recipes: {', '.join(missing)}"
                )
            if (
                challenge.reward_badge_id is not None
                and challenge.reward_badge_id not in self._badges
            ):
                raise ValueError(
                    f"Challenge '{challenge.challenge_id}' rewards unknown badge "
                    f"'{challenge.reward_badge_id}'"
                )

        for badge in self._badges.values():
            if (
                isinstance(badge.rule, ChallengeCompletion)
                and badge.rule.challenge_id not in self._challenges
            ):
                raise ValueError(
                    f"Badge '{badge.badge_id}' depends on unknown challenge "
                    f"'{badge.rule.challenge_id}'"
                )

    def get_recipe(self, recipe_id: str) -> RecipeRef | None:
        """Return the recipe with this id, or None."""
        return self._recipes.get(recipe_id)

    def get_badge(self, badge_id: str) -> BadgeDefinition | None:
        """Return the badge definition with this id, or None."""
        return self._badges.get(badge_id)

    def get_challenge(self, challenge_id: str) -> Challenge | None:
        """Return the challenge with this id, or None."""
        return self._challenges.get(challenge_id)

    def list_recipes(self) -> list[RecipeRef]:
        """Return all recipes in definition order."""
        return list(self._recipes.values())

    def list_badge_definitions(self) -> list[BadgeDefinition]:
        """Return all badge definitions in evaluation order."""
        return list(self._badges.values())

    def list_challenges(self) -> list[Challenge]:
        """Return all challenges in definition order."""
        return list(self._challenges.values())

    @property
    def seed_badge(self) -> BadgeDefinition:
        """Return the badge every fresh progression starts with."""
        return self._badges[self._seed_badge_id]


def _index(items, key, kind: str) -> dict:
    """Index items by id, rejecting duplicates."""
    indexed: dict = {}
    for item in items:
        item_id = key(item)
        if item_id in indexed:
            raise ValueError(f"Duplicate {kind} id '{item_id}'")
        indexed[item_id] = item
    return indexed


# =============================================================================
# DEFAULT CATALOG
# =============================================================================

SEED_BADGE_ID = "kitchen_newcomer"


def build_default_catalog() -> Catalog:
    """Return the catalog shipped with the integration."""
    recipes = [
        RecipeRef("pad_thai", "Authentic Pad Thai", "Thai"),
        RecipeRef("quinoa_bowl", "Mediterranean Quinoa Bowl", "Mediterranean"),
        RecipeRef("chicken_teriyaki", "Japanese Chicken Teriyaki", "Japanese"),
        RecipeRef("margherita_pizza", "Classic Margherita Pizza", "Italian"),
        RecipeRef("tikka_masala", "Chicken Tikka Masala", "Indian"),
        RecipeRef("street_tacos", "Carne Asada Street Tacos", "Mexican"),
        RecipeRef("coq_au_vin", "Coq au Vin", "French"),
        RecipeRef("green_curry", "Thai Green Curry", "Thai"),
    ]

    badges = [
        BadgeDefinition(
            badge_id=SEED_BADGE_ID,
            name="Kitchen Newcomer",
            description="Join the Gourmet Muse kitchen",
            icon="mdi:hand-wave",
            category=BadgeCategory.ACHIEVEMENT,
            rarity=BadgeRarity.COMMON,
            points=5,
            requirement="Start your culinary journey",
            rule=ManualFlag(),
        ),
        BadgeDefinition(
            badge_id="first_steps",
            name="First Steps",
            description="Complete your first recipe",
            icon="mdi:star",
            category=BadgeCategory.ACHIEVEMENT,
            rarity=BadgeRarity.COMMON,
            points=10,
            requirement="Cook 1 recipe",
            rule=CountThreshold(1),
        ),
        BadgeDefinition(
            badge_id="global_explorer",
            name="Global Explorer",
            description="Try recipes from 5 different cuisines",
            icon="mdi:earth",
            category=BadgeCategory.EXPLORATION,
            rarity=BadgeRarity.UNCOMMON,
            points=50,
            requirement="Cook recipes from 5 cuisines",
            rule=DistinctCuisineThreshold(5),
        ),
        BadgeDefinition(
            badge_id="master_chef",
            name="Master Chef",
            description="Complete 50 recipes successfully",
            icon="mdi:crown",
            category=BadgeCategory.COOKING,
            rarity=BadgeRarity.RARE,
            points=200,
            requirement="Cook 50 recipes",
            rule=CountThreshold(50),
        ),
        BadgeDefinition(
            badge_id="social_butterfly",
            name="Social Butterfly",
            description="Share 10 recipes with friends",
            icon="mdi:heart",
            category=BadgeCategory.SOCIAL,
            rarity=BadgeRarity.UNCOMMON,
            points=75,
            requirement="Share 10 recipes",
            rule=ManualFlag(),
        ),
        BadgeDefinition(
            badge_id="seasonal_specialist",
            name="Seasonal Specialist",
            description="Complete all seasonal challenges in a year",
            icon="mdi:calendar",
            category=BadgeCategory.SEASONAL,
            rarity=BadgeRarity.LEGENDARY,
            points=500,
            requirement="Complete 4 seasonal challenges",
            rule=ManualFlag(),
        ),
        BadgeDefinition(
            badge_id="harvest_master",
            name="Harvest Master",
            description="Complete the October Harvest Festival challenge",
            icon="mdi:leaf",
            category=BadgeCategory.SEASONAL,
            rarity=BadgeRarity.RARE,
            points=100,
            requirement="Complete October challenge",
            rule=ChallengeCompletion("october_harvest_festival"),
        ),
    ]

    challenges = [
        Challenge(
            challenge_id="october_harvest_festival",
            name="October Harvest Festival",
            description=(
                "Celebrate autumn with seasonal recipes featuring pumpkins, "
                "apples, and warming spices"
            ),
            start_date=date(2025, 10, 1),
            end_date=date(2025, 10, 31),
            recipe_ids=("pad_thai", "quinoa_bowl"),
            reward_badge_id="harvest_master",
            participants=1247,
            is_active=True,
        ),
    ]

    const.LOGGER.debug(
        "DEBUG: Built default catalog: %s recipes, %s badges, %s challenges",
        len(recipes),
        len(badges),
        len(challenges),
    )
    return Catalog(recipes, badges, challenges, seed_badge_id=SEED_BADGE_ID)
