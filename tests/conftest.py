"""Shared fixtures for Gourmet Muse tests."""

from typing import Any

import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.gourmet_muse.catalog import Catalog
from custom_components.gourmet_muse.const import DOMAIN, GOURMET_MUSE_TITLE
from custom_components.gourmet_muse.models import (
    ChallengeCompletion,
    CountThreshold,
    DistinctCuisineThreshold,
)
from tests.helpers import make_badge, make_catalog, make_challenge, make_recipe

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a mock config entry."""
    return MockConfigEntry(
        domain=DOMAIN,
        title=GOURMET_MUSE_TITLE,
        data={},
        entry_id="test_entry_id",
        unique_id="test_unique_id",
    )


@pytest.fixture
def small_catalog() -> Catalog:
    """Catalog with six cuisines, count/cuisine/challenge/manual badges."""
    recipes = [
        make_recipe("r1", "Thai"),
        make_recipe("r2", "Italian"),
        make_recipe("r3", "Mexican"),
        make_recipe("r4", "Indian"),
        make_recipe("r5", "French"),
        make_recipe("r6", "Japanese"),
        make_recipe("r7", "Thai"),
    ]
    badges = [
        make_badge("first_steps", CountThreshold(1), points=10),
        make_badge("explorer", DistinctCuisineThreshold(5), points=50),
        make_badge("duo", ChallengeCompletion("duo_challenge"), points=20),
        make_badge("sharer", points=75),
    ]
    challenges = [
        make_challenge("duo_challenge", ("r1", "r2"), reward_badge_id="duo"),
        make_challenge("empty_challenge", ()),
    ]
    return make_catalog(recipes, badges, challenges)
