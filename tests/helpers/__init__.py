"""Test helpers for Gourmet Muse integration tests.

This module re-exports all helpers for convenient imports:

    from tests.helpers import (
        # Catalog builders
        make_recipe, make_badge, make_challenge, make_catalog,

        # Setup
        setup_integration, SetupResult,
    )

See individual modules for full documentation:
- builders.py: Minimal catalog definitions for pure engine tests
- setup.py: Config entry setup returning the live coordinator
"""

from tests.helpers.builders import (
    SEED_ID,
    make_badge,
    make_catalog,
    make_challenge,
    make_recipe,
    make_state,
)
from tests.helpers.setup import (
    MANAGER_MODULE,
    SetupResult,
    setup_integration,
    stored_progress,
    write_stored_progress,
)

__all__ = [
    "MANAGER_MODULE",
    "SEED_ID",
    "SetupResult",
    "make_badge",
    "make_catalog",
    "make_challenge",
    "make_recipe",
    "make_state",
    "setup_integration",
    "stored_progress",
    "write_stored_progress",
]
