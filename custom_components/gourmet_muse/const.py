# File: const.py
"""Constants for the Gourmet Muse integration.

This file centralizes storage keys, engine tuning values, service and field
names, event names and log/error messages for consistency across the
integration.
"""

import logging

from homeassistant.const import Platform

# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
GOURMET_MUSE_TITLE = "Gourmet Muse"

# Integration Domain
DOMAIN = "gourmet_muse"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.SENSOR,
]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Storage and Versioning
STORAGE_MANAGER = "storage_manager"
STORAGE_KEY = "gourmet_muse_progress"
STORAGE_VERSION = 1

# Write attempts per payload before the failure is logged and dropped
PERSIST_MAX_ATTEMPTS = 3

# ------------------------------------------------------------------------------------------------
# Progression Rules
# ------------------------------------------------------------------------------------------------
BASE_RECIPE_POINTS = 10
POINTS_PER_LEVEL = 100
MIN_LEVEL = 1

# Badge categories
BADGE_CATEGORY_COOKING = "cooking"
BADGE_CATEGORY_EXPLORATION = "exploration"
BADGE_CATEGORY_SOCIAL = "social"
BADGE_CATEGORY_ACHIEVEMENT = "achievement"
BADGE_CATEGORY_SEASONAL = "seasonal"

# Badge rarities and their point multipliers
BADGE_RARITY_COMMON = "common"
BADGE_RARITY_UNCOMMON = "uncommon"
BADGE_RARITY_RARE = "rare"
BADGE_RARITY_EPIC = "epic"
BADGE_RARITY_LEGENDARY = "legendary"

RARITY_MULTIPLIERS: dict[str, float] = {
    BADGE_RARITY_COMMON: 1.0,
    BADGE_RARITY_UNCOMMON: 1.5,
    BADGE_RARITY_RARE: 2.0,
    BADGE_RARITY_EPIC: 3.0,
    BADGE_RARITY_LEGENDARY: 5.0,
}

# Unlock rule types (serialized "type" tag)
RULE_TYPE_COUNT_THRESHOLD = "count_threshold"
RULE_TYPE_DISTINCT_CUISINE_THRESHOLD = "distinct_cuisine_threshold"
RULE_TYPE_CHALLENGE_COMPLETION = "challenge_completion"
RULE_TYPE_MANUAL_FLAG = "manual_flag"

RULE_FIELD_TYPE = "type"
RULE_FIELD_THRESHOLD = "threshold"
RULE_FIELD_CHALLENGE_ID = "challenge_id"

# ------------------------------------------------------------------------------------------------
# Persistence Layout
# ------------------------------------------------------------------------------------------------
DATA_UNLOCKED_BADGES = "progress.unlockedBadges"
DATA_COMPLETED_RECIPES = "progress.completedRecipes"
DATA_POINTS = "progress.points"
DATA_LEVEL = "progress.level"
DATA_ACTIVE_CHALLENGE = "progress.activeChallenge"

# Unlocked badge entry fields
DATA_BADGE_ID = "badge_id"
DATA_BADGE_UNLOCKED_AT = "unlocked_at"
DATA_BADGE_DEFINITION = "definition"

# Badge definition snapshot fields
DATA_BADGE_NAME = "name"
DATA_BADGE_DESCRIPTION = "description"
DATA_BADGE_ICON = "icon"
DATA_BADGE_CATEGORY = "category"
DATA_BADGE_RARITY = "rarity"
DATA_BADGE_POINTS = "points"
DATA_BADGE_REQUIREMENT = "requirement"
DATA_BADGE_RULE = "rule"

# ------------------------------------------------------------------------------------------------
# Snapshot / Attribute Keys
# ------------------------------------------------------------------------------------------------
ATTR_COMPLETED_RECIPES = "completed_recipes"
ATTR_UNLOCKED_BADGES = "unlocked_badges"
ATTR_LOCKED_BADGES = "locked_badges"
ATTR_POINTS = "points"
ATTR_LEVEL = "level"
ATTR_ACTIVE_CHALLENGE = "active_challenge"
ATTR_DISTINCT_CUISINES = "distinct_cuisines"
ATTR_LEVEL_PROGRESS = "level_progress"
ATTR_POINTS_TO_NEXT_LEVEL = "points_to_next_level"
ATTR_CHALLENGE_ID = "challenge_id"
ATTR_CHALLENGE_PROGRESS = "progress"
ATTR_CHALLENGE_COMPLETED = "completed"
ATTR_CHALLENGE_DAYS_REMAINING = "days_remaining"
ATTR_CHALLENGE_TIME_PROGRESS = "time_progress"
ATTR_POINTS_AWARDED = "points_awarded"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_COMPLETE_RECIPE = "complete_recipe"
SERVICE_UNLOCK_BADGE = "unlock_badge"
SERVICE_JOIN_CHALLENGE = "join_challenge"
SERVICE_LEAVE_CHALLENGE = "leave_challenge"
SERVICE_RESET_PROGRESS = "reset_progress"
SERVICE_GET_PROGRESS = "get_progress"
SERVICE_GET_CHALLENGE_PROGRESS = "get_challenge_progress"

FIELD_RECIPE_ID = "recipe_id"
FIELD_BADGE_ID = "badge_id"
FIELD_CHALLENGE_ID = "challenge_id"

# ------------------------------------------------------------------------------------------------
# Events
# ------------------------------------------------------------------------------------------------
EVENT_BADGE_UNLOCKED = f"{DOMAIN}_badge_unlocked"

# ------------------------------------------------------------------------------------------------
# Sensors
# ------------------------------------------------------------------------------------------------
SENSOR_KEY_POINTS = "points"
SENSOR_KEY_LEVEL = "level"
SENSOR_KEY_BADGES = "badges"

DEFAULT_POINTS_ICON = "mdi:star-four-points"
DEFAULT_LEVEL_ICON = "mdi:chef-hat"
DEFAULT_BADGES_ICON = "mdi:trophy-award"

# ------------------------------------------------------------------------------------------------
# Messages
# ------------------------------------------------------------------------------------------------
ERROR_RECIPE_NOT_FOUND_FMT = "Recipe '{}' not found"
ERROR_BADGE_NOT_FOUND_FMT = "Badge '{}' not found"
ERROR_CHALLENGE_NOT_FOUND_FMT = "Challenge '{}' not found"
MSG_NO_ENTRY_FOUND = "No Gourmet Muse entry found"

TRANS_KEY_ERROR_SINGLE_INSTANCE = "single_instance_allowed"
