"""
Configuration constants.

Centralizes the tunable values of a play session that are not combat rules
(those live in :mod:`abattler.constants.combat`). Organized by functional area.
"""

from abattler.types import RandomSeed

# =============================================================================
# GENERAL
# =============================================================================

# None: derive the master seed from the clock once at process start.
# Set to an int or str for a reproducible run (also available as --seed).
RANDOM_SEED: RandomSeed = None

# Default log level for the stderr handler configured in __main__.
LOG_LEVEL = "WARNING"

# =============================================================================
# HERO SETUP
# =============================================================================

HERO_BASE_HP = 30.0
HERO_BASE_ATTACK = 5.0

# XP granted right after the hero is created, before the first encounter.
STARTING_XP = 300.0

# =============================================================================
# BLOCK CHALLENGE
# =============================================================================

# Seconds the player has to answer the arithmetic problem while blocking.
BLOCK_TIME_LIMIT = 5.0

# How often the console is checked for a typed answer, in seconds.
ANSWER_POLL_INTERVAL = 0.1

# =============================================================================
# PRESENTATION
# =============================================================================

# Pause after each narrated action so the player can read the outcome.
ACTION_PAUSE_MS = 1000

# Emit 24-bit ANSI color codes for narration.
COLOR_OUTPUT_ENABLED = True

# Number of narration lines kept visible under the battle panel.
MESSAGE_LOG_VISIBLE_LINES = 12

# Width of the separator rules drawn around the battle panel.
PANEL_WIDTH = 50
