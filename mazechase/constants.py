from __future__ import annotations

# ==============================================================================
# Sentinels
# ==============================================================================

# Position value for "no such node" / "not observed".
UNKNOWN_POSITION = -1

# Tick value for "never observed".
UNKNOWN_TICK = -1

# ==============================================================================
# Agent Roster
# ==============================================================================

# The evader (Ms Pac-Man) has a single, fixed id.
EVADER_ID = "evader"

# Pursuers (ghosts) are named pursuer_0 .. pursuer_{N-1}.
PURSUER_PREFIX = "pursuer"
NUM_PURSUERS = 4

# ==============================================================================
# Game Rules (reference maze)
# ==============================================================================

# Lives the evader starts a match with
INITIAL_LIVES = 3

# Ticks a pursuer stays edible after the evader eats a power pill
EDIBLE_TIME = 40

# Points awarded to the evader
PILL_SCORE = 10
POWER_PILL_SCORE = 50
PURSUER_EATEN_SCORE = 200

# Match ends once this many levels have been cleared
MAX_LEVELS = 4

# Path distance within which a pursuer directly sees the evader
SENSOR_RANGE = 8

# Ticks during which belief is always cleared at the start of a level
LEVEL_START_TICKS = 2

# ==============================================================================
# Decision Defaults
# ==============================================================================

# Belief staleness for an individual pursuer and for a whole team
TICK_THRESHOLD = 5
TEAM_TICK_THRESHOLD = 50

# If the evader is this close to an available power pill, back away
PILL_PROXIMITY = 15


def pursuer_id(index: int) -> str:
    return f"{PURSUER_PREFIX}_{index}"
