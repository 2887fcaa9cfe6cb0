"""
Game constants - all magic numbers in one place.
NO UI DEPENDENCIES.
"""

# =============================================================================
# SCREEN / LANE (pixels)
# =============================================================================
SCREEN_WIDTH = 900
SCREEN_HEIGHT = 800

ZONE_WIDTH = 200              # each disposal zone is a full-height side strip
LANE_LEFT = ZONE_WIDTH
LANE_RIGHT = SCREEN_WIDTH - ZONE_WIDTH

NEWSPAPER_WIDTH = 300
NEWSPAPER_HEIGHT = 400

# =============================================================================
# MOTION
# =============================================================================
GAME_SPEED = 2                # pixels per tick, newspapers and belt alike
TICKS_PER_SECOND = 60         # nominal frame rate the speed is tuned for
BELT_PAUSE_TRIGGER_Y = 200    # top edge at or above this = centered for reading
BELT_SEGMENT_SPACING = 40     # belt animation offset wraps at this

# =============================================================================
# PLACEMENT
# =============================================================================
PLACEMENT_ATTEMPTS = 10
PLACEMENT_JITTER = 20         # +/- pixels around the lane center

# =============================================================================
# TIMING (all in seconds)
# =============================================================================
SPAWN_INTERVAL_START = 7.0
SPAWN_INTERVAL_DECREMENT = 0.05
SPAWN_INTERVAL_FLOOR = 1.0
EMPTY_LANE_GRACE = 0.5

BELT_PAUSE_DURATION = 4.0
SUCCESS_FLASH_DURATION = 0.75

# =============================================================================
# SCORING
# =============================================================================
MAX_FAILS = 3
