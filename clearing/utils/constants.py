"""Game configuration constants."""

# Board geometry
HAND_SPAN = 150  # Base strike range and base movement range
CLEARING_RADIUS = 300  # Inner Zone radius
BORDERLANDS_WIDTH = HAND_SPAN  # Outer Band width, measured outward from the clearing
BOARD_CENTER = (450.0, 450.0)  # 900x900 play surface

# Pieces
HUNTER_RADIUS = 15
HUNTER_PARTY = ("scout", "veteran", "medic", "standard", "standard")

# Difficulty tiers scale the evader radius by the total hunter footprint
DIFFICULTY_LEVELS = {
    1: {"name": "Beginner", "multiplier": 0.2},
    2: {"name": "Easy", "multiplier": 0.4},
    3: {"name": "Normal", "multiplier": 0.6},
    4: {"name": "Hard", "multiplier": 0.8},
    5: {"name": "Expert", "multiplier": 1.0},
}
DEFAULT_DIFFICULTY = 2  # 5 * 15 * 0.4 = 30

# Reach tiers scale the evader strike/movement range
REACH_LEVELS = {
    1: {"name": "Short", "multiplier": 0.8},
    2: {"name": "Standard", "multiplier": 1.0},
    3: {"name": "Long", "multiplier": 1.25},
}
DEFAULT_REACH = 2

# Hunter specializations
HUNTER_SPECIALS = {
    "scout": {
        "move_multiplier": 1.5,
        "symbol": "S",
        "camping_tolerance": 2,
        "can_act_after_being_rescued": True,
    },
    "veteran": {"move_multiplier": 1.0, "symbol": "V", "immune_to_camping": True},
    "medic": {
        "move_multiplier": 1.0,
        "symbol": "M",
        "rescue_range": 50,
        "can_act_after_rescuing": True,
    },
    "standard": {"move_multiplier": 1.0, "symbol": ""},
}
DEFAULT_CAMPING_TOLERANCE = 3

# Rules
EQUIDISTANT_TOLERANCE = 1.0  # Distance ties closer than this are a choice point
HISTORY_CAPACITY = 3  # Turn-end snapshots kept for the camping check

# Timing (milliseconds on the caller's clock)
MOVE_DURATION_MS = 300
AI_THINK_DELAY_MS = 800

# Evader planner
AI_SAMPLES = 12
AI_CENTER_BIAS = 0.1
AI_JITTER = 0.05
