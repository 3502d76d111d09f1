"""
#WHERE
    Imported by the directive compiler, validator, layout generator,
    motion evaluator, centerpiece solver and session. Single source of
    truth for clamp ranges, field defaults and animation rates.

#WHAT
    Centralised constants used across 3+ modules.  Edit here, not in
    individual module files.

#INPUT / #OUTPUT
    Pure constants, no I/O.
"""

# ── Plan clamp ranges ────────────────────────────────────────────────────

COUNT_RANGE:     tuple[int, int]     = (1, 200)
SIZE_RANGE:      tuple[float, float] = (0.02, 0.4)    # metres
RADIUS_RANGE:    tuple[float, float] = (0.2, 5.0)     # metres
METALNESS_RANGE: tuple[float, float] = (0.0, 1.0)
ROUGHNESS_RANGE: tuple[float, float] = (0.0, 1.0)

MAX_DIRECTIVE_COUNT: int = COUNT_RANGE[1]

# ── Field defaults (applied by the validator when a field is missing) ─────

DEFAULT_COUNT:     int   = 1
DEFAULT_COLOR:     str   = "#9cf"
DEFAULT_MATERIAL:  str   = "standard"
DEFAULT_SIZE:      float = 0.06
DEFAULT_METALNESS: float = 0.2
DEFAULT_ROUGHNESS: float = 0.7
DEFAULT_MOTION:    str   = "none"
DEFAULT_RADIUS:    float = 1.2

# ── Layout ───────────────────────────────────────────────────────────────

SEED_STRIDE: int = 13
SEED_OFFSET: int = 7

HASH_FREQUENCY: float = 12.9898
HEIGHT_SPAN:    float = 0.6     # metres between lowest and highest instance
HEIGHT_FLOOR:   float = 0.2

SPEED_BASE:     float = 0.4
SPEED_STEP:     float = 0.03
SPEED_PERIOD:   int   = 7

RADIUS_JITTER_BASE:   float = 0.9
RADIUS_JITTER_STEP:   float = 0.02
RADIUS_JITTER_PERIOD: int   = 5

# ── Motion ───────────────────────────────────────────────────────────────

ORBIT_ANGULAR_RATE: float = 0.00015  # rad per (speed_factor · ms)
ORBIT_SPIN_RATE:    float = 0.5      # rad/s about Y
FLOAT_BOB_RATE:     float = 0.001    # rad per ms
FLOAT_BOB_AMPLITUDE: float = 0.1     # metres
FLOAT_SPIN_RATE_X:  float = 0.3      # rad/s
FLOAT_SPIN_RATE_Y:  float = 0.2      # rad/s

# ── Centerpiece ──────────────────────────────────────────────────────────

CENTERPIECE_ASSET:  str   = "/models/toranomon.glb"
MARKER_TARGET:      str   = "/targets/marker.zpt"
WEB_TOWER_HEIGHT:   float = 1.2     # metres on screen
AR_TOWER_HEIGHT:    float = 0.665   # 1/400 model of a 266 m tower
PLACEHOLDER_FOOTPRINT: float = 0.2
PLACEHOLDER_COLOR:  str   = "#999"

DEFAULT_DIRECTIVE: str = "20 red spheres orbit, 5 gold torus, add 10 blue boxes floating"
