"""Unified constants for trf-hos-finder.

Default thresholds live here so the config layer, the matcher and the
classifier agree on them.
"""

# ================== Matching Thresholds ==================
# Max difference (nt) between start coordinates, and between end
# coordinates, for two repeats to count as covering the same span
DEFAULT_OFFSET: int = 10

# Fractional part of the length ratio must be below FRAC_LOW or above
# FRAC_HIGH for the ratio to count as "close to a whole multiple"
DEFAULT_FRAC_LOW: float = 0.15
DEFAULT_FRAC_HIGH: float = 0.85

# Longer unit must be more than this many times the shorter one
DEFAULT_MIN_RATIO: float = 1.5

# Which .dat column supplies the unit length
LENGTH_SOURCES = ("period", "consensus_size")
DEFAULT_LENGTH_SOURCE: str = "period"


# ================== Classification Thresholds ==================
# Longer repeat's score must exceed shorter repeat's score by this factor
DEFAULT_SCORE_THRESHOLD: float = 1.15

# Longer repeat's %identity must exceed shorter repeat's by this many points
DEFAULT_IDENTITY_THRESHOLD: float = 5


# ================== Report Constants ==================
FLAG_NONE = ""
FLAG_WEAK = "hos"
FLAG_STRONG = "HOS"
FLAG_UNRESOLVED = "???"

REPORT_COLUMNS = [
    "ID",
    "LEVEL",
    "START",
    "END",
    "LENGTH",
    "COPIES",
    "SCORE",
    "%IDENT",
    "HOS?",
    "SEQ_ID",
]
