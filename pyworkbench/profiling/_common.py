"""
Shared constants for column profiling.
"""

NUMERIC = "numeric"
TEXT = "text"
COLUMN_TYPES = (NUMERIC, TEXT)

# Compared case-insensitively after trimming
PLACEHOLDER_VALUES = frozenset({"-", "n/a", "na", "null", "undefined", "nan"})

MAX_COLUMN_SAMPLES = 5
TEXT_FREQUENCY_TRACK_LIMIT = 50
TOP_TEXT_VALUES = 5

NUMERIC_OUTLIER_SIGMA = 3.0
DOMINANT_TEXT_RATIO = 0.95
DOMINANT_TEXT_MIN_COUNT = 5

MAX_CORRELATION_SAMPLES = 2000
MAX_CORRELATION_COLUMNS = 30
