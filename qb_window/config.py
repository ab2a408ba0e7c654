"""
Project-wide configuration constants.
"""

# League season
CURRENT_YEAR = 2025

# NFL financial references (whole dollars)
CURRENT_CAP = 279_200_000
CAP_GROWTH_RATE = 0.085

# QB cap-hit percentage thresholds
DANGER_THRESHOLD = 13
CLOSED_THRESHOLD = 16

# Non-QB surplus only counts above this amount
SURPLUS_SIGNIFICANCE = 5_000_000

# Base salary kept back when estimating restructure room
MIN_RESERVED_SALARY = 1_500_000

MAX_ALERTS = 12
DEFAULT_QB_AGE = 27
