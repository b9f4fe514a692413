"""
Planning policy constants.

Thresholds, clamps and sentinels used by the velocity analyzer,
recommendation engine, health classifier and budget optimizer.
Kept in one place so the policy can be audited and tuned without
touching the calculations.
"""

# =============================================================================
# SALES HISTORY WINDOWS
# =============================================================================

# Default analysis window for velocity metrics (days)
DEFAULT_DAY_RANGE = 90

# Days in the "average daily sales" window
AVERAGE_WINDOW_DAYS = 30

# 30 days ÷ ~4.29 weeks (approximation, not a calendar week count)
WEEKS_PER_30_DAYS = 4.29


# =============================================================================
# TREND / SEASONALITY / GROWTH
# =============================================================================

# Recent 15 days compared against the 15 days before them
TREND_WINDOW_DAYS = 15
TREND_INCREASING_RATIO = 1.2
TREND_DECREASING_RATIO = 0.8

# Seasonality: recent-15-day average vs. full-period average
SEASONALITY_MIN_HISTORY_DAYS = 30
SEASONALITY_MIN = 0.5
SEASONALITY_MAX = 2.0

# Growth: most recent 30 days vs. the prior 30 days
GROWTH_WINDOW_DAYS = 30
GROWTH_MIN_HISTORY_DAYS = 60
GROWTH_MIN = 0.7
GROWTH_MAX = 1.5


# =============================================================================
# RECOMMENDATION ENGINE
# =============================================================================

# Coverage reported when there are no sales (one-year horizon)
NO_SALES_COVERAGE_DAYS = 365

# Stock above recommended level × this is flagged as excess
EXCESS_LEVEL_MULTIPLIER = 1.5

# Confidence = BASE + (1 - BASE) × data_points_factor × variance_factor
CONFIDENCE_BASE = 0.3
CONFIDENCE_FULL_HISTORY_DAYS = 60


# =============================================================================
# HEALTH CLASSIFIER
# =============================================================================

# Coverage below this many days → LOW
LOW_COVERAGE_DAYS = 15

# Coverage above this many days → EXCESS
EXCESS_COVERAGE_DAYS = 120

# Target stock used to size excess units
EXCESS_TARGET_DAYS = 90

# Inventory older than this → OVERAGED
OVERAGED_AGE_DAYS = 365

# Inventory older than this is at risk of long-term storage fees (9 months)
LTSF_RISK_AGE_DAYS = 270

# Storage rate per unit per month
MONTHLY_STORAGE_FEE_PER_UNIT = 0.75


# =============================================================================
# BUDGET OPTIMIZER
# =============================================================================

# Unit cost assumed when an item's cost is unknown
UNKNOWN_UNIT_COST = 10.0

# Priority order for risk levels (lower sorts first)
RISK_PRIORITY = {"high": 0, "medium": 1, "low": 2}


# =============================================================================
# FBA FEE ESTIMATOR
# =============================================================================

FULFILLMENT_FEE_PER_UNIT = 3.5
LONG_TERM_STORAGE_FEE_PER_UNIT = 1.5
LONG_TERM_STORAGE_AGE_DAYS = 365
REFERRAL_FEE_PERCENT = 0.15

# Daily sales assumed when an item has no history at all
FEE_NO_HISTORY_DAILY_SALES = 0.1

# Storage days are capped at one year
MAX_STORAGE_DAYS = 365
