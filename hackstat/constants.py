"""
Constants for the individual rating formulas.

Coefficients follow Dean Oliver's individual offensive and defensive
rating method. Blend weights for the on-court overlay live in config.py
because they are tuning values rather than part of the method.
"""


# =============================================================================
# NUMERIC GUARDS
# =============================================================================

# Possession / stop denominators at or below this are "no sample", not zero
EPS = 1e-9


# =============================================================================
# TEAM MINUTES
# =============================================================================

PLAYERS_ON_COURT = 5
DEFAULT_GAME_MINUTES = 40.0   # regulation length when secondsPlayed is missing
MIN_TEAM_MINUTES = 200.0      # 5 players x 40 minutes floor per game


# =============================================================================
# POSSESSION MODEL
# =============================================================================

# Share of free-throw trips that end a possession
FT_TRIP_WEIGHT = 0.4

# Share of FTA that consume a possession in the team possession estimate
FTA_POSSESSION_WEIGHT = 0.44

# Discount on missed shots / blocks recovered by the offense
OREB_RECOVERY_FACTOR = 1.07


# =============================================================================
# INDIVIDUAL OFFENSE
# =============================================================================

# Minutes-share scaling of teammate assists in qAst
QAST_MINUTES_SCALE = 1.14

# Half of an assisted basket is credited to the passer
ASSIST_CREDIT_SHARE = 0.5


# =============================================================================
# INDIVIDUAL DEFENSE
# =============================================================================

# Fraction of the gap between individual and team defense applied
DEF_RATING_INDIVIDUAL_WEIGHT = 0.2

PER_100 = 100.0
