"""Constants and reference tables for the FPLive scoring engine."""

# Element type (role) ids as used by the FPL bootstrap data
GOALKEEPER = 1
DEFENDER = 2
MIDFIELDER = 3
FORWARD = 4

# Default role table: (singular name, short name, squad select, min play, max play)
DEFAULT_ELEMENT_TYPES = {
    GOALKEEPER: ('Goalkeeper', 'GKP', 2, 1, 1),
    DEFENDER: ('Defender', 'DEF', 5, 3, 5),
    MIDFIELDER: ('Midfielder', 'MID', 5, 2, 5),
    FORWARD: ('Forward', 'FWD', 3, 1, 3),
}

# Roles missing from the reference data are treated as midfielders
FALLBACK_ELEMENT_TYPE = MIDFIELDER

# Squad shape
SQUAD_SIZE = 15
STARTING_XI_SIZE = 11
BENCH_POSITIONS = (12, 13, 14, 15)

# Fixture lifecycle states
NOT_STARTED = 'not_started'
LIVE = 'live'
FINISHED = 'finished'
# Ordered from least to most advanced
FIXTURE_STATES = (NOT_STARTED, LIVE, FINISHED)

# Bonus from the bonus points system is only trusted after this many minutes
BONUS_RELIABLE_MINUTES = 60

DEFAULT_CAPTAIN_MULTIPLIER = 2

FPL_BASE_URL = 'https://fantasy.premierleague.com/api'
