# Court Pairing
# Copyright (C) 2025  Court Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

# --- Constants ---
# Players per court (two teams of two)
PLAYERS_PER_COURT = 4

# Tournament formats
FORMAT_AMERICANO = "americano"
FORMAT_WINNERS_COURT = "winners-court"
SUPPORTED_FORMATS = (FORMAT_AMERICANO, FORMAT_WINNERS_COURT)
DEFAULT_FORMAT = FORMAT_WINNERS_COURT

# Display names for formats
FORMAT_NAMES = {
    FORMAT_AMERICANO: "Americano",
    FORMAT_WINNERS_COURT: "Winner's Court",
}

FORMAT_DESCRIPTIONS = {
    FORMAT_AMERICANO: (
        "Americano: Players rotate partners each round. Each player earns "
        "individual points based on their team's score."
    ),
    FORMAT_WINNERS_COURT: (
        "Winner's Court: Players move up and down courts based on performance. "
        "Court 1 is the prestigious Winners Court."
    ),
}

# Americano absorbs at most this many players beyond a full set of courts
AMERICANO_MAX_REST_SLOTS = 1

# Anti-repeat window (number of trailing rounds consulted)
DEFAULT_ANTI_REPEAT_WINDOW = 3

# Node budget for the Americano pairing search
AMERICANO_SEARCH_BUDGET = 20000

# Court role tags
ROLE_WINNERS_COURT = "winners-court"
TOP_COURT = 1

# Wildcard intensities
WILDCARD_LIGHT = "light"
WILDCARD_MEDIUM = "medium"
WILDCARD_CHAOTIC = "chaotic"
WILDCARD_INTENSITIES = (WILDCARD_LIGHT, WILDCARD_MEDIUM, WILDCARD_CHAOTIC)

# Share of players moved by each wildcard shuffle
WILDCARD_SHUFFLE_SHARE = {
    WILDCARD_LIGHT: 0.25,
    WILDCARD_MEDIUM: 0.5,
    WILDCARD_CHAOTIC: 1.0,
}

# Elo defaults (Winner's Court club settings)
DEFAULT_K_FACTOR = 20.0
DEFAULT_STARTING_ELO = 1000.0
DEFAULT_ELO_FLOOR = 0.0
DEFAULT_ELO_CEILING = 3000.0
DEFAULT_MAX_ELO_GAIN = 50.0
DEFAULT_MAX_ELO_LOSS = 50.0
DEFAULT_COURT_MODIFIERS = {ROLE_WINNERS_COURT: 1.25}
ELO_SCALE = 400.0

# Leaderboard points, Winner's Court
WC_BASE_WIN_POINTS = 3
WC_MARGIN_BONUS_THRESHOLD = 10
WC_MARGIN_BONUS_POINTS = 1
WC_MAX_POINTS_PER_MATCH = 5
WC_DEFEND_BONUS_POINTS = 1
WC_DEFEND_BONUS_START_ROUND = 5

# Leaderboard points, Americano
AM_BASE_WIN_POINTS = 2
AM_MARGIN_BONUS_THRESHOLD = 8
AM_MARGIN_BONUS_POINTS = 1
AM_MAX_POINTS_PER_MATCH = 4

# Standings sort keys
SORT_TOTAL_POINTS = "total_points"
SORT_GAMES_WON = "games_won"
SORT_GAME_DIFFERENCE = "game_difference"
SORT_GAMES_PLAYED = "games_played"
SORT_RATING = "rating"

DEFAULT_STANDINGS_ORDER = [
    SORT_TOTAL_POINTS,
    SORT_GAMES_WON,
    SORT_GAME_DIFFERENCE,
    SORT_GAMES_PLAYED,
    SORT_RATING,
]
