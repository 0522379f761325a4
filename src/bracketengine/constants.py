# Bracket Engine
# Copyright (C) 2025  Bracket Engine developers
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
SAVE_FILE_EXTENSION = ".json"

# Tournament type tags (wire values of FormatKind)
SINGLE_ELIMINATION = "single_elimination"
DOUBLE_ELIMINATION = "double_elimination"
ROUND_ROBIN = "round_robin"
SWISS = "swiss"

# Match status values
STATUS_SCHEDULED = "scheduled"
STATUS_COMPLETED = "completed"

# Bracket sections
BRACKET_MAIN = "main"
BRACKET_WINNERS = "winners"
BRACKET_LOSERS = "losers"
BRACKET_GRAND_FINALS = "grand_finals"

# Every format needs at least a single match
MIN_PARTICIPANTS = 2
DEFAULT_MIN_PARTICIPANTS = 2

# Standings points
WIN_POINTS = 1.0
DRAW_POINTS = 0.5
LOSS_POINTS = 0.0
BYE_POINTS = WIN_POINTS

# Double elimination: second loss eliminates
MAX_LOSSES = 2

# Match ids
MATCH_ID_TEMPLATE = "round{round}_match{match}"
WINNERS_MATCH_ID_TEMPLATE = "winners_round{round}_match{match}"
LOSERS_MATCH_ID_TEMPLATE = "losers_round{round}_match{match}"
GRAND_FINALS_MATCH1 = "grand_finals_match1"
GRAND_FINALS_MATCH2 = "grand_finals_match2"

# Round display names
ROUND_NAME_TEMPLATE = "Round {round}"
FINALS_NAME = "Finals"
WINNERS_ROUND_NAME_TEMPLATE = "Winners Round {round}"
LOSERS_ROUND_NAME_TEMPLATE = "Losers Round {round}"
GRAND_FINALS_NAME = "Grand Finals"

# Logging
LOG_LEVEL_ENV_VAR = "BRACKETENGINE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
