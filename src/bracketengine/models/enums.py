"""Enumerations shared by the bracket models."""

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

from enum import Enum
from typing import Union

from bracketengine import constants
from bracketengine.exceptions import UnsupportedFormatError


class FormatKind(str, Enum):
    """Closed set of supported tournament formats.

    Values are the ``tournamentType`` tags stored in bracket documents.
    """

    SINGLE_ELIMINATION = constants.SINGLE_ELIMINATION
    DOUBLE_ELIMINATION = constants.DOUBLE_ELIMINATION
    ROUND_ROBIN = constants.ROUND_ROBIN
    SWISS = constants.SWISS

    @classmethod
    def parse(cls, value: Union[str, "FormatKind"]) -> "FormatKind":
        """Resolve a tag or enum member, raising UnsupportedFormatError otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedFormatError(value) from None

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    def __str__(self) -> str:
        return self.value


class BracketSection(str, Enum):
    """Which part of a bracket a round belongs to."""

    MAIN = constants.BRACKET_MAIN
    WINNERS = constants.BRACKET_WINNERS
    LOSERS = constants.BRACKET_LOSERS
    GRAND_FINALS = constants.BRACKET_GRAND_FINALS

    def __str__(self) -> str:
        return self.value


class MatchStatus(str, Enum):
    SCHEDULED = constants.STATUS_SCHEDULED
    COMPLETED = constants.STATUS_COMPLETED

    def __str__(self) -> str:
        return self.value
