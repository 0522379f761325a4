"""Tournament formats.

Each format implements :class:`~bracketengine.formats.base.TournamentFormat`.
"""

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

from bracketengine.formats.base import TournamentFormat
from bracketengine.formats.double_elimination import DoubleEliminationFormat
from bracketengine.formats.round_robin import RoundRobinFormat
from bracketengine.formats.single_elimination import SingleEliminationFormat
from bracketengine.formats.swiss import SwissFormat

__all__ = [
    "TournamentFormat",
    "SingleEliminationFormat",
    "DoubleEliminationFormat",
    "RoundRobinFormat",
    "SwissFormat",
]
