# Copyright (C) 2025 Richard Owen
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
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Team domain model."""
from enum import Enum


class Team(Enum):
    """The two sides of a match.

    ``HOME`` attacks towards increasing x and defends the goal line at ``x = 0``;
    ``AWAY`` attacks towards decreasing x and defends the goal line at
    ``x = pitch width``.
    """

    HOME = "home"
    AWAY = "away"

    @property
    def opponent(self) -> "Team":
        """Return the other side."""
        return Team.AWAY if self is Team.HOME else Team.HOME

    @property
    def attack_direction(self) -> int:
        """Return ``+1`` when attacking increasing x, ``-1`` otherwise."""
        return 1 if self is Team.HOME else -1

    @property
    def label(self) -> str:
        """Return the display name used by scoreboards and logs."""
        return TEAM_NAMES[self]

    @property
    def id_prefix(self) -> str:
        """Return the prefix of generated player identifiers."""
        return "h" if self is Team.HOME else "a"


TEAM_NAMES = {
    Team.HOME: "Manchester United",
    Team.AWAY: "Manchester City",
}
