"""Engine configuration."""

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

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from bracketengine.constants import DEFAULT_MIN_PARTICIPANTS, MIN_PARTICIPANTS
from bracketengine.exceptions import ConfigurationError
from bracketengine.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class BracketConfig:
    """Configuration settings for bracket generation and advancement.

    Attributes
    ----------
    min_participants : int
        Roster size below which generation fails. Never lower than 2.
    swiss_seed : int or None
        Seed for the Swiss first-round shuffle. ``None`` draws from system
        entropy, so round 1 is not reproducible.
    swiss_avoid_rematches : bool
        Pair each participant with the first lower-ranked participant they
        have not met yet. ``False`` pairs strictly adjacent standings.
    """

    min_participants: int = DEFAULT_MIN_PARTICIPANTS
    swiss_seed: Optional[int] = None
    swiss_avoid_rematches: bool = True

    def validate(self) -> None:
        """Raise ConfigurationError on invalid values."""
        if not isinstance(self.min_participants, int) or isinstance(
            self.min_participants, bool
        ):
            raise ConfigurationError(
                f"min_participants must be an integer, got {self.min_participants!r}"
            )
        if self.min_participants < 0:
            raise ConfigurationError(
                f"min_participants must not be negative, got {self.min_participants}"
            )
        if self.swiss_seed is not None and not isinstance(self.swiss_seed, int):
            raise ConfigurationError(
                f"swiss_seed must be an integer or null, got {self.swiss_seed!r}"
            )

    @property
    def effective_min_participants(self) -> int:
        return max(self.min_participants, MIN_PARTICIPANTS)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "min_participants": self.min_participants,
            "swiss_seed": self.swiss_seed,
            "swiss_avoid_rematches": self.swiss_avoid_rematches,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BracketConfig":
        """Deserialize configuration from dictionary."""
        config = cls(
            min_participants=data.get("min_participants", DEFAULT_MIN_PARTICIPANTS),
            swiss_seed=data.get("swiss_seed"),
            swiss_avoid_rematches=data.get("swiss_avoid_rematches", True),
        )
        config.validate()
        return config


def load_config(config_file: Union[str, Path, None]) -> BracketConfig:
    """Load configuration from a JSON file.

    Args:
        config_file: Path to configuration file, or None for defaults

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    if not config_file:
        return BracketConfig()

    config_path = Path(config_file)
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_file}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Failed to load configuration: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must contain a JSON object")

    logger.info("Loaded configuration from: %s", config_file)
    return BracketConfig.from_dict(data)
