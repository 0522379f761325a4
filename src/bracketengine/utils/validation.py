"""Validation utilities for Bracket Engine.

This module provides reusable roster validation with consistent error handling.
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

from typing import List, Optional, Sequence

from bracketengine.constants import MIN_PARTICIPANTS
from bracketengine.exceptions import ValidationError
from bracketengine.models.participant import Participant


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
    """

    def __init__(self, is_valid: bool, error_message: Optional[str] = None):
        self.is_valid = is_valid
        self.error_message = error_message

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return "ValidationResult(VALID)"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Roster Validation ==========


def validate_participant_count(count: int, min_participants: int) -> ValidationResult:
    """Check the roster is large enough.

    The effective minimum is never below two: every format needs at least
    one match.

    Example:
        >>> bool(validate_participant_count(3, 4))
        False
    """
    required = max(min_participants, MIN_PARTICIPANTS)
    if count < required:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Need at least {required} participants. Currently have {count}."
            ),
        )
    return ValidationResult(is_valid=True)


def validate_unique_ids(participants: Sequence[Participant]) -> ValidationResult:
    """Participant ids must be non-empty and unique within a bracket."""
    seen = set()
    duplicates: List[str] = []
    for participant in participants:
        if not participant.id or not str(participant.id).strip():
            return ValidationResult(
                is_valid=False, error_message="Participant id must not be empty"
            )
        if participant.id in seen:
            duplicates.append(participant.id)
        seen.add(participant.id)
    if duplicates:
        return ValidationResult(
            is_valid=False,
            error_message=f"Duplicate participant ids: {', '.join(duplicates)}",
        )
    return ValidationResult(is_valid=True)


def validate_roster(
    participants: Sequence[Participant], min_participants: int
) -> ValidationResult:
    """Run every roster check, returning the first failure."""
    result = validate_participant_count(len(participants), min_participants)
    if not result:
        return result
    return validate_unique_ids(participants)


def validate_roster_strict(
    participants: Sequence[Participant], min_participants: int
) -> None:
    """Validate a roster and raise if invalid.

    Raises:
        ValidationError: If the roster cannot produce a bracket
    """
    result = validate_roster(participants, min_participants)
    if not result.is_valid:
        raise ValidationError(result.error_message)
