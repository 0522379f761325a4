"""Exceptions for use in Bracket Engine"""

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


# ========== Base Application Exception ==========


class BracketEngineError(Exception):
    """Base exception for all Bracket Engine errors.

    All custom exceptions in the engine inherit from this class.
    This enables catching all engine-specific errors with a single except clause.
    """

    pass


# ========== Validation Exceptions ==========


class ValidationError(BracketEngineError):
    """Raised when a participant roster cannot produce a bracket.

    Covers too few participants, duplicate or empty ids and malformed
    roster rows. Not retryable until the roster changes.
    """

    pass


# ========== Format Exceptions ==========


class UnsupportedFormatError(BracketEngineError):
    """Raised when a tournament type is routed to a format that doesn't implement it."""

    def __init__(self, tournament_type: object, expected: object = None):
        self.tournament_type = tournament_type
        self.expected = expected
        if expected is None:
            message = f"Unsupported tournament type: {tournament_type}"
        else:
            message = (
                f"Unsupported tournament type for {expected}: {tournament_type}"
            )
        super().__init__(message)


# ========== Match Exceptions ==========


class MatchException(BracketEngineError):
    """Base exception for match-level errors."""

    pass


class MatchNotFoundError(MatchException):
    """Raised when a match reference does not resolve inside a bracket document."""

    def __init__(self, match_id: str, detail: str = ""):
        self.match_id = match_id
        message = f"Match not found: {match_id}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InvalidResultError(MatchException):
    """Raised when a reported result does not fit the match (e.g. winner not playing)."""

    pass


class MatchAlreadyCompletedError(MatchException):
    """Raised when attempting to complete a match that already has a winner."""

    pass


class MatchNotReadyError(MatchException):
    """Raised when a bye is advanced on a match that may still receive a player."""

    pass


# ========== Tournament Exceptions ==========


class TournamentCompleteError(BracketEngineError):
    """Raised when a result is reported after the tournament has a winner."""

    pass


# ========== Storage Exceptions ==========


class StorageError(BracketEngineError):
    """Base exception for bracket document storage errors."""

    pass


class DocumentNotFoundError(StorageError):
    """Raised when no bracket document is stored for a tournament id."""

    pass


class StaleDocumentError(StorageError):
    """Raised when a write is based on an outdated document version."""

    def __init__(self, tournament_id: str, expected: object, actual: object):
        self.tournament_id = tournament_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Stale write for tournament {tournament_id}: "
            f"expected version {expected}, stored version is {actual}"
        )


# ========== Configuration Exceptions ==========


class ConfigurationError(BracketEngineError):
    """Raised when engine configuration is invalid or cannot be loaded."""

    pass
