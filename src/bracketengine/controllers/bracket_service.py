"""Bracket service.

This module runs engine operations against a bracket store: read the stored
document, apply the operation, write the result back with the version it was
read at. Writers for the same tournament are serialized in-process; writers
in other processes are caught by the store's version check.
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

import threading
from typing import Callable, Dict, List, Optional, Union

from bracketengine import dispatcher
from bracketengine.formats.base import MatchRefInput, RosterInput
from bracketengine.models.bracket import BracketDocument, MatchSlot
from bracketengine.models.config import BracketConfig
from bracketengine.models.enums import FormatKind
from bracketengine.standings import standings_table
from bracketengine.storage import BracketStore
from bracketengine.type_hints import MaybeParticipantId
from bracketengine.utils import setup_logger

logger = setup_logger(__name__)


class BracketService:
    """Serialized read-modify-write of bracket documents.

    This class is responsible for:
    - Creating a tournament's bracket once
    - Applying match results and bye advances against the latest stored version
    - Answering read-only questions (playable matches, standings)
    """

    def __init__(self, store: BracketStore, config: Optional[BracketConfig] = None):
        """Initialize the service.

        Args:
            store: Where documents are kept
            config: Engine configuration passed to every format
        """
        self.store = store
        self.config = config or BracketConfig()
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, tournament_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(tournament_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[tournament_id] = lock
            return lock

    def create_bracket(
        self,
        tournament_id: str,
        tournament_type: Union[str, FormatKind],
        participants: RosterInput,
        min_participants: Optional[int] = None,
    ) -> BracketDocument:
        """Generate and store the first document of a tournament.

        Raises:
            StaleDocumentError: If the tournament already has a bracket
        """
        with self._lock_for(tournament_id):
            document = dispatcher.generate_bracket_data(
                tournament_type, participants, min_participants, self.config
            )
            self.store.put(tournament_id, document, expected_version=None)
        logger.info(f"Created {document.tournament_type.value} bracket for {tournament_id}")
        return document

    def get_bracket(self, tournament_id: str) -> BracketDocument:
        return self.store.get(tournament_id).document

    def report_result(
        self,
        tournament_id: str,
        completed_match: MatchRefInput,
        winner_id: MaybeParticipantId,
    ) -> BracketDocument:
        """Record a match result; ``winner_id=None`` reports a draw."""
        return self._update(
            tournament_id,
            lambda document: dispatcher.handle_match_completion(
                document,
                completed_match,
                winner_id,
                document.tournament_type,
                self.config,
            ),
        )

    def advance_bye(self, tournament_id: str, match_ref: MatchRefInput) -> BracketDocument:
        return self._update(
            tournament_id,
            lambda document: dispatcher.advance_bye(document, match_ref, self.config),
        )

    def advance_all_byes(self, tournament_id: str) -> BracketDocument:
        return self._update(
            tournament_id,
            lambda document: dispatcher.advance_all_byes(document, self.config),
        )

    def current_matches(self, tournament_id: str) -> List[MatchSlot]:
        return dispatcher.current_matches(self.get_bracket(tournament_id))

    def standings(self, tournament_id: str) -> List[Dict[str, object]]:
        return standings_table(self.get_bracket(tournament_id))

    def delete_bracket(self, tournament_id: str) -> None:
        with self._lock_for(tournament_id):
            self.store.delete(tournament_id)

    def _update(
        self,
        tournament_id: str,
        operation: Callable[[BracketDocument], BracketDocument],
    ) -> BracketDocument:
        with self._lock_for(tournament_id):
            stored = self.store.get(tournament_id)
            updated = operation(stored.document)
            version = self.store.put(
                tournament_id, updated, expected_version=stored.version
            )
        logger.debug(f"{tournament_id} advanced to version {version}")
        return updated
