"""
Participant directory: id -> display name lookup used for ordering
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional

from models import Participant, ParticipantId


class ParticipantDirectory:
    """In-memory view of the people and groups the engine may reference"""

    def __init__(
        self,
        people: Iterable[Participant] = (),
        current_user_id: ParticipantId = "me",
        groups: Optional[Dict[str, List[ParticipantId]]] = None,
    ):
        self.people: Dict[ParticipantId, Participant] = {p.id: p for p in people}
        self.current_user_id = current_user_id
        self.groups: Dict[str, List[ParticipantId]] = dict(groups or {})

    def display_name(self, pid: ParticipantId) -> str:
        """Name of a participant; unknown ids sort as an empty name"""
        p = self.people.get(pid)
        return p.name if p else ""

    def sorted_ids(self, ids: Iterable[ParticipantId]) -> List[ParticipantId]:
        """Deterministic order: display name ascending, id breaks ties"""
        return sorted(ids, key=lambda pid: (self.display_name(pid), pid))

    def group_members(self, group_id: str) -> List[ParticipantId]:
        return list(self.groups.get(group_id, []))

    def is_current_user(self, pid: ParticipantId) -> bool:
        return pid == self.current_user_id
