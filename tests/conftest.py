from __future__ import annotations

import pytest

from directory import ParticipantDirectory
from models import Draft, Participant
from money import Money


@pytest.fixture
def directory() -> ParticipantDirectory:
    people = [
        Participant("c", "Carol"),
        Participant("a", "Alice"),
        Participant("b", "Bob"),
        Participant("me", "You"),
    ]
    return ParticipantDirectory(people, current_user_id="me", groups={"trip": ["a", "b", "c"]})


@pytest.fixture
def draft() -> Draft:
    return Draft(title="Dinner", total_amount=Money.parse("100.00"), participants={"a", "b", "c"})
