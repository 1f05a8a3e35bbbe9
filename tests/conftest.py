"""Shared test helpers."""

import pytest
from core.election import ElectionService


def make_election(candidates: list[str], voters: list[str]) -> ElectionService:
    """Build an ElectionService with the given names registered in order."""
    service = ElectionService()
    for name in candidates:
        service.register_candidate(name)
    for name in voters:
        service.register_voter(name)
    return service


def assert_invariant(service: ElectionService) -> None:
    """Total votes must equal the number of voters marked as voted."""
    tally = sum(c.votes for c in service.list_candidates())
    voted = sum(1 for v in service.list_voters() if v.has_voted)
    assert tally == voted


@pytest.fixture
def election():
    """Two candidates and two voters, nobody has voted.

    Candidates: 1 Alice, 2 Bob
    Voters:     1 Carol, 2 Dave
    """
    return make_election(["Alice", "Bob"], ["Carol", "Dave"])


@pytest.fixture
def empty_election():
    return ElectionService()
