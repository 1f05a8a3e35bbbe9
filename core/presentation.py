"""Read-only projections of the election state for a view layer.

Every function here reads the service afresh on each call, so a view can
simply call them again after any service operation to redraw.
"""

from dataclasses import dataclass
from typing import Any

from core.election import ElectionService
from core.models import Candidate, Placement, Voter, parse_label

CANDIDATE_COLUMNS = ("ID", "Name", "Votes")
VOTER_COLUMNS = ("ID", "Name", "Has voted")

YES = "Yes"
NO = "No"


@dataclass(frozen=True)
class CandidateRow:
    id: int
    name: str
    votes: int


@dataclass(frozen=True)
class VoterRow:
    id: int
    name: str
    has_voted: str  # YES or NO


@dataclass(frozen=True)
class Choice:
    """One entry of a selection list (e.g. a dropdown)."""
    id: int
    label: str


def candidate_rows(service: ElectionService) -> list[CandidateRow]:
    """Table rows for candidates, in registration order."""
    return _candidate_rows(service.list_candidates())


def voter_rows(service: ElectionService) -> list[VoterRow]:
    """Table rows for voters, in registration order."""
    return _voter_rows(service.list_voters())


def candidate_choices(service: ElectionService) -> list[Choice]:
    return [Choice(c.id, c.label) for c in service.list_candidates()]


def voter_choices(service: ElectionService) -> list[Choice]:
    return [Choice(v.id, v.label) for v in service.list_voters()]


def resolve_choice(label: str) -> int:
    """Map a chosen label back to the id it was built from."""
    return parse_label(label)


def standings(service: ElectionService) -> list[Placement]:
    """Candidates from most to fewest votes.

    Candidates with equal vote counts are tied and share a rank; within a
    tie they keep registration order.
    """
    return _standings(service.list_candidates())


def snapshot(service: ElectionService) -> dict[str, Any]:
    """Convert the whole election state to a JSON-serializable dictionary.

    Everything is built from one locked read of the service, so the totals
    always agree with each other.
    """
    candidates, voters = service.state()
    candidate_table = _candidate_rows(candidates)
    voter_table = _voter_rows(voters)
    return {
        "candidates": {
            "columns": list(CANDIDATE_COLUMNS),
            "rows": [[r.id, r.name, r.votes] for r in candidate_table],
        },
        "voters": {
            "columns": list(VOTER_COLUMNS),
            "rows": [[r.id, r.name, r.has_voted] for r in voter_table],
        },
        "candidate_choices": [c.label for c in candidates],
        "voter_choices": [v.label for v in voters],
        "standings": [p.to_dict() for p in _standings(candidates)],
        "total_votes": sum(c.votes for c in candidates),
        "voters_voted": sum(1 for v in voters if v.has_voted),
    }


def _candidate_rows(candidates: tuple[Candidate, ...]) -> list[CandidateRow]:
    return [CandidateRow(c.id, c.name, c.votes) for c in candidates]


def _voter_rows(voters: tuple[Voter, ...]) -> list[VoterRow]:
    return [VoterRow(v.id, v.name, YES if v.has_voted else NO) for v in voters]


def _standings(candidates: tuple[Candidate, ...]) -> list[Placement]:
    vote_groups: dict[int, list[Candidate]] = {}
    for candidate in candidates:
        vote_groups.setdefault(candidate.votes, []).append(candidate)

    ordered: list[Candidate | list[Candidate]] = []
    for votes in sorted(vote_groups.keys(), reverse=True):
        group = vote_groups[votes]
        ordered.append(group[0] if len(group) == 1 else group)

    return Placement.build_ranking(ordered)
