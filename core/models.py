"""Core data models for candidates, voters and election standings."""

from dataclasses import dataclass
from typing import Any, Self

LABEL_SEPARATOR = ": "


def make_label(entity_id: int, name: str) -> str:
    """Build the stable selection label for an entity, e.g. ``"1: Alice"``."""
    return f"{entity_id}{LABEL_SEPARATOR}{name}"


def parse_label(label: str) -> int:
    """Recover the identifier from a selection label.

    Only the part before the first separator is used, so names containing
    ": " still round-trip.

    Raises:
        ValueError: If the label does not start with an integer identifier
    """
    head, sep, _ = label.partition(LABEL_SEPARATOR)
    if not sep:
        raise ValueError(f"Not a selection label: {label!r}")
    return int(head.strip())


@dataclass(frozen=True)
class Candidate:
    """Someone who can receive votes.

    Attributes:
        id: Identifier assigned at registration (1, 2, ...), never changes
        name: Display name, non-empty
        votes: Number of votes received; only the election service changes it

    Instances are frozen. The stores swap in updated copies, so an entity
    handed to a caller is a snapshot that cannot be changed behind the
    election service.

    Example:
        >>> alice = Candidate(id=1, name="Alice")
        >>> alice.label
        '1: Alice'
    """
    id: int
    name: str
    votes: int = 0

    @property
    def label(self) -> str:
        return make_label(self.id, self.name)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "votes": self.votes}


@dataclass(frozen=True)
class Voter:
    """Someone permitted to cast exactly one vote.

    Attributes:
        id: Identifier assigned at registration (1, 2, ...), never changes
        name: Display name, non-empty
        has_voted: Set once by a successful vote, cleared only by a reset
    """
    id: int
    name: str
    has_voted: bool = False

    @property
    def label(self) -> str:
        return make_label(self.id, self.name)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "has_voted": self.has_voted}


@dataclass
class Placement:
    """A candidate's place in the current standings.

    Attributes:
        candidate_id: Identifier of the candidate
        name: Candidate display name
        votes: Votes at the time the standings were built
        rank: 1-indexed placement (tied candidates share the same rank)
        tied: Whether this candidate is tied with others at this rank
    """
    candidate_id: int
    name: str
    votes: int
    rank: int
    tied: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "candidate_id": self.candidate_id,
            "name": self.name,
            "votes": self.votes,
            "rank": self.rank,
            "tied": self.tied,
        }

    @classmethod
    def build_ranking(
        cls, ordered: list[Candidate | list[Candidate]]
    ) -> list[Self]:
        """Build a list of Placements from an ordered list.

        Args:
            ordered: Candidates in order from 1st to last place.
                Each element is either a single Candidate or a list of
                Candidates that are tied at that position.

        Returns:
            List of Placement objects with correct ranks and tied flags.
        """
        placements = []
        rank = 1
        for entry in ordered:
            if isinstance(entry, list):
                for candidate in entry:
                    placements.append(cls._from_candidate(candidate, rank, tied=True))
                rank += len(entry)
            else:
                placements.append(cls._from_candidate(entry, rank, tied=False))
                rank += 1

        return placements

    @classmethod
    def _from_candidate(cls, candidate: Candidate, rank: int, tied: bool) -> Self:
        return cls(
            candidate_id=candidate.id,
            name=candidate.name,
            votes=candidate.votes,
            rank=rank,
            tied=tied,
        )
