"""In-memory entity stores for candidates and voters."""

from collections.abc import Iterator
from dataclasses import replace
from typing import Generic, TypeVar

from core.errors import DuplicateIdentifier
from core.models import Candidate, Voter

T = TypeVar("T", Candidate, Voter)


class EntityStore(Generic[T]):
    """Ordered collection of entities keyed by their integer id.

    The store owns its entities. Entities are frozen, and changes are made
    by swapping in an updated copy, so whatever ``find_all`` or
    ``find_by_id`` handed out earlier stays as it was.
    """

    entity_type = "Entity"

    def __init__(self):
        # dicts keep insertion order, which is registration order
        self._by_id: dict[int, T] = {}

    def add(self, entity: T) -> None:
        """Append an entity with a pre-assigned id.

        Raises:
            DuplicateIdentifier: If an entity with the same id is already stored
        """
        if entity.id in self._by_id:
            raise DuplicateIdentifier(self.entity_type, entity.id)
        self._by_id[entity.id] = entity

    def find_all(self) -> tuple[T, ...]:
        """Return all entities in insertion order."""
        return tuple(self._by_id.values())

    def find_by_id(self, entity_id: int | None) -> T | None:
        """Return the entity with this id, or None if there isn't one."""
        # True == 1 as a dict key, but True is not an id
        if entity_id is None or isinstance(entity_id, bool):
            return None
        return self._by_id.get(entity_id)

    def _update(self, entity_id: int, **changes) -> T:
        updated = replace(self._by_id[entity_id], **changes)
        self._by_id[entity_id] = updated
        return updated

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[T]:
        return iter(self.find_all())

    def __contains__(self, entity_id: object) -> bool:
        return self.find_by_id(entity_id) is not None


class CandidateStore(EntityStore[Candidate]):
    entity_type = "Candidate"

    def add_vote(self, candidate_id: int) -> Candidate:
        """Add one to a stored candidate's count and return the updated candidate."""
        return self._update(candidate_id, votes=self._by_id[candidate_id].votes + 1)

    def reset_all_votes(self) -> None:
        """Set every candidate's vote count back to zero."""
        for candidate_id in list(self._by_id):
            self._update(candidate_id, votes=0)


class VoterStore(EntityStore[Voter]):
    entity_type = "Voter"

    def mark_voted(self, voter_id: int) -> Voter:
        """Set a stored voter's voted flag and return the updated voter."""
        return self._update(voter_id, has_voted=True)

    def reset_all_voters(self) -> None:
        """Mark every voter as not having voted."""
        for voter_id in list(self._by_id):
            self._update(voter_id, has_voted=False)
