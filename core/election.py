"""Election service: registration, voting and reset on top of the stores."""

import itertools
import logging
import threading
from dataclasses import dataclass

from core.errors import AlreadyVoted, InvariantViolation, SelectionMissing, ValidationError
from core.models import Candidate, Voter
from core.store import CandidateStore, VoterStore

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoteReceipt:
    """Returned by a successful cast_vote."""
    candidate_id: int
    voter_id: int


def _clean_name(name: str | None, entity_type: str) -> str:
    if name is not None and not isinstance(name, str):
        raise ValidationError(f"{entity_type} name must be text.")
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError(f"{entity_type} name cannot be empty.")
    return cleaned


class ElectionService:
    """Owns the candidate and voter stores and enforces the voting rules.

    Each voter casts at most one vote, and each vote adds exactly one to one
    candidate's tally, so the total of all vote counts always equals the
    number of voters who have voted.

    Identifiers are handed out from independent counters per entity type,
    starting at 1. Counters are never rewound, not even by reset_election.

    All mutating operations hold one re-entrant lock, so the service can be
    shared between concurrent callers without anyone observing a vote
    counted for the candidate but not yet recorded against the voter.
    """

    def __init__(
        self,
        candidates: CandidateStore | None = None,
        voters: VoterStore | None = None,
    ):
        self.candidates = candidates if candidates is not None else CandidateStore()
        self.voters = voters if voters is not None else VoterStore()
        self._lock = threading.RLock()
        self._candidate_ids = itertools.count(self._next_id(self.candidates))
        self._voter_ids = itertools.count(self._next_id(self.voters))

    @staticmethod
    def _next_id(store) -> int:
        return max((entity.id for entity in store.find_all()), default=0) + 1

    def register_candidate(self, name: str) -> Candidate:
        """Create a candidate with the next candidate id.

        Raises:
            ValidationError: If the name is empty or whitespace only
        """
        cleaned = _clean_name(name, "Candidate")
        with self._lock:
            candidate = Candidate(id=next(self._candidate_ids), name=cleaned)
            self.candidates.add(candidate)
        _logger.debug("Registered candidate %s", candidate.label)
        return candidate

    def register_voter(self, name: str) -> Voter:
        """Create a voter with the next voter id.

        Raises:
            ValidationError: If the name is empty or whitespace only
        """
        cleaned = _clean_name(name, "Voter")
        with self._lock:
            voter = Voter(id=next(self._voter_ids), name=cleaned)
            self.voters.add(voter)
        _logger.debug("Registered voter %s", voter.label)
        return voter

    def cast_vote(self, candidate_id: int | None, voter_id: int | None) -> VoteReceipt:
        """Record one vote by a voter for a candidate.

        Both ids are resolved through the stores. The candidate's count and the
        voter's flag change together or not at all.

        Raises:
            SelectionMissing: If either id is None or not registered
            AlreadyVoted: If the voter has already voted
        """
        with self._lock:
            candidate = self.candidates.find_by_id(candidate_id)
            voter = self.voters.find_by_id(voter_id)
            if candidate is None or voter is None:
                raise SelectionMissing("Select a candidate and a voter.")
            if voter.has_voted:
                raise AlreadyVoted(voter.name)

            candidate = self.candidates.add_vote(candidate.id)
            voter = self.voters.mark_voted(voter.id)

        _logger.info("Vote cast by voter %d for candidate %d", voter.id, candidate.id)
        return VoteReceipt(candidate_id=candidate.id, voter_id=voter.id)

    def reset_election(self) -> None:
        """Zero every vote count and clear every voted flag.

        Always succeeds. Ids and names are left alone. Confirming that the
        user really wants this is the caller's job.
        """
        with self._lock:
            self.candidates.reset_all_votes()
            self.voters.reset_all_voters()
        _logger.info("Election reset")

    def list_candidates(self) -> tuple[Candidate, ...]:
        with self._lock:
            return self.candidates.find_all()

    def list_voters(self) -> tuple[Voter, ...]:
        with self._lock:
            return self.voters.find_all()

    def state(self) -> tuple[tuple[Candidate, ...], tuple[Voter, ...]]:
        """Candidates and voters read together, so no vote can land in between."""
        with self._lock:
            return self.candidates.find_all(), self.voters.find_all()

    def get_candidate(self, candidate_id: int | None) -> Candidate | None:
        return self.candidates.find_by_id(candidate_id)

    def get_voter(self, voter_id: int | None) -> Voter | None:
        return self.voters.find_by_id(voter_id)

    @property
    def total_votes(self) -> int:
        with self._lock:
            return sum(c.votes for c in self.candidates.find_all())

    def check_invariant(self) -> None:
        """Raise InvariantViolation if the tally and the voted flags disagree."""
        with self._lock:
            tally = sum(c.votes for c in self.candidates.find_all())
            voted = sum(1 for v in self.voters.find_all() if v.has_voted)
        if tally != voted:
            raise InvariantViolation(
                f"{tally} votes counted but {voted} voters marked as voted"
            )
