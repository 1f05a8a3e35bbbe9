"""Tests for core data models."""

import pytest
from core.models import Candidate, Placement, Voter, make_label, parse_label


class TestLabels:
    def test_candidate_label(self):
        assert Candidate(id=1, name="Alice").label == "1: Alice"

    def test_voter_label(self):
        assert Voter(id=12, name="Dave").label == "12: Dave"

    def test_parse_label(self):
        assert parse_label("3: Bob") == 3

    def test_name_containing_separator_round_trips(self):
        label = make_label(7, "Dr: Who: Else")
        assert parse_label(label) == 7

    @pytest.mark.parametrize("label", ["Alice", "", "x: Alice"])
    def test_parse_label_rejects_non_labels(self, label):
        with pytest.raises(ValueError):
            parse_label(label)


class TestDefaults:
    def test_candidate_starts_with_no_votes(self):
        assert Candidate(id=1, name="Alice").votes == 0

    def test_voter_starts_not_voted(self):
        assert Voter(id=1, name="Carol").has_voted is False

    def test_to_dict(self):
        assert Candidate(id=2, name="Bob", votes=3).to_dict() == {
            "id": 2, "name": "Bob", "votes": 3,
        }
        assert Voter(id=1, name="Carol", has_voted=True).to_dict() == {
            "id": 1, "name": "Carol", "has_voted": True,
        }


def _candidates(*spec: tuple[int, str, int]) -> list[Candidate]:
    return [Candidate(id=i, name=n, votes=v) for i, n, v in spec]


class TestBuildRanking:
    def test_no_ties(self):
        a, b, c = _candidates((1, "A", 3), (2, "B", 2), (3, "C", 1))
        result = Placement.build_ranking([a, b, c])
        assert [(p.name, p.rank, p.tied) for p in result] == [
            ("A", 1, False),
            ("B", 2, False),
            ("C", 3, False),
        ]

    def test_tie_in_middle(self):
        a, b, c, d = _candidates((1, "A", 3), (2, "B", 2), (3, "C", 2), (4, "D", 0))
        result = Placement.build_ranking([a, [b, c], d])
        assert [(p.name, p.rank, p.tied) for p in result] == [
            ("A", 1, False),
            ("B", 2, True),
            ("C", 2, True),
            ("D", 4, False),
        ]

    def test_all_tied(self):
        a, b = _candidates((1, "A", 0), (2, "B", 0))
        result = Placement.build_ranking([[a, b]])
        assert [(p.rank, p.tied) for p in result] == [(1, True), (1, True)]

    def test_empty(self):
        assert Placement.build_ranking([]) == []

    def test_carries_id_and_votes(self):
        (a,) = _candidates((5, "A", 4))
        assert Placement.build_ranking([a])[0].to_dict() == {
            "candidate_id": 5, "name": "A", "votes": 4, "rank": 1, "tied": False,
        }
