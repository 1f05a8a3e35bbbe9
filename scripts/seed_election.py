"""Fill an election with fake candidates, voters and votes.

Generates names with faker using a fixed seed, registers them, and has a
random share of the voters vote. By default this runs against a local,
in-memory election and prints the resulting tables and standings. With
--url, the same actions are sent to a deployed election endpoint instead.

Usage:
    python scripts/seed_election.py
    python scripts/seed_election.py --candidates 5 --voters 40 --turnout 0.6
    python scripts/seed_election.py --url https://example.vercel.app/api/election
"""

import argparse
import random
import sys
from pathlib import Path

import httpx
from faker import Faker

# Add the project root to the path so we can import core modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.election import ElectionService
from core.presentation import (
    CANDIDATE_COLUMNS,
    VOTER_COLUMNS,
    candidate_rows,
    standings,
    voter_rows,
)

SEED = 20261018


def generate_names(count: int, fake: Faker, exclude: set[str]) -> list[str]:
    """Generate unique fake names, none of which appear in exclude."""
    names: list[str] = []
    seen = {n.lower() for n in exclude}
    while len(names) < count:
        name = fake.name()
        if name.lower() in seen:
            continue
        seen.add(name.lower())
        names.append(name)
    return names


def plan_votes(
    num_candidates: int, num_voters: int, turnout: float, rng: random.Random
) -> list[tuple[int, int]]:
    """Pick which voters vote and for whom.

    Returns (candidate_id, voter_id) pairs; ids follow registration order
    starting at 1.
    """
    if num_candidates == 0:
        return []
    voter_ids = list(range(1, num_voters + 1))
    voting = rng.sample(voter_ids, round(num_voters * turnout))
    return [(rng.randint(1, num_candidates), voter_id) for voter_id in sorted(voting)]


def seed_local(
    candidate_names: list[str], voter_names: list[str], votes: list[tuple[int, int]]
) -> ElectionService:
    service = ElectionService()
    for name in candidate_names:
        service.register_candidate(name)
    for name in voter_names:
        service.register_voter(name)
    for candidate_id, voter_id in votes:
        service.cast_vote(candidate_id, voter_id)
    service.check_invariant()
    return service


class SeedError(Exception):
    """The election endpoint rejected a request or sent back something unreadable."""
    pass


def read_response(response: httpx.Response, action: str) -> dict:
    """Return the JSON body of an endpoint response.

    Raises:
        SeedError: If the body is not JSON or the status is an error
    """
    try:
        body = response.json()
    except ValueError:
        raise SeedError(
            f"{action} failed: HTTP {response.status_code} with a non-JSON body"
        )
    if response.status_code >= 400:
        error = body.get("error") if isinstance(body, dict) else None
        raise SeedError(f"{action} failed: {error or response.status_code}")
    return body


def seed_remote(
    url: str,
    candidate_names: list[str],
    voter_names: list[str],
    votes: list[tuple[int, int]],
) -> dict:
    """Send the same registrations and votes to a deployed endpoint.

    Ids returned by the endpoint are used for the votes, so this also works
    against an election that already has entries.
    """
    with httpx.Client(follow_redirects=True, timeout=30.0) as client:

        def post(payload: dict) -> dict:
            return read_response(client.post(url, json=payload), payload["action"])

        candidate_ids = [
            post({"action": "register_candidate", "name": n})["id"]
            for n in candidate_names
        ]
        voter_ids = [
            post({"action": "register_voter", "name": n})["id"]
            for n in voter_names
        ]
        for candidate_index, voter_index in votes:
            post({
                "action": "cast_vote",
                "candidate_id": candidate_ids[candidate_index - 1],
                "voter_id": voter_ids[voter_index - 1],
            })

        return read_response(client.get(url), "state")


def print_table(columns: tuple[str, ...], rows: list[list]) -> None:
    widths = [
        max([len(str(col))] + [len(str(row[i])) for row in rows])
        for i, col in enumerate(columns)
    ]
    print("  ".join(str(col).ljust(w) for col, w in zip(columns, widths)))
    for row in rows:
        print("  ".join(str(cell).ljust(w) for cell, w in zip(row, widths)))


def main():
    parser = argparse.ArgumentParser(
        description="Seed an election with fake candidates, voters and votes")
    parser.add_argument("--candidates", type=int, default=3,
                        help="Number of candidates (default: 3)")
    parser.add_argument("--voters", type=int, default=12,
                        help="Number of voters (default: 12)")
    parser.add_argument("--turnout", type=float, default=0.75,
                        help="Share of voters who vote, 0 to 1 (default: 0.75)")
    parser.add_argument("--seed", type=int, default=SEED,
                        help=f"Random seed (default: {SEED})")
    parser.add_argument("--url", help="Election endpoint to seed instead of a local election")
    args = parser.parse_args()

    if not 0 <= args.turnout <= 1:
        parser.error("--turnout must be between 0 and 1")

    fake = Faker(["en_US", "en_GB", "de_DE", "fr_FR"])
    Faker.seed(args.seed)
    rng = random.Random(args.seed)

    candidate_names = generate_names(args.candidates, fake, exclude=set())
    voter_names = generate_names(args.voters, fake, exclude=set(candidate_names))
    votes = plan_votes(args.candidates, args.voters, args.turnout, rng)

    if args.url:
        try:
            state = seed_remote(args.url, candidate_names, voter_names, votes)
        except (httpx.HTTPError, SeedError) as e:
            print(f"ERROR: {e}")
            sys.exit(1)
        print(f"Seeded {args.url}: {state['total_votes']} votes from "
              f"{len(state['voters']['rows'])} voters")
        return

    service = seed_local(candidate_names, voter_names, votes)

    print("Candidates")
    print_table(CANDIDATE_COLUMNS, [[r.id, r.name, r.votes] for r in candidate_rows(service)])
    print()
    print("Voters")
    print_table(VOTER_COLUMNS, [[r.id, r.name, r.has_voted] for r in voter_rows(service)])
    print()
    print("Standings")
    for p in standings(service):
        tie = " (tied)" if p.tied else ""
        print(f"  {p.rank}. {p.name}: {p.votes}{tie}")


if __name__ == "__main__":
    main()
