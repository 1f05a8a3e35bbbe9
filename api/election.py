"""Vercel serverless function exposing the election service as JSON."""

import json
import logging
import sys
from pathlib import Path

# Add the project root to the path so we can import core modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.election import ElectionService
from core.errors import ElectionError, ErrorKind, SelectionMissing
from core.models import parse_label
from core.presentation import snapshot

_logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

ERROR_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.SELECTION_MISSING: 400,
    ErrorKind.ALREADY_VOTED: 409,
    ErrorKind.DUPLICATE_IDENTIFIER: 409,
}


class RequestError(Exception):
    """Malformed request: reported back to the client as a 400."""
    pass


def make_handler(service: ElectionService):
    """Build a request handler bound to one election service.

    Accepts:
    - GET: returns the current election state
    - POST with JSON body {"action": ..., ...} where action is one of
      register_candidate, register_voter, cast_vote, reset

    Returns JSON; every successful mutation returns the new state so the
    caller can redraw without a second request.
    """

    def handler(request):
        if request.method == "OPTIONS":
            return create_response("", status=204, headers=CORS_HEADERS)

        if request.method == "GET":
            return create_response(snapshot(service))

        if request.method != "POST":
            return create_response(
                {"error": "Method not allowed. Use GET or POST."},
                status=405,
            )

        try:
            content_type = request.headers.get("content-type", "")
            if "application/json" not in content_type:
                raise RequestError(f"Unsupported content type: {content_type}")

            data = json.loads(request.body.decode("utf-8"))
            if not isinstance(data, dict):
                raise RequestError("Request body must be a JSON object")

            return dispatch(service, data)

        except ElectionError as e:
            return create_response(
                {"error": e.message, "kind": str(e.kind)},
                status=ERROR_STATUS[e.kind],
            )
        except RequestError as e:
            return create_response({"error": str(e)}, status=400)
        except json.JSONDecodeError as e:
            return create_response({"error": f"Invalid JSON: {e}"}, status=400)
        except Exception as e:
            _logger.exception("Unhandled error in election handler")
            return create_response({"error": f"Internal error: {e}"}, status=500)

    return handler


def dispatch(service: ElectionService, data: dict):
    """Run one POSTed action against the service."""
    action = data.get("action")

    if action == "register_candidate":
        candidate = service.register_candidate(data.get("name"))
        return create_response(candidate.to_dict(), status=201)

    if action == "register_voter":
        voter = service.register_voter(data.get("name"))
        return create_response(voter.to_dict(), status=201)

    if action == "cast_vote":
        service.cast_vote(
            selection_to_id(data.get("candidate_id")),
            selection_to_id(data.get("voter_id")),
        )
        return create_response(snapshot(service))

    if action == "reset":
        # Resetting cannot be undone, so the client must say it means it
        if data.get("confirm") is not True:
            raise RequestError("Reset requires \"confirm\": true")
        service.reset_election()
        return create_response(snapshot(service))

    raise RequestError(f"Unknown action: {action!r}")


def selection_to_id(value) -> int | None:
    """Accept an id as an int, a numeric string, or a selection label.

    Raises:
        SelectionMissing: If the value cannot be read as an id
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise SelectionMissing("Select a candidate and a voter.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value) if value.strip().isdigit() else parse_label(value)
        except ValueError:
            raise SelectionMissing("Select a candidate and a voter.")
    raise SelectionMissing("Select a candidate and a voter.")


def create_response(body, status: int = 200, headers: dict = None):
    """Create a response object for Vercel."""
    response_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }
    if headers:
        response_headers.update(headers)

    if isinstance(body, dict):
        body = json.dumps(body)

    # Return in format expected by Vercel Python runtime
    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }


# The deployed function keeps its election for the lifetime of the instance
handler = make_handler(ElectionService())
