from datetime import timezone

from dateutil.parser import parse
from flask import request

from sitebuilder.domain.invariants.exceptions import EditConflict, InvalidState


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def enforce_optimistic_lock(entity):
    """
    Reject the write when ``entity`` changed after the time in the
    If-Unmodified-Since header. Without the header the write is
    last-write-wins.

    HTTP dates have whole-second precision, so the stored timestamp is
    truncated before comparing.
    """
    header = request.headers.get("If-Unmodified-Since")
    if not header:
        return

    try:
        client_ts = normalize_ts(parse(header))
    except (ValueError, OverflowError):
        raise InvalidState("Invalid If-Unmodified-Since header")

    server_ts = normalize_ts(entity.updated_at).replace(microsecond=0)

    if server_ts > client_ts:
        raise EditConflict("This item was changed by someone else. Reload and try again.")
