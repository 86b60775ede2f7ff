from typing import Set

from sitebuilder.models.site import SITE_STATUSES

# Explicit allowed state transitions
ALLOWED_SITE_TRANSITIONS: dict[str, Set[str]] = {
    "draft": {"published", "archived"},
    "published": {"published", "archived"},  # republish keeps it published
    "archived": set(),
}

def assert_site_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards site lifecycle transitions.
    Single source of truth for status changes.
    """
    from sitebuilder.domain.invariants.exceptions import InvalidState

    if to_status not in SITE_STATUSES:
        raise InvalidState(f"Unknown site status '{to_status}'")

    allowed = ALLOWED_SITE_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        if from_status == "archived":
            raise InvalidState("This site is archived and can no longer be changed or published.")
        raise InvalidState(
            f"Illegal site transition: {from_status} -> {to_status}"
        )
