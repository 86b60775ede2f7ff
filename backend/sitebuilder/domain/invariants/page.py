from sitebuilder.models.page import PAGE_STATUSES
from sitebuilder.utils.slug import is_valid_page_slug
from .exceptions import InvalidState

HOME_SLUG = "/"


def assert_page_slug(slug) -> None:
    if not is_valid_page_slug(slug):
        raise InvalidState(
            "Slug must start with / and contain only lowercase letters, numbers, and hyphens, "
            "with no empty segments and no trailing /"
        )


def assert_page_status(status) -> None:
    if status not in PAGE_STATUSES:
        raise InvalidState(
            f"Invalid page status '{status}'. Must be one of: {', '.join(PAGE_STATUSES)}"
        )


def assert_page_fields(data) -> None:
    """
    Type checks for the optional page fields, so a bad value is rejected
    before anything reaches the session.
    """
    if "show_in_nav" in data and not isinstance(data["show_in_nav"], bool):
        raise InvalidState("show_in_nav must be true or false")

    if "nav_order" in data:
        nav_order = data["nav_order"]
        # bool is an int subclass
        if isinstance(nav_order, bool) or not isinstance(nav_order, int):
            raise InvalidState("nav_order must be a whole number")

    if "nav_label" in data and data["nav_label"] is not None and not isinstance(data["nav_label"], str):
        raise InvalidState("nav_label must be text or null")

    if "seo" in data and not isinstance(data["seo"], dict):
        raise InvalidState("seo must be an object")


def assert_slug_available(site_id, slug, *, exclude_page_id=None) -> None:
    """
    Slugs are unique per site, compared case-sensitively.
    """
    from sitebuilder.models.page import Page

    query = Page.query.filter(Page.site_id == site_id, Page.slug == slug)
    if exclude_page_id is not None:
        query = query.filter(Page.id != exclude_page_id)

    if query.first() is not None:
        raise InvalidState(f"A page with the slug '{slug}' already exists on this site")


def assert_home_page_update(page, data) -> None:
    """
    The home page keeps its slug and flag for life, and stays reachable.
    No other page may become the home page.
    """
    if "is_home" in data and bool(data["is_home"]) != bool(page.is_home):
        if page.is_home:
            raise InvalidState("The home page flag cannot be removed; every site needs a home page")
        raise InvalidState("This site already has a home page; the home flag cannot be moved")

    if not page.is_home:
        return

    if "slug" in data and data["slug"] != page.slug:
        raise InvalidState("Cannot change the slug of the home page")

    if data.get("status") == "hidden":
        raise InvalidState("The home page cannot be hidden")


def assert_page_deletable(page) -> None:
    if page.is_home:
        raise InvalidState("Cannot delete the home page")
