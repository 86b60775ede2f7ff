from sitebuilder.utils.slug import is_valid_subdomain, is_valid_domain
from .exceptions import InvalidState


def assert_site_name(name) -> None:
    if not isinstance(name, str) or not name.strip():
        raise InvalidState("Website name is required")


def assert_subdomain(subdomain) -> None:
    if not is_valid_subdomain(subdomain):
        raise InvalidState(
            "Subdomain must be 3-40 characters of lowercase letters, numbers, "
            "and hyphens, and cannot start or end with a hyphen"
        )


def assert_subdomain_available(subdomain) -> None:
    from sitebuilder.models.site import Site

    if Site.query.filter_by(subdomain=subdomain).first() is not None:
        raise InvalidState(f"The subdomain '{subdomain}' is already taken")


def assert_custom_domain(domain) -> None:
    if domain is not None and not is_valid_domain(domain):
        raise InvalidState(f"'{domain}' is not a valid domain name")


def assert_json_object(value, field: str) -> None:
    if not isinstance(value, dict):
        raise InvalidState(f"{field} must be an object")
