from typing import Any, Dict, Optional

from sitebuilder.models.site import Site
from sitebuilder.domain.invariants.exceptions import InvalidState
from sitebuilder.domain.invariants.site import (
    assert_custom_domain,
    assert_json_object,
    assert_site_name,
)
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .lookups import get_site


ALLOWED_UPDATE_FIELDS = ("name", "branding", "seo_defaults", "favicon_url", "custom_domain")


def update_site(
    *,
    tenant_id: str,
    site_id: str,
    actor_id: Optional[str],
    data: Dict[str, Any],
) -> Site:
    """
    Update mutable fields on a website.

    Design rules:
    - Only whitelisted fields are mutable
    - The subdomain is immutable once assigned
    - A new custom domain must be verified again
    """
    site = get_site(tenant_id=tenant_id, site_id=site_id)

    if site.status == "archived":
        raise InvalidState("This site is archived and can no longer be changed or published.")

    if "subdomain" in data and data["subdomain"] != site.subdomain:
        raise InvalidState("The subdomain of a website cannot be changed")

    if not any(field in data for field in ALLOWED_UPDATE_FIELDS):
        raise InvalidState("No valid fields provided for update")

    if "name" in data:
        assert_site_name(data["name"])
    for field in ("branding", "seo_defaults"):
        if field in data:
            assert_json_object(data[field], field)
    if "custom_domain" in data:
        assert_custom_domain(data["custom_domain"])

    changed_fields: list[str] = []

    with transactional():
        for field in ALLOWED_UPDATE_FIELDS:
            if field in data and getattr(site, field) != data[field]:
                value = data[field].strip() if field == "name" else data[field]
                setattr(site, field, value)
                changed_fields.append(field)

        if "custom_domain" in changed_fields:
            site.domain_verified = False

        if changed_fields:
            log_action(
                tenant_id=tenant_id,
                actor_id=actor_id,
                action="site.update",
                entity_type="site",
                entity_id=site.id,
                payload={"fields": changed_fields},
            )

    return site
