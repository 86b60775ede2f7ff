import logging
from typing import Optional

from sitebuilder.models.site import Site
from sitebuilder.domain.lifecycle.site import assert_site_transition
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .lookups import get_site

logger = logging.getLogger(__name__)


def archive_site(
    *,
    tenant_id: str,
    site_id: str,
    actor_id: Optional[str],
) -> Site:
    """
    Soft-delete a website. Pages, blocks, versions and deployments stay in
    place; the public renderer stops serving the site.
    """
    site = get_site(tenant_id=tenant_id, site_id=site_id)
    assert_site_transition(from_status=site.status, to_status="archived")

    with transactional():
        site.status = "archived"

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="site.archive",
            entity_type="site",
            entity_id=site.id,
        )

    logger.info("Archived site %s", site.id)
    return site
