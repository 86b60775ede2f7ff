import copy
import logging
from typing import Any, Dict, Optional

from sitebuilder.extensions import db
from sitebuilder.models.base import utc_now
from sitebuilder.models.deployment import Deployment
from sitebuilder.models.site import Site
from sitebuilder.domain.lifecycle.site import assert_site_transition
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from sitebuilder.utils.versioning import snapshot_navigation, snapshot_page
from .lookups import get_site

logger = logging.getLogger(__name__)

PUBLISH_FAILED = "Publish failed; the previously live deployment is still being served."


def build_site_snapshot(site: Site) -> Dict[str, Any]:
    """
    Denormalized, self-contained copy of everything the public renderer
    needs for ``site``. Hidden pages and invisible blocks are left out.
    """
    pages = sorted(site.pages, key=lambda p: (p.nav_order or 0, p.slug))

    return {
        "site": {
            "id": site.id,
            "name": site.name,
            "subdomain": site.subdomain,
            "branding": copy.deepcopy(site.branding or {}),
            "seo_defaults": copy.deepcopy(site.seo_defaults or {}),
            "favicon_url": site.favicon_url,
        },
        "navigation": snapshot_navigation(pages),
        "pages": [
            snapshot_page(page, sorted(page.blocks, key=lambda b: b.order_key))
            for page in pages
            if page.status != "hidden"
        ],
    }


def publish_site(
    *,
    tenant_id: str,
    site_id: str,
    actor_id: Optional[str],
) -> Deployment:
    """
    Snapshot the whole site into a new Deployment and make it live.

    Step 1 stores the Deployment (not live). Step 2 swaps the live flag and
    updates the site in one transaction. Either step failing leaves the
    previous live deployment in place.
    """
    site = get_site(tenant_id=tenant_id, site_id=site_id)
    assert_site_transition(from_status=site.status, to_status="published")

    snapshot = build_site_snapshot(site)

    deployment = Deployment()
    deployment.tenant_id = tenant_id
    deployment.site_id = site.id
    deployment.snapshot = snapshot
    deployment.is_live = False
    deployment.deployed_by = actor_id

    with transactional(PUBLISH_FAILED):
        db.session.add(deployment)

    deployment_id = deployment.id

    with transactional(PUBLISH_FAILED):
        (
            Deployment.query
            .filter(
                Deployment.site_id == site.id,
                Deployment.tenant_id == tenant_id,
                Deployment.is_live.is_(True),
                Deployment.id != deployment_id,
            )
            .update({Deployment.is_live: False}, synchronize_session=False)
        )
        deployment.is_live = True

        now = utc_now()
        site.status = "published"
        if site.published_at is None:
            site.published_at = now
        site.last_deployed_at = now

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="site.publish",
            entity_type="site",
            entity_id=site.id,
            payload={
                "deployment_id": deployment_id,
                "pages": len(snapshot["pages"]),
            },
        )

    logger.info("Published site %s as deployment %s", site_id, deployment_id)
    return deployment
