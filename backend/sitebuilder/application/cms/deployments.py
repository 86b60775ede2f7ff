"""
Read side of the publish pipeline.
"""
from typing import List, Optional

from flask import current_app
from sqlalchemy import or_
from sqlalchemy.orm import defer

from sitebuilder.models.deployment import Deployment
from sitebuilder.models.site import Site
from .lookups import get_site


def get_live_deployment(*, tenant_id: str, site_id: str) -> Optional[Deployment]:
    site = get_site(tenant_id=tenant_id, site_id=site_id)
    return live_deployment_for(site)


def live_deployment_for(site: Site) -> Optional[Deployment]:
    return (
        Deployment.query
        .filter_by(site_id=site.id, tenant_id=site.tenant_id, is_live=True)
        .first()
    )


def list_deployments(*, tenant_id: str, site_id: str) -> List[Deployment]:
    site = get_site(tenant_id=tenant_id, site_id=site_id)
    return (
        Deployment.query
        .options(defer(Deployment.snapshot))
        .filter_by(site_id=site.id, tenant_id=tenant_id)
        .order_by(Deployment.deployed_at.desc())
        .all()
    )


def resolve_public_site(host_or_subdomain: str) -> Optional[Site]:
    """
    Find the non-archived site answering for a request host.

    Accepts a bare subdomain (``acme``), a host under the platform domain
    (``acme.example.site``) or a verified custom domain (``www.acme.com``).
    Ports and letter case are ignored.
    """
    host = (host_or_subdomain or "").strip().lower().split(":", 1)[0].rstrip(".")
    if not host:
        return None

    root_domain = (current_app.config.get("SITE_ROOT_DOMAIN") or "").lower()
    subdomain = host
    if root_domain and host.endswith("." + root_domain):
        subdomain = host[: -len(root_domain) - 1]

    return (
        Site.query
        .filter(Site.status != "archived")
        .filter(
            or_(
                Site.subdomain == subdomain,
                (Site.custom_domain == host) & Site.domain_verified.is_(True),
            )
        )
        .first()
    )
