import logging
from typing import Any, Dict, List, Optional

from sitebuilder.extensions import db
from sitebuilder.models.block import Block
from sitebuilder.models.page import Page
from sitebuilder.models.site import Site
from sitebuilder.domain.invariants.site import (
    assert_custom_domain,
    assert_json_object,
    assert_site_name,
    assert_subdomain,
    assert_subdomain_available,
)
from sitebuilder.domain.invariants.page import HOME_SLUG
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.order import keys_between
from sitebuilder.utils.slug import generate_subdomain
from sitebuilder.utils.transaction import transactional

logger = logging.getLogger(__name__)

DEFAULT_BRANDING = {
    "primary_color": "#3B82F6",
    "secondary_color": "#1E40AF",
    "accent_color": "#F59E0B",
    "font_heading": "Inter",
    "font_body": "Inter",
}


def _starter_blocks(site_name: str) -> List[Dict[str, Any]]:
    return [
        {
            "kind": "navbar",
            "props": {
                "brand": site_name,
                "links": [
                    {"label": "Home", "href": "/"},
                    {"label": "About", "href": "/about"},
                    {"label": "Contact", "href": "/contact"},
                ],
            },
        },
        {
            "kind": "hero",
            "props": {
                "heading": f"Welcome to {site_name}",
                "subheading": "We are excited to have you here",
                "cta_text": "Get Started",
                "cta_link": "/contact",
            },
        },
        {
            "kind": "features",
            "props": {
                "title": "Our Services",
                "subtitle": "What we offer",
                "features": [
                    {"icon": "star", "title": "Quality", "description": "We deliver the best quality"},
                    {"icon": "clock", "title": "Fast", "description": "Quick turnaround time"},
                    {"icon": "shield", "title": "Reliable", "description": "You can count on us"},
                ],
            },
        },
        {
            "kind": "cta",
            "props": {
                "heading": "Ready to get started?",
                "subheading": "Contact us today",
                "button_text": "Contact Us",
                "button_link": "/contact",
            },
        },
        {
            "kind": "footer",
            "props": {"copyright": f"© {site_name}"},
        },
    ]


def create_site(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    name: str,
    subdomain: Optional[str] = None,
    branding: Optional[Dict[str, Any]] = None,
    seo_defaults: Optional[Dict[str, Any]] = None,
    favicon_url: Optional[str] = None,
    custom_domain: Optional[str] = None,
    with_starter_blocks: bool = False,
) -> Site:
    """
    Create a draft website together with its home page.

    Edge cases handled:
    - Missing name
    - Subdomain format and global uniqueness (generated when absent)
    - Every site is born with exactly one home page at "/"
    """
    assert_site_name(name)
    name = name.strip()

    if subdomain is None:
        subdomain = generate_subdomain(name)
    assert_subdomain(subdomain)
    assert_subdomain_available(subdomain)
    assert_custom_domain(custom_domain)

    if branding is not None:
        assert_json_object(branding, "branding")
    if seo_defaults is not None:
        assert_json_object(seo_defaults, "seo_defaults")

    branding = {**DEFAULT_BRANDING, **(branding or {})}
    if seo_defaults is None:
        seo_defaults = {"title_template": f"%s | {name}"}

    site = Site()
    site.tenant_id = tenant_id
    site.name = name
    site.subdomain = subdomain
    site.custom_domain = custom_domain
    site.domain_verified = False
    site.status = "draft"
    site.branding = branding
    site.seo_defaults = seo_defaults
    site.favicon_url = favicon_url

    home = Page()
    home.tenant_id = tenant_id
    home.title = "Home"
    home.slug = HOME_SLUG
    home.status = "draft"
    home.is_home = True
    home.seo = {}
    home.show_in_nav = True
    home.nav_order = 0
    site.pages.append(home)

    with transactional("Website could not be created; nothing was saved."):
        db.session.add(site)
        db.session.flush()  # ensures site.id and home.id exist

        if with_starter_blocks:
            starters = _starter_blocks(name)
            for starter, key in zip(starters, keys_between(None, None, len(starters))):
                block = Block()
                block.tenant_id = tenant_id
                block.page_id = home.id
                block.kind = starter["kind"]
                block.props = starter["props"]
                block.order_key = key
                db.session.add(block)

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="site.create",
            entity_type="site",
            entity_id=site.id,
            payload={"name": name, "subdomain": subdomain},
        )

    logger.info("Created site %s (%s) for tenant %s", site.id, subdomain, tenant_id)
    return site
