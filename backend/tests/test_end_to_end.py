"""End-to-end flows across the content tree, history and publishing."""

import pytest

from sitebuilder.application.cms.create_block import create_block
from sitebuilder.application.cms.create_page import create_page
from sitebuilder.application.cms.deployments import get_live_deployment, list_deployments
from sitebuilder.application.cms.lookups import get_page, list_blocks
from sitebuilder.application.cms.publish_site import publish_site
from sitebuilder.application.cms.restore_version import restore_version
from sitebuilder.application.cms.update_page import update_page
from sitebuilder.application.cms.versions import snapshot_version
from sitebuilder.domain.invariants.exceptions import InvalidState
from sitebuilder.rendering import render

from .conftest import ACTOR_ID


def _page_blocks(deployment, slug):
    page = next(p for p in deployment.snapshot["pages"] if p["slug"] == slug)
    return page["blocks"]


class TestPublishRestoreRepublish:
    def test_full_flow(self, tenant, site):
        about = create_page(
            tenant_id=tenant.id,
            actor_id=ACTOR_ID,
            site_id=site.id,
            data={"title": "About", "slug": "/about"},
        )
        create_block(tenant_id=tenant.id, actor_id=ACTOR_ID, page_id=about.id, kind="hero", props={"heading": "Hi"})
        v1 = snapshot_version(
            tenant_id=tenant.id,
            page_id=about.id,
            actor_id=ACTOR_ID,
            retention_limit=10,
            label="v1",
        )
        create_block(tenant_id=tenant.id, actor_id=ACTOR_ID, page_id=about.id, kind="cta")

        first = publish_site(tenant_id=tenant.id, site_id=site.id, actor_id=ACTOR_ID)
        assert [b["kind"] for b in _page_blocks(first, "/about")] == ["hero", "cta"]

        restore_version(
            tenant_id=tenant.id,
            page_id=about.id,
            version_id=v1.id,
            actor_id=ACTOR_ID,
            retention_limit=10,
        )
        assert [b.kind for b in list_blocks(tenant_id=tenant.id, page_id=about.id)] == ["hero"]

        second = publish_site(tenant_id=tenant.id, site_id=site.id, actor_id=ACTOR_ID)
        assert [b["kind"] for b in _page_blocks(second, "/about")] == ["hero"]

        deployments = {d.id: d.is_live for d in list_deployments(tenant_id=tenant.id, site_id=site.id)}
        assert deployments == {first.id: False, second.id: True}

        live = get_live_deployment(tenant_id=tenant.id, site_id=site.id)
        rendered = render(live.snapshot, "/about")
        assert rendered.status_code == 200
        assert "Hi" in rendered.html
        assert "block-cta" not in rendered.html


class TestHomePageProtection:
    @pytest.mark.parametrize("data", [{"is_home": False}, {"slug": "/welcome"}])
    def test_home_page_is_unchanged(self, tenant, home_page, data):
        with pytest.raises(InvalidState):
            update_page(tenant_id=tenant.id, page_id=home_page.id, actor_id=ACTOR_ID, data=data)

        page = get_page(tenant_id=tenant.id, page_id=home_page.id)
        assert page.is_home is True
        assert page.slug == "/"
