"""Tests for the HTTP surface."""

from email.utils import format_datetime
from datetime import timedelta

from flask_jwt_extended import create_access_token

from sitebuilder.application.cms.lookups import get_page
from sitebuilder.models.tenant import Tenant


def _create_block(client, headers, page_id, kind, **extra):
    response = client.post(f"/api/v1/pages/{page_id}/blocks", json={"kind": kind, **extra}, headers=headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


class TestAuthAndTenancy:
    def test_health_needs_no_tenant(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.get_json()["status"] == "ok"

    def test_missing_tenant_header(self, client, editor_headers):
        headers = {"Authorization": editor_headers["Authorization"]}
        response = client.get("/api/v1/sites", headers=headers)
        assert response.status_code == 400

    def test_missing_token(self, client, tenant):
        response = client.get("/api/v1/sites", headers={"X-Tenant-ID": tenant.id})
        assert response.status_code == 401

    def test_token_for_other_tenant(self, client, editor_headers, other_tenant):
        headers = {**editor_headers, "X-Tenant-ID": other_tenant.id}
        response = client.get("/api/v1/sites", headers=headers)
        assert response.status_code == 403


class TestSiteRoutes:
    def test_create_and_list_sites(self, client, editor_headers):
        response = client.post("/api/v1/sites", json={"name": "Bakery", "subdomain": "bakery"}, headers=editor_headers)
        assert response.status_code == 201
        assert response.get_json()["status"] == "draft"

        listing = client.get("/api/v1/sites", headers=editor_headers).get_json()
        assert [s["subdomain"] for s in listing["data"]] == ["bakery"]

    def test_invalid_state_maps_to_400(self, client, editor_headers, site):
        response = client.patch(f"/api/v1/sites/{site.id}", json={"subdomain": "other"}, headers=editor_headers)
        assert response.status_code == 400
        assert response.get_json()["error"] == "InvalidState"

    def test_foreign_site_maps_to_404(self, client, site, other_tenant, app):
        token = create_access_token(identity="intruder", additional_claims={"tenant_id": other_tenant.id, "role": "owner"})
        headers = {"Authorization": f"Bearer {token}", "X-Tenant-ID": other_tenant.id}

        response = client.get(f"/api/v1/sites/{site.id}", headers=headers)
        assert response.status_code == 404
        assert response.get_json()["error"] == "NotFound"

    def test_archive_requires_privileged_role(self, client, editor_headers, admin_headers, site):
        assert client.delete(f"/api/v1/sites/{site.id}", headers=editor_headers).status_code == 403

        response = client.delete(f"/api/v1/sites/{site.id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.get_json()["status"] == "archived"


class TestBlockRoutes:
    def test_block_crud(self, client, editor_headers, home_page):
        hero = _create_block(client, editor_headers, home_page.id, "hero", props={"heading": "Hi"})
        cta = _create_block(client, editor_headers, home_page.id, "cta")

        response = client.post(f"/api/v1/blocks/{cta['id']}/move", json={"after_block_id": None}, headers=editor_headers)
        assert response.status_code == 200

        listing = client.get(f"/api/v1/pages/{home_page.id}/blocks", headers=editor_headers).get_json()
        assert [b["kind"] for b in listing["data"]] == ["cta", "hero"]

        response = client.delete(f"/api/v1/blocks/{hero['id']}", headers=editor_headers)
        assert response.status_code == 200

    def test_locked_block_is_forbidden_for_editors(self, client, editor_headers, admin_headers, home_page):
        block = _create_block(client, editor_headers, home_page.id, "hero")

        response = client.patch(f"/api/v1/blocks/{block['id']}", json={"is_locked": True}, headers=editor_headers)
        assert response.status_code == 403
        assert response.get_json()["error"] == "PermissionDenied"

        response = client.patch(f"/api/v1/blocks/{block['id']}", json={"is_locked": True}, headers=admin_headers)
        assert response.status_code == 200
        assert response.get_json()["is_locked"] is True

    def test_stale_edit_is_rejected(self, client, editor_headers, tenant, home_page):
        page = get_page(tenant_id=tenant.id, page_id=home_page.id)
        stale = format_datetime(page.updated_at.replace(tzinfo=None) - timedelta(minutes=5), usegmt=False)

        response = client.patch(
            f"/api/v1/pages/{home_page.id}",
            json={"title": "Welcome"},
            headers={**editor_headers, "If-Unmodified-Since": stale},
        )
        assert response.status_code == 409
        assert response.get_json()["error"] == "EditConflict"


class TestVersionAndPublishRoutes:
    def test_retention_follows_tenant_plan(self, client, editor_headers, tenant, home_page, db):
        tenant_row = db.session.get(Tenant, tenant.id)
        tenant_row.features = {"version_history_limit": 2}
        db.session.commit()

        for label in ("one", "two", "three"):
            response = client.post(
                f"/api/v1/pages/{home_page.id}/versions",
                json={"label": label},
                headers=editor_headers,
            )
            assert response.status_code == 201

        listing = client.get(f"/api/v1/pages/{home_page.id}/versions", headers=editor_headers).get_json()
        assert [v["label"] for v in listing["data"]] == ["three", "two"]
        assert all("content_snapshot" not in v for v in listing["data"])

    def test_publish_and_serve(self, client, editor_headers, site, home_page):
        _create_block(client, editor_headers, home_page.id, "hero", props={"heading": "Live now"})

        assert client.get("/sites/acme-studio/").status_code == 200
        assert b"Coming soon" in client.get("/sites/acme-studio/").data

        response = client.post(f"/api/v1/sites/{site.id}/publish", headers=editor_headers)
        assert response.status_code == 201
        assert response.get_json()["is_live"] is True

        page = client.get("/sites/acme-studio/")
        assert page.status_code == 200
        assert page.mimetype == "text/html"
        assert b"Live now" in page.data

        assert client.get("/sites/acme-studio/missing").status_code == 404

        live = client.get(f"/api/v1/sites/{site.id}/deployments/live", headers=editor_headers).get_json()
        assert live["deployment"]["id"] == response.get_json()["id"]

    def test_preview_renders_drafts(self, client, editor_headers, site, home_page):
        _create_block(client, editor_headers, home_page.id, "hero", props={"heading": "Work in progress"})

        response = client.get(f"/api/v1/sites/{site.id}/preview", headers=editor_headers)
        assert response.status_code == 200
        assert b"Work in progress" in response.data
