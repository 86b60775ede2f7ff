"""Shared test fixtures."""

import pytest
from flask_jwt_extended import create_access_token

from sitebuilder import create_app
from sitebuilder.extensions import db as _db
from sitebuilder.models.tenant import Tenant
from sitebuilder.application.cms.create_site import create_site

ACTOR_ID = "user-editor-1"


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


def _make_tenant(name, slug, features=None):
    tenant = Tenant()
    tenant.name = name
    tenant.slug = slug
    tenant.is_active = True
    tenant.features = features or {}
    _db.session.add(tenant)
    _db.session.commit()
    return tenant


@pytest.fixture
def tenant(db):
    return _make_tenant("Acme Inc", "acme")


@pytest.fixture
def other_tenant(db):
    return _make_tenant("Globex", "globex")


@pytest.fixture
def site(tenant):
    return create_site(
        tenant_id=tenant.id,
        actor_id=ACTOR_ID,
        name="Acme Studio",
        subdomain="acme-studio",
    )


@pytest.fixture
def home_page(site):
    return site.home_page


def _auth_headers(tenant, role):
    token = create_access_token(
        identity=ACTOR_ID,
        additional_claims={"tenant_id": tenant.id, "role": role},
    )
    return {"Authorization": f"Bearer {token}", "X-Tenant-ID": tenant.id}


@pytest.fixture
def editor_headers(app, tenant):
    return _auth_headers(tenant, "editor")


@pytest.fixture
def admin_headers(app, tenant):
    return _auth_headers(tenant, "admin")
