from sitebuilder.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

SITE_STATUSES = ("draft", "published", "archived")

class Site(BaseModel, TenantMixin):
    __tablename__ = "sites"

    name = db.Column(db.String(255), nullable=False)
    subdomain = db.Column(db.String(63), unique=True, nullable=False, index=True)
    custom_domain = db.Column(db.String(255), unique=True, nullable=True)
    domain_verified = db.Column(db.Boolean, nullable=False, default=False)
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)

    # {"primary_color", "secondary_color", "accent_color", "font_heading", "font_body", "logo_url"}
    branding = db.Column(db.JSON, nullable=False, default=dict)
    # {"title_template": "%s | Acme", "description": ...}
    seo_defaults = db.Column(db.JSON, nullable=False, default=dict)
    favicon_url = db.Column(db.String(512), nullable=True)

    published_at = db.Column(db.DateTime(timezone=True), nullable=True)
    last_deployed_at = db.Column(db.DateTime(timezone=True), nullable=True)

    pages = db.relationship(
        "Page",
        back_populates="site",
        order_by="Page.nav_order",
        cascade="all, delete-orphan",
    )
    deployments = db.relationship(
        "Deployment",
        back_populates="site",
        cascade="all, delete-orphan",
    )

    @property
    def home_page(self):
        return next((p for p in self.pages if p.is_home), None)
