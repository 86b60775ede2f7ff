from sitebuilder.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

PAGE_STATUSES = ("draft", "published", "hidden")

class Page(BaseModel, TenantMixin):
    __tablename__ = 'pages'

    site_id = db.Column(db.String(36), db.ForeignKey("sites.id"), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default='draft', index=True)
    is_home = db.Column(db.Boolean, nullable=False, default=False)
    seo = db.Column(db.JSON(none_as_null=True), default=dict)

    # Navigation metadata
    show_in_nav = db.Column(db.Boolean, nullable=False, default=True)
    nav_label = db.Column(db.String(100), nullable=True)
    nav_order = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.UniqueConstraint("site_id", "slug", name="uq_page_slug_per_site"),
    )

    site = db.relationship("Site", back_populates="pages")

    # Blocks are listed through sitebuilder.application.cms.lookups.ordered_blocks,
    # which sorts in Python so database collation never affects order_key order.
    blocks = db.relationship(
        "Block",
        back_populates="page",
        order_by="Block.order_key",
        cascade="all, delete-orphan"
    )
    versions = db.relationship(
        "PageVersion",
        back_populates="page",
        cascade="all, delete-orphan",
    )
