from sitebuilder.extensions import db
from .base import BaseModel, utc_now
from .tenant_mixin import TenantMixin

VERSION_TRIGGERS = ("manual", "auto", "pre_ai", "pre_restore", "pre_publish")

class PageVersion(BaseModel, TenantMixin):
    __tablename__ = "page_versions"

    page_id = db.Column(
        db.String(36),
        db.ForeignKey("pages.id"),
        nullable=False
    )

    # Per-page sequence; pruning keeps the highest numbers
    version = db.Column(db.Integer, nullable=False)
    label = db.Column(db.String(255), nullable=False)
    trigger = db.Column(db.String(20), nullable=False, default="manual")

    # [{"kind", "props", "order_key", "is_visible", "is_locked"}, ...]
    content_snapshot = db.Column(db.JSON, nullable=False)

    saved_by = db.Column(db.String(36), nullable=True)
    saved_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utc_now)

    page = db.relationship("Page", back_populates="versions")

    __table_args__ = (
        db.UniqueConstraint("page_id", "version", name="uq_page_version"),
        db.Index("idx_page_version_page", "page_id"),
    )
