from sitebuilder.extensions import db
from .base import BaseModel, utc_now
from .tenant_mixin import TenantMixin

class Deployment(BaseModel, TenantMixin):
    """
    Immutable whole-site snapshot. Only ``is_live`` ever changes after insert.
    """
    __tablename__ = "deployments"

    site_id = db.Column(db.String(36), db.ForeignKey("sites.id"), nullable=False, index=True)
    snapshot = db.Column(db.JSON, nullable=False)
    is_live = db.Column(db.Boolean, nullable=False, default=False)
    deployed_by = db.Column(db.String(36), nullable=True)
    deployed_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utc_now)

    site = db.relationship("Site", back_populates="deployments")

    __table_args__ = (
        # At most one live deployment per site
        db.Index(
            "uq_deployment_live_per_site",
            "site_id",
            unique=True,
            sqlite_where=db.text("is_live = 1"),
            postgresql_where=db.text("is_live"),
        ),
        db.Index("idx_deployment_site_deployed", "site_id", "deployed_at"),
    )
