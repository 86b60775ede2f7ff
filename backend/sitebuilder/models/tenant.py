from sitebuilder.extensions import db
from .base import BaseModel

class Tenant(BaseModel):
    """
    Minimal tenant record. Plans, billing and membership live in other
    services; this table only anchors tenant-scoped rows.
    """
    __tablename__ = "tenants"

    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    is_active = db.Column(db.Boolean, default=True)

    # Plan-derived settings pushed by the billing system, e.g.
    # {"version_history_limit": 30}
    features = db.Column(db.JSON, default=dict)

    def retention_limit(self, default: int) -> int:
        """
        Number of page versions kept for this tenant's plan.
        """
        value = (self.features or {}).get("version_history_limit")
        if isinstance(value, int) and value > 0:
            return value
        return default
