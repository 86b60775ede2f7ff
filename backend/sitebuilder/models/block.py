from sitebuilder.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

class Block(BaseModel, TenantMixin):
    __tablename__ = "blocks"

    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False)
    kind = db.Column(db.String(50), nullable=False)  # hero, features, cta, ...
    order_key = db.Column(db.Text, nullable=False)
    props = db.Column(db.JSON, nullable=False, default=dict)
    is_visible = db.Column(db.Boolean, nullable=False, default=True)
    is_locked = db.Column(db.Boolean, nullable=False, default=False)

    page = db.relationship("Page", back_populates="blocks")

    __table_args__ = (
        db.UniqueConstraint("page_id", "order_key", name="uq_page_block_order_key"),
        db.Index("idx_block_page_order", "page_id", "order_key"),
    )
