from .tenant import Tenant
from .site import Site
from .page import Page
from .block import Block
from .page_version import PageVersion
from .deployment import Deployment
from .audit_log import AuditLog

__all__ = [
    "Tenant",
    "Site",
    "Page",
    "Block",
    "PageVersion",
    "Deployment",
    "AuditLog",
]
