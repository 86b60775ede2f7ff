from flask import Blueprint

from sitebuilder.middleware.tenant_middleware import tenant_middleware

# Create the versioned blueprint
v1_bp = Blueprint("v1", __name__)
tenant_middleware(v1_bp)

# Import route modules so they register with v1_bp
from . import health  # noqa: E402,F401
from . import cms  # noqa: E402,F401
