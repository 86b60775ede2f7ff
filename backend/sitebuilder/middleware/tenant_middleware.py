from flask import request, g, jsonify
from sitebuilder.models.tenant import Tenant

# Endpoints that answer without a tenant
TENANT_EXEMPT_ENDPOINTS = {"v1.health_check"}


def tenant_middleware(blueprint):
    @blueprint.before_request
    def load_tenant():
        if request.endpoint in TENANT_EXEMPT_ENDPOINTS or request.method == "OPTIONS":
            return None

        tenant_id = request.headers.get("X-Tenant-ID")
        if not tenant_id:
            return jsonify({"error": "X-Tenant-ID header is missing"}), 400

        tenant = Tenant.query.filter_by(id=tenant_id, is_active=True).first()
        if not tenant:
            return jsonify({"error": "Invalid tenant"}), 404

        g.current_tenant = tenant
        return None
