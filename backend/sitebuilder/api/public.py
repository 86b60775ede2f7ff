"""
Public site serving: renders the live deployment of a site as HTML.

Registered without the tenant middleware; the site is resolved from the
URL (or, behind the wildcard domain router, from the Host header).
"""
from flask import Blueprint, Response

from sitebuilder.application.cms.deployments import live_deployment_for, resolve_public_site
from sitebuilder.rendering import render

public_bp = Blueprint("public", __name__)


@public_bp.route("/sites/<subdomain>/", defaults={"path": ""}, methods=["GET"])
@public_bp.route("/sites/<subdomain>/<path:path>", methods=["GET"])
def serve_site(subdomain, path):
    site = resolve_public_site(subdomain)
    if site is None:
        rendered = render({"pages": []}, "/" + path)
    else:
        deployment = live_deployment_for(site)
        rendered = render(deployment.snapshot if deployment else None, "/" + path)

    return Response(rendered.html, status=rendered.status_code, mimetype="text/html")
