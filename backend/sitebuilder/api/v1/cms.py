from flask import Response, g, request, jsonify
from flask_jwt_extended import jwt_required

from sitebuilder.application.cms.archive_site import archive_site as archive_site_uc
from sitebuilder.application.cms.create_block import create_block as create_block_uc
from sitebuilder.application.cms.create_page import create_page as create_page_uc
from sitebuilder.application.cms.create_site import create_site as create_site_uc
from sitebuilder.application.cms.delete_block import delete_block as delete_block_uc
from sitebuilder.application.cms.delete_page import delete_page as delete_page_uc
from sitebuilder.application.cms.deployments import get_live_deployment, list_deployments
from sitebuilder.application.cms.lookups import (
    get_block,
    get_page,
    get_site,
    list_blocks,
    list_pages,
    list_sites,
    ordered_blocks,
)
from sitebuilder.application.cms.move_block import move_block as move_block_uc
from sitebuilder.application.cms.publish_site import publish_site as publish_site_uc
from sitebuilder.application.cms.restore_version import restore_version as restore_version_uc
from sitebuilder.application.cms.update_block import update_block as update_block_uc
from sitebuilder.application.cms.update_page import update_page as update_page_uc
from sitebuilder.application.cms.update_site import update_site as update_site_uc
from sitebuilder.application.cms.versions import get_version, list_versions, snapshot_version
from sitebuilder.domain.invariants.exceptions import InvalidState
from sitebuilder.normalizers.block import normalize_block
from sitebuilder.normalizers.deployment import normalize_deployment
from sitebuilder.normalizers.page import normalize_page
from sitebuilder.normalizers.site import normalize_site
from sitebuilder.normalizers.version import normalize_version
from sitebuilder.rendering import render_preview
from sitebuilder.utils.decorators import (
    PRIVILEGED_ROLES,
    current_actor_id,
    is_privileged,
    roles_required,
    tenant_required,
    tenant_retention_limit,
)
from sitebuilder.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp  # import the versioned blueprint


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidState("Request body must be a JSON object")
    return data


# ------------------------
# Sites
# ------------------------

@v1_bp.route("/sites", methods=["POST"])
@jwt_required()
@tenant_required
def create_site():
    data = _json_body()

    site = create_site_uc(
        tenant_id=g.current_tenant.id,
        actor_id=current_actor_id(),
        name=data.get("name"),
        subdomain=data.get("subdomain"),
        branding=data.get("branding"),
        seo_defaults=data.get("seo_defaults"),
        favicon_url=data.get("favicon_url"),
        custom_domain=data.get("custom_domain"),
        with_starter_blocks=bool(data.get("with_starter_blocks", False)),
    )
    return jsonify(normalize_site(site)), 201


@v1_bp.route("/sites", methods=["GET"])
@jwt_required()
@tenant_required
def list_sites_route():
    include_archived = request.args.get("include_archived", "false").lower() == "true"
    sites = list_sites(tenant_id=g.current_tenant.id, include_archived=include_archived)
    return jsonify({"data": [normalize_site(s) for s in sites]}), 200


@v1_bp.route("/sites/<site_id>", methods=["GET"])
@jwt_required()
@tenant_required
def get_site_route(site_id):
    site = get_site(tenant_id=g.current_tenant.id, site_id=site_id)
    return jsonify(normalize_site(site)), 200


@v1_bp.route("/sites/<site_id>", methods=["PATCH"])
@jwt_required()
@tenant_required
def update_site(site_id):
    site = update_site_uc(
        tenant_id=g.current_tenant.id,
        site_id=site_id,
        actor_id=current_actor_id(),
        data=_json_body(),
    )
    return jsonify(normalize_site(site)), 200


@v1_bp.route("/sites/<site_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
@roles_required(*PRIVILEGED_ROLES)
def archive_site(site_id):
    site = archive_site_uc(
        tenant_id=g.current_tenant.id,
        site_id=site_id,
        actor_id=current_actor_id(),
    )
    return jsonify(normalize_site(site)), 200


@v1_bp.route("/sites/<site_id>/preview", defaults={"path": ""}, methods=["GET"])
@v1_bp.route("/sites/<site_id>/preview/<path:path>", methods=["GET"])
@jwt_required()
@tenant_required
def preview_site(site_id, path):
    site = get_site(tenant_id=g.current_tenant.id, site_id=site_id)
    rendered = render_preview(site, "/" + path)
    return Response(rendered.html, status=rendered.status_code, mimetype="text/html")


# ------------------------
# Publishing
# ------------------------

@v1_bp.route("/sites/<site_id>/publish", methods=["POST"])
@jwt_required()
@tenant_required
def publish_site(site_id):
    deployment = publish_site_uc(
        tenant_id=g.current_tenant.id,
        site_id=site_id,
        actor_id=current_actor_id(),
    )
    return jsonify(normalize_deployment(deployment)), 201


@v1_bp.route("/sites/<site_id>/deployments", methods=["GET"])
@jwt_required()
@tenant_required
def list_deployments_route(site_id):
    deployments = list_deployments(tenant_id=g.current_tenant.id, site_id=site_id)
    return jsonify({"data": [normalize_deployment(d) for d in deployments]}), 200


@v1_bp.route("/sites/<site_id>/deployments/live", methods=["GET"])
@jwt_required()
@tenant_required
def get_live_deployment_route(site_id):
    deployment = get_live_deployment(tenant_id=g.current_tenant.id, site_id=site_id)
    if deployment is None:
        return jsonify({"deployment": None}), 200

    include_snapshot = request.args.get("include_snapshot", "false").lower() == "true"
    return jsonify({"deployment": normalize_deployment(deployment, include_snapshot=include_snapshot)}), 200


# ------------------------
# Pages
# ------------------------

@v1_bp.route("/sites/<site_id>/pages", methods=["POST"])
@jwt_required()
@tenant_required
def create_page(site_id):
    page = create_page_uc(
        tenant_id=g.current_tenant.id,
        actor_id=current_actor_id(),
        site_id=site_id,
        data=_json_body(),
    )
    return jsonify(normalize_page(page, admin=True)), 201


@v1_bp.route("/sites/<site_id>/pages", methods=["GET"])
@jwt_required()
@tenant_required
def list_pages_route(site_id):
    pages = list_pages(tenant_id=g.current_tenant.id, site_id=site_id)
    return jsonify({"data": [normalize_page(p) for p in pages]}), 200


@v1_bp.route("/pages/<page_id>", methods=["GET"])
@jwt_required()
@tenant_required
def get_page_route(page_id):
    tenant = g.current_tenant
    page = get_page(tenant_id=tenant.id, page_id=page_id)
    blocks = ordered_blocks(page.id, tenant.id)
    return jsonify(normalize_page(page, admin=True, blocks=blocks)), 200


@v1_bp.route("/pages/<page_id>", methods=["PATCH"])
@jwt_required()
@tenant_required
def update_page(page_id):
    tenant = g.current_tenant

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(get_page(tenant_id=tenant.id, page_id=page_id))

    page = update_page_uc(
        tenant_id=tenant.id,
        page_id=page_id,
        actor_id=current_actor_id(),
        data=_json_body(),
    )
    return jsonify(normalize_page(page, admin=True)), 200


@v1_bp.route("/pages/<page_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
def delete_page(page_id):
    delete_page_uc(
        tenant_id=g.current_tenant.id,
        page_id=page_id,
        actor_id=current_actor_id(),
    )
    return jsonify({"message": "Page deleted"}), 200


# ------------------------
# Blocks
# ------------------------

@v1_bp.route("/pages/<page_id>/blocks", methods=["POST"])
@jwt_required()
@tenant_required
def create_block(page_id):
    data = _json_body()

    block = create_block_uc(
        tenant_id=g.current_tenant.id,
        actor_id=current_actor_id(),
        page_id=page_id,
        kind=data.get("kind"),
        props=data.get("props"),
        after_block_id=data.get("after_block_id"),
        is_visible=data.get("is_visible", True),
    )
    return jsonify(normalize_block(block, admin=True)), 201


@v1_bp.route("/pages/<page_id>/blocks", methods=["GET"])
@jwt_required()
@tenant_required
def list_blocks_route(page_id):
    blocks = list_blocks(tenant_id=g.current_tenant.id, page_id=page_id)
    return jsonify({"data": [normalize_block(b) for b in blocks]}), 200


@v1_bp.route("/blocks/<block_id>", methods=["PATCH"])
@jwt_required()
@tenant_required
def update_block(block_id):
    tenant = g.current_tenant

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(get_block(tenant_id=tenant.id, block_id=block_id))

    block = update_block_uc(
        tenant_id=tenant.id,
        actor_id=current_actor_id(),
        block_id=block_id,
        data=_json_body(),
        is_privileged=is_privileged(),
    )
    return jsonify(normalize_block(block, admin=True)), 200


@v1_bp.route("/blocks/<block_id>/move", methods=["POST"])
@jwt_required()
@tenant_required
def move_block(block_id):
    data = _json_body()

    block = move_block_uc(
        tenant_id=g.current_tenant.id,
        actor_id=current_actor_id(),
        block_id=block_id,
        after_block_id=data.get("after_block_id"),
        is_privileged=is_privileged(),
    )
    return jsonify(normalize_block(block, admin=True)), 200


@v1_bp.route("/blocks/<block_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
def delete_block(block_id):
    delete_block_uc(
        tenant_id=g.current_tenant.id,
        actor_id=current_actor_id(),
        block_id=block_id,
        is_privileged=is_privileged(),
    )
    return jsonify({"message": "Block deleted"}), 200


# ------------------------
# Versions
# ------------------------

@v1_bp.route("/pages/<page_id>/versions", methods=["POST"])
@jwt_required()
@tenant_required
def snapshot_page_version(page_id):
    data = _json_body()

    version = snapshot_version(
        tenant_id=g.current_tenant.id,
        page_id=page_id,
        actor_id=current_actor_id(),
        retention_limit=tenant_retention_limit(),
        label=data.get("label"),
        trigger=data.get("trigger", "manual"),
    )
    return jsonify(normalize_version(version)), 201


@v1_bp.route("/pages/<page_id>/versions", methods=["GET"])
@jwt_required()
@tenant_required
def list_versions_route(page_id):
    versions = list_versions(tenant_id=g.current_tenant.id, page_id=page_id)
    return jsonify({"data": [normalize_version(v) for v in versions]}), 200


@v1_bp.route("/versions/<version_id>", methods=["GET"])
@jwt_required()
@tenant_required
def get_version_route(version_id):
    version = get_version(tenant_id=g.current_tenant.id, version_id=version_id)
    return jsonify(normalize_version(version, include_snapshot=True)), 200


@v1_bp.route("/pages/<page_id>/versions/<version_id>/restore", methods=["POST"])
@jwt_required()
@tenant_required
def restore_page_version(page_id, version_id):
    result = restore_version_uc(
        tenant_id=g.current_tenant.id,
        page_id=page_id,
        version_id=version_id,
        actor_id=current_actor_id(),
        retention_limit=tenant_retention_limit(),
    )
    return jsonify(result), 200
