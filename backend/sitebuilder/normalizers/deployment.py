from typing import Any, Dict

from sitebuilder.models.deployment import Deployment


def normalize_deployment(deployment: Deployment, include_snapshot: bool = False) -> Dict[str, Any]:
    data = {
        "id": deployment.id,
        "site_id": deployment.site_id,
        "is_live": bool(deployment.is_live),
        "deployed_by": deployment.deployed_by,
        "deployed_at": deployment.deployed_at.isoformat(),
    }

    if include_snapshot:
        data["snapshot"] = deployment.snapshot

    return data
