from typing import Any, Dict

from sitebuilder.models.page_version import PageVersion


def normalize_version(version: PageVersion, include_snapshot: bool = False) -> Dict[str, Any]:
    """
    Version metadata; the block snapshot is only added on request so that
    listings never load it.
    """
    data = {
        "id": version.id,
        "page_id": version.page_id,
        "version": version.version,
        "label": version.label,
        "trigger": version.trigger,
        "saved_by": version.saved_by,
        "saved_at": version.saved_at.isoformat(),
    }

    if include_snapshot:
        data["content_snapshot"] = version.content_snapshot or []

    return data
