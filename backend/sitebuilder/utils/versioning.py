import copy
from typing import Any, Dict, Iterable, List


def snapshot_blocks(blocks: Iterable) -> List[Dict[str, Any]]:
    """
    Denormalized value copy of a page's blocks, in the order given.
    Later edits to the live rows never reach the returned structure.
    """
    return [
        {
            "kind": b.kind,
            "props": copy.deepcopy(b.props or {}),
            "order_key": b.order_key,
            "is_visible": bool(b.is_visible),
            "is_locked": bool(b.is_locked),
        }
        for b in blocks
    ]


def snapshot_page(page, blocks: Iterable) -> Dict[str, Any]:
    """
    Publishable view of one page: only what the public renderer needs.
    """
    return {
        "id": page.id,
        "title": page.title,
        "slug": page.slug,
        "is_home": bool(page.is_home),
        "seo": copy.deepcopy(page.seo or {}),
        "blocks": [
            {
                "kind": b.kind,
                "props": copy.deepcopy(b.props or {}),
            }
            for b in blocks
            if b.is_visible
        ],
    }


def snapshot_navigation(pages: Iterable) -> List[Dict[str, Any]]:
    ordered = sorted(pages, key=lambda p: (p.nav_order or 0, p.slug))
    return [
        {"label": p.nav_label or p.title, "slug": p.slug}
        for p in ordered
        if p.show_in_nav and p.status != "hidden"
    ]


def next_version(page_id, tenant_id):
    from sitebuilder.models.page_version import PageVersion

    last = (
        PageVersion.query
        .filter_by(page_id=page_id, tenant_id=tenant_id)
        .order_by(PageVersion.version.desc())
        .first()
    )
    return (last.version + 1) if last else 1
