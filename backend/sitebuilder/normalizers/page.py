from .block import normalize_block


def normalize_page(page, admin=False, blocks=None):
    """
    ``blocks`` must already be in order_key order; pass None to leave
    them out.
    """
    data = {
        "id": page.id,
        "site_id": page.site_id,
        "title": page.title,
        "slug": page.slug,
        "status": page.status,
        "is_home": bool(page.is_home),
        "seo": page.seo or {},
        "show_in_nav": bool(page.show_in_nav),
        "nav_label": page.nav_label,
        "nav_order": page.nav_order,
    }

    if admin:
        data["created_at"] = page.created_at.isoformat()
        data["updated_at"] = page.updated_at.isoformat()

    if blocks is not None:
        data["blocks"] = [normalize_block(b, admin=admin) for b in blocks]

    return data
