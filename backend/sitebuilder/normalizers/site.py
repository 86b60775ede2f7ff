def _iso(value):
    return value.isoformat() if value else None


def normalize_site(site):
    return {
        "id": site.id,
        "name": site.name,
        "subdomain": site.subdomain,
        "custom_domain": site.custom_domain,
        "domain_verified": bool(site.domain_verified),
        "status": site.status,
        "branding": site.branding or {},
        "seo_defaults": site.seo_defaults or {},
        "favicon_url": site.favicon_url,
        "published_at": _iso(site.published_at),
        "last_deployed_at": _iso(site.last_deployed_at),
        "created_at": _iso(site.created_at),
        "updated_at": _iso(site.updated_at),
    }
