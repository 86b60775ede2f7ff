import re
import secrets
import string

# "/" or "/"-separated segments, no empty segment and no trailing "/"
PAGE_SLUG_RE = re.compile(r"/(?:[a-z0-9-]+(?:/[a-z0-9-]+)*)?")
SUBDOMAIN_RE = re.compile(r"^[a-z0-9][a-z0-9-]{1,38}[a-z0-9]$")
DOMAIN_RE = re.compile(r"^(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}$")

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def slugify(text: str) -> str:
    """
    "Pizza Palace" -> "pizza-palace"
    """
    text = re.sub(r"[^\w\s-]", "", text.lower().strip(), flags=re.ASCII)
    text = re.sub(r"[\s_-]+", "-", text)
    return text.strip("-")


def generate_subdomain(name: str) -> str:
    """
    Slug of ``name`` plus a random 4-char suffix, e.g. "pizza-palace-x7k2".
    """
    base = slugify(name)[:35].strip("-") or "site"
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(4))
    return f"{base}-{suffix}"


def is_valid_page_slug(slug) -> bool:
    return isinstance(slug, str) and PAGE_SLUG_RE.fullmatch(slug) is not None


def is_valid_subdomain(subdomain) -> bool:
    return isinstance(subdomain, str) and bool(SUBDOMAIN_RE.match(subdomain))


def is_valid_domain(domain) -> bool:
    return isinstance(domain, str) and bool(DOMAIN_RE.match(domain))
