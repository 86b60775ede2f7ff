"""
Default props for every block kind and the coercion that applies them.

Storage accepts any JSON object as ``props``; it is only here, at render
time, that a kind's shape is enforced. Each prop is coerced to the type of
its default and falls back to the default when that is not possible, so a
template can rely on every key being present and well-typed.
"""
import copy
from typing import Any, Dict

DEFAULT_PROPS: Dict[str, Dict[str, Any]] = {
    "navbar": {
        "brand": "",
        "logo_url": "",
        "links": [],
        "cta_text": "",
        "cta_link": "",
    },
    "hero": {
        "heading": "Welcome",
        "subheading": "",
        "cta_text": "",
        "cta_link": "#",
        "background_image": "",
        "alignment": "center",
    },
    "features": {
        "title": "Features",
        "subtitle": "",
        "columns": 3,
        "features": [
            {"icon": "", "title": "", "description": ""},
        ],
    },
    "gallery": {
        "title": "",
        "columns": 3,
        "images": [
            {"url": "", "alt": "", "caption": ""},
        ],
    },
    "testimonials": {
        "title": "What people say",
        "testimonials": [
            {"quote": "", "author": "", "role": "", "avatar_url": ""},
        ],
    },
    "pricing": {
        "title": "Pricing",
        "subtitle": "",
        "plans": [
            {
                "name": "",
                "price": "",
                "period": "",
                "features": [],
                "cta_text": "",
                "cta_link": "",
                "highlighted": False,
            },
        ],
    },
    "cta": {
        "heading": "Ready to get started?",
        "subheading": "",
        "button_text": "Get in touch",
        "button_link": "#",
    },
    "contact_form": {
        "title": "Contact us",
        "subtitle": "",
        "email": "",
        "phone": "",
        "address": "",
        "submit_text": "Send",
        "fields": [
            {"name": "name", "label": "Name", "type": "text", "required": True},
        ],
    },
    "team": {
        "title": "Our team",
        "members": [
            {"name": "", "role": "", "bio": "", "photo_url": ""},
        ],
    },
    "faq": {
        "title": "Frequently asked questions",
        "items": [
            {"question": "", "answer": ""},
        ],
    },
    "stats": {
        "title": "",
        "stats": [
            {"value": "", "label": ""},
        ],
    },
    "blog_grid": {
        "title": "Latest posts",
        "posts": [
            {"title": "", "excerpt": "", "url": "", "image_url": "", "date": ""},
        ],
    },
    "video_embed": {
        "title": "",
        "url": "",
        "caption": "",
    },
    "map": {
        "title": "",
        "address": "",
        "embed_url": "",
    },
    "rich_text": {
        "title": "",
        "body": "",
    },
    "image_text": {
        "heading": "",
        "body": "",
        "image_url": "",
        "image_alt": "",
        "image_position": "left",
        "cta_text": "",
        "cta_link": "",
    },
    "footer": {
        "copyright": "",
        "links": [],
        "social": [],
    },
    "custom_html": {
        "html": "",
        "height": 400,
    },
}

# Object lists that default to empty, so their item shape is declared here
_LINK_SHAPE = {"label": "", "href": ""}
_ITEM_SHAPES = {
    ("navbar", "links"): _LINK_SHAPE,
    ("footer", "links"): _LINK_SHAPE,
    ("footer", "social"): {"platform": "", "url": ""},
}

GENERIC_HEADING_KEYS = ("heading", "title")
GENERIC_BODY_KEYS = ("subheading", "subtitle", "description")


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _blank(shape: Dict[str, Any]) -> Dict[str, Any]:
    """Item template for a list: same keys, empty values."""
    blank = {}
    for key, default in shape.items():
        if isinstance(default, str):
            blank[key] = ""
        elif isinstance(default, list):
            blank[key] = []
        else:
            blank[key] = default
    return blank


def coerce(value, default):
    """
    Return ``value`` converted to the type of ``default``, or a copy of
    ``default`` when it cannot be.
    """
    if isinstance(default, bool):
        return value if isinstance(value, bool) else default

    if _is_number(default):
        if _is_number(value):
            return value
        if isinstance(value, str):
            try:
                return type(default)(value.strip())
            except ValueError:
                return default
        return default

    if isinstance(default, str):
        if isinstance(value, str):
            return value
        if _is_number(value):
            return str(value)
        return default

    if isinstance(default, dict):
        source = value if isinstance(value, dict) else {}
        return {key: coerce(source.get(key), sub) for key, sub in default.items()}

    if isinstance(default, list):
        if not isinstance(value, list):
            return copy.deepcopy(default)
        if default and isinstance(default[0], dict):
            shape = _blank(default[0])
            return [coerce(item, shape) for item in value if isinstance(item, dict)]
        return [str(item) for item in value if isinstance(item, str) or _is_number(item)]

    return copy.deepcopy(default)


def resolve_props(kind: str, props) -> Dict[str, Any]:
    """
    Complete, well-typed props for a known ``kind``.
    """
    props = props if isinstance(props, dict) else {}
    resolved = coerce(props, DEFAULT_PROPS[kind])

    for (shape_kind, key), shape in _ITEM_SHAPES.items():
        if shape_kind == kind:
            raw = props.get(key)
            items = raw if isinstance(raw, list) else []
            resolved[key] = [coerce(item, shape) for item in items if isinstance(item, dict)]

    return resolved


def generic_props(props) -> Dict[str, str]:
    """
    Heading and body for a kind this renderer does not know.
    """
    props = props if isinstance(props, dict) else {}

    def first_text(keys):
        for key in keys:
            value = props.get(key)
            if isinstance(value, str) and value:
                return value
            if _is_number(value):
                return str(value)
        return ""

    return {
        "heading": first_text(GENERIC_HEADING_KEYS),
        "body": first_text(GENERIC_BODY_KEYS),
    }
