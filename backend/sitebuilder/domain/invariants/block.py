from .exceptions import InvalidState, PermissionDenied

# Closed set of block kinds the editor can create. The renderer still copes
# with kinds outside this list (older or newer rows).
BLOCK_KINDS = (
    "navbar",
    "hero",
    "features",
    "gallery",
    "testimonials",
    "pricing",
    "cta",
    "contact_form",
    "team",
    "faq",
    "stats",
    "blog_grid",
    "video_embed",
    "map",
    "rich_text",
    "image_text",
    "footer",
    "custom_html",
)


def assert_block_kind(kind) -> None:
    if kind not in BLOCK_KINDS:
        raise InvalidState(
            f"Invalid block kind '{kind}'. Must be one of: {', '.join(BLOCK_KINDS)}"
        )


def assert_block_props(props) -> None:
    if not isinstance(props, dict):
        raise InvalidState("Block props must be an object")


def assert_block_editable(block, *, is_privileged: bool, action: str = "edit") -> None:
    """
    Locked blocks can only be changed by callers the RBAC service has
    already marked as privileged.
    """
    if block.is_locked and not is_privileged:
        raise PermissionDenied(
            f"This block is locked and requires admin permission to {action}"
        )


def assert_unique_order_keys(order_keys) -> None:
    keys = list(order_keys)
    if len(keys) != len(set(keys)):
        raise InvalidState("Block order keys must be unique within a page")
