import re

MAX_SLUG_LENGTH = 200

_DISALLOWED = re.compile(r"[^a-z0-9\s_-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(title: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """
    Derive a URL-safe slug from a title.

    Characters outside a-z, 0-9, whitespace, underscore and hyphen are dropped,
    so titles written entirely in Devanagari yield an empty slug.
    """
    if not title:
        return ""
    slug = title.lower().strip()
    slug = _DISALLOWED.sub("", slug)
    slug = _SEPARATORS.sub("-", slug)
    slug = slug.strip("-")
    return slug[:max_length].rstrip("-")
