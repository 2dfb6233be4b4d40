"""Slug generation for record file names"""

import re


def slugify(text: str, fallback: str = "record") -> str:
    """Convert text to a lowercase, hyphen-separated file-name-safe slug."""
    text = text.lower()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_]+", "-", text)
    return re.sub(r"-+", "-", text).strip("-") or fallback


def unique_slug(text: str, taken: set[str]) -> str:
    """Slugify text, suffixing -2, -3, ... until it is not in taken; records the result in taken."""
    base = slugify(text)
    slug, n = base, 1
    while slug in taken:
        n += 1
        slug = f"{base}-{n}"
    taken.add(slug)
    return slug
