"""
URL slugs for wheels
"""

import re
from typing import Iterable, List, Tuple

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    return _NON_ALNUM.sub("-", (name or "").strip().lower()).strip("-")


def slug_for(wheel_id: int, name: str, used: Iterable[str] = ()) -> str:
    """Slug for one wheel, suffixed with its id when ``used`` already has it"""
    slug = slugify(name) or f"wheel-{wheel_id}"
    if slug in set(used):
        slug = f"{slug}-{wheel_id}"
    return slug


def assign_slugs(items: Iterable[Tuple[int, str]]) -> List[str]:
    """Slugs for ``(id, name)`` pairs in order; earlier wheels keep the plain slug"""
    slugs: List[str] = []
    for wheel_id, name in items:
        slugs.append(slug_for(wheel_id, name, slugs))
    return slugs
