# forum/utils/slug.py
from slugify import slugify


def derive_slug(title: str) -> str:
    """
    Course/topic title -> URL slug ("Backend Development" -> "backend-development").

    Pure function; the write path calls it before persisting and whenever a
    title changes.
    """
    return slugify(title or '', lowercase=True)
