"""URL slug derivation shared by articles and categories."""

import re

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify(text: str | None) -> str:
    """Lowercase *text*, collapse non ``[a-z0-9]`` runs into ``-`` and trim dashes.

    >>> slugify("Rosa Canina! (rossa)")
    'rosa-canina-rossa'
    """
    if not text:
        return ""
    return _NON_ALNUM_RUN.sub("-", text.lower()).strip("-")
