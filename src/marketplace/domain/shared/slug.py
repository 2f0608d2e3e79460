"""URL slug derivation shared by vendors and categories."""

from __future__ import annotations

import re

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lowercase ``value`` and collapse every non-alphanumeric run to one hyphen.

    Leading and trailing hyphens are stripped, so ``"  Acme  Goods! "`` becomes
    ``"acme-goods"``. Returns an empty string when ``value`` has no ASCII
    letter or digit; callers decide whether that is an error.
    """
    return _NON_ALNUM_RUN.sub("-", value.lower()).strip("-")
