"""
Moderation service — stateless pass/fail check against a banned-term set.

Terms are matched as case-insensitive substrings through one compiled
alternation, so a term embedded in a longer word still blocks the text.
"""
import re


class Moderator:
    def __init__(self, banned_terms: list[str]) -> None:
        terms = sorted({t.lower() for t in banned_terms if t.strip()}, key=len, reverse=True)
        self.banned_terms = frozenset(terms)
        self._pattern = re.compile("|".join(re.escape(t) for t in terms)) if terms else None

    def find_banned(self, text: str) -> str | None:
        """Return the first banned term found in *text*, or None."""
        if self._pattern is None:
            return None
        match = self._pattern.search(text.lower())
        return match.group(0) if match else None

    def is_clean(self, text: str) -> bool:
        return self.find_banned(text) is None
