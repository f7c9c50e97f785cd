"""Slug generation for document file names and heading anchors"""

import re


_PUNCT_RE = re.compile(r'[^\w\s-]')


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = _PUNCT_RE.sub('', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


class Slugger:
    """GitHub-style heading slugs, unique within one document.

    Unlike slugify(), runs of spaces and hyphens are kept one-for-one so
    anchors match what GitHub renders for the same heading text.
    """

    def __init__(self):
        self.occurrences: dict[str, int] = {}

    def slug(self, text: str) -> str:
        base = _PUNCT_RE.sub('', text.strip().lower()).replace(' ', '-')
        result = base
        while result in self.occurrences:
            self.occurrences[base] += 1
            result = f"{base}-{self.occurrences[base]}"
        self.occurrences[result] = 0
        return result
