"""
Wildcard pattern matching for file names.

Translates shell-style wildcards (``*`` and ``?``) into anchored regular
expressions and applies the name-matching rule used by the search engine.
"""

import re


def wildcard_to_regex(pattern: str) -> re.Pattern:
    """
    Compile a wildcard pattern into an anchored regular expression.

    ``*`` matches any run of characters (including none), ``?`` matches
    exactly one character and every other character, ``.`` included, is
    literal. The pattern is compiled as given; callers fold case beforehand.

    Args:
        pattern: Wildcard pattern such as ``*.txt`` or ``file?``

    Returns:
        Compiled pattern intended for ``fullmatch``
    """
    parts = []
    for char in pattern:
        if char == '*':
            parts.append('.*')
        elif char == '?':
            parts.append('.')
        else:
            parts.append(re.escape(char))

    return re.compile(r'\A' + ''.join(parts) + r'\Z', re.DOTALL)


class NameMatcher:
    """
    Matches bare file names against a wildcard pattern.

    A name is accepted when the anchored wildcard expression matches it OR
    when the raw pattern appears in it as a plain substring. The substring
    branch lets a pattern without wildcards, like ``test``, match
    ``mytest.txt``.

    Attributes:
        pattern: The pattern as supplied by the caller
        case_sensitive: Whether names are compared without case folding
    """

    def __init__(self, pattern: str, case_sensitive: bool = False):
        self.pattern = pattern
        self.case_sensitive = case_sensitive
        self._folded_pattern = pattern if case_sensitive else pattern.lower()
        self._regex = wildcard_to_regex(self._folded_pattern)

    def matches(self, name: str) -> bool:
        """Check whether a file name satisfies the pattern."""
        candidate = name if self.case_sensitive else name.lower()
        if self._regex.fullmatch(candidate):
            return True
        return self._folded_pattern in candidate

    def __repr__(self) -> str:
        return f"NameMatcher(pattern={self.pattern!r}, case_sensitive={self.case_sensitive})"
