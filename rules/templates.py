"""
Reply Templates - Positional placeholder substitution
=====================================================

Reply templates refer to a matcher's capture groups with positional
placeholders: ``$1`` is the first group, ``$2`` the second, and so on.

Substitution is plain text replacement of the *first* occurrence of each
placeholder, in increasing group order. A template that uses ``$1`` twice
only gets the first one filled in.
"""

import re
from typing import List, Optional, Sequence


PLACEHOLDER_PATTERN = re.compile(r"\$(\d+)")


def interpolate(template: str, groups: Sequence[Optional[str]]) -> str:
    """
    Fill positional placeholders in a reply template.

    Args:
        template: Reply template, possibly containing $1, $2, ...
        groups: Captured groups of the match, in order (group 1 first)

    Returns:
        The template with each placeholder's first occurrence replaced.
        Placeholders without a corresponding (participating) group are
        left unchanged.

    Example:
        >>> interpolate("Why do you feel $1?", ("confused",))
        'Why do you feel confused?'
    """
    result = template
    for index, value in enumerate(groups, start=1):
        if value is None:
            continue
        result = result.replace(f"${index}", value, 1)
    return result


def placeholders(template: str) -> List[int]:
    """
    List the group numbers referenced by a template.

    Args:
        template: Reply template

    Returns:
        Sorted list of distinct placeholder indices
    """
    return sorted({int(m.group(1)) for m in PLACEHOLDER_PATTERN.finditer(template)})
