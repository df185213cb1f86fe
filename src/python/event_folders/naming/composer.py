"""
Compose new folder names.

There are two independent composers, one per pass. The date-prefix pass
runs first; the keyword pass only ever sees its output name.
"""

from typing import Optional

from event_folders.models.enums import BracketStyle, Category
from event_folders.models.folder import NamingRule, ResolvedDate


def compose_date_prefix_name(resolved: ResolvedDate, name: str) -> str:
    """
    Prepend the "YYYY-MM - " prefix to a folder name.

    Example:
        >>> from datetime import datetime
        >>> from event_folders.models.enums import DateSource
        >>> compose_date_prefix_name(ResolvedDate(datetime(2019, 11, 1), DateSource.CREATION_TIME), "Trip")
        '2019-11 - Trip'
    """
    return f"{resolved.prefix} - {name}"


def compose_tag(rule: NamingRule, style: BracketStyle = BracketStyle.SQUARE) -> str:
    """Return just the bracketed tag, e.g. "[Easter 2021]"."""
    return style.wrap(f"{rule.category.value} {rule.year}")


def compose_tag_name(
    prefix: Optional[str],
    rule: NamingRule,
    style: BracketStyle = BracketStyle.SQUARE,
) -> str:
    """
    Build a tagged folder name.

    Christmas and Easter folders become just prefix and tag. Birthday
    folders keep their cleaned name after the tag; an empty cleaned name
    leaves the tag last.

    Args:
        prefix: Prefix to keep verbatim (e.g. "2016-08 - "), or None
        rule: NamingRule from the classifier
        style: Bracket convention

    Returns:
        The new folder name

    Examples:
        >>> rule = NamingRule(Category.BIRTHDAY, 2016, base_name="Family Gathering")
        >>> compose_tag_name("2016-08 - ", rule)
        '2016-08 - [BIRTHDAY 2016] - Family Gathering'
        >>> compose_tag_name("2015-12 - ", NamingRule(Category.CHRISTMAS, 2015), BracketStyle.ROUND)
        '2015-12 - (Christmas 2015)'
    """
    name = f"{prefix or ''}{compose_tag(rule, style)}"
    if rule.category is Category.BIRTHDAY and rule.base_name:
        name = f"{name} - {rule.base_name}"
    return name
