"""
Classify an event folder name into a category.

Rules are evaluated in order and the first matching predicate wins. The last
rule always matches, so every name gets exactly one category.

The year written into the tag is taken from, strongest first:
1. A standalone four-digit year in the name itself
2. The year of the folder's "YYYY-MM - " prefix
3. The year of the folder's oldest file (fallback)
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from event_folders.exceptions import NoDateAvailable
from event_folders.models.enums import Category, YearSource
from event_folders.models.folder import NamingRule
from event_folders.naming.patterns import clean_base_name, find_year, is_christmas, is_easter

logger = logging.getLogger(__name__)

# Either a year, or a callable producing one only when it is actually needed
FallbackYear = Union[int, Callable[[], int], None]


@dataclass(frozen=True)
class ClassificationRule:
    """
    One entry of the ordered rule list.

    Attributes:
        category: Category assigned when the predicate matches
        predicate: Pure function over the post-prefix name
    """
    category: Category
    predicate: Callable[[str], bool]


def _always(_text: str) -> bool:
    return True


CLASSIFICATION_RULES: List[ClassificationRule] = [
    ClassificationRule(Category.CHRISTMAS, is_christmas),
    ClassificationRule(Category.EASTER, is_easter),
    ClassificationRule(Category.BIRTHDAY, _always),
]


def match_category(
    remainder: str,
    rules: Optional[List[ClassificationRule]] = None,
) -> Category:
    """
    Return the category of the first rule whose predicate matches.

    Examples:
        >>> match_category("Christmass Eve")
        <Category.CHRISTMAS: 'Christmas'>
        >>> match_category("christmas")
        <Category.BIRTHDAY: 'BIRTHDAY'>
    """
    for rule in rules or CLASSIFICATION_RULES:
        if rule.predicate(remainder):
            return rule.category
    return Category.BIRTHDAY


def select_year(
    remainder: str,
    prefix_year: Optional[int] = None,
    fallback_year: FallbackYear = None,
) -> Tuple[int, YearSource]:
    """
    Pick the year for a tag using name > prefix > files precedence.

    Args:
        remainder: Folder name after any prefix
        prefix_year: Year captured from the "YYYY-MM - " prefix
        fallback_year: Year of the oldest file, or a callable computing it

    Returns:
        Tuple of (year, source)

    Raises:
        NoDateAvailable: If no tier can supply a year
    """
    year = find_year(remainder)
    if year is not None:
        return year, YearSource.NAME

    if prefix_year is not None:
        return prefix_year, YearSource.PREFIX

    if callable(fallback_year):
        fallback_year = fallback_year()
    if fallback_year is None:
        raise NoDateAvailable(f"No year available for {remainder!r}")
    return fallback_year, YearSource.FILES


def classify(
    remainder: str,
    prefix_year: Optional[int] = None,
    fallback_year: FallbackYear = None,
    rules: Optional[List[ClassificationRule]] = None,
) -> NamingRule:
    """
    Classify a folder name into a NamingRule.

    Args:
        remainder: Folder name after any prefix
        prefix_year: Year captured from the prefix, if any
        fallback_year: Year of the oldest file, or a callable computing it
        rules: Ordered rules to use instead of CLASSIFICATION_RULES

    Returns:
        NamingRule with the category, year and, for birthdays, the cleaned name

    Example:
        >>> classify("Christmas Party 2015", prefix_year=2014)
        NamingRule(category=<Category.CHRISTMAS: 'Christmas'>, year=2015, year_source=<YearSource.NAME: 'name'>, base_name='')
    """
    category = match_category(remainder, rules)
    year, year_source = select_year(remainder, prefix_year, fallback_year)

    base_name = clean_base_name(remainder) if category is Category.BIRTHDAY else ""

    logger.debug(
        "Classified %r as %s %d (year from %s)",
        remainder, category.value, year, year_source.value,
    )
    return NamingRule(
        category=category,
        year=year,
        year_source=year_source,
        base_name=base_name,
    )
