"""Naming module for classifying event folders and composing their names."""

from event_folders.naming.classifier import CLASSIFICATION_RULES, ClassificationRule, classify
from event_folders.naming.composer import compose_date_prefix_name, compose_tag, compose_tag_name
from event_folders.naming.patterns import (
    clean_base_name,
    extract_prefix,
    find_category_tag,
    find_year,
    has_category_tag,
    has_date_prefix,
)

__all__ = [
    "CLASSIFICATION_RULES",
    "ClassificationRule",
    "classify",
    "clean_base_name",
    "compose_date_prefix_name",
    "compose_tag",
    "compose_tag_name",
    "extract_prefix",
    "find_category_tag",
    "find_year",
    "has_category_tag",
    "has_date_prefix",
]
