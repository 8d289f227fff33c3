"""Article records, document extraction, and priority ordering."""

from .extractor import DocumentExtractor, extract_articles
from .models import Article, DocumentEntry, FullArticle, slugify
from .ordering import (
    InteractiveOracle,
    OrderingOracle,
    PriorityListOracle,
    default_order,
    resolve_order,
)

__all__ = [
    "Article",
    "DocumentEntry",
    "DocumentExtractor",
    "FullArticle",
    "InteractiveOracle",
    "OrderingOracle",
    "PriorityListOracle",
    "default_order",
    "extract_articles",
    "resolve_order",
    "slugify",
]
