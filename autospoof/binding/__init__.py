"""Template binding: slot binder, article detail binder, and byline allocation."""

from .authors import AuthorAllocator
from .binder import LinkPrefixes, SlotBinder, bind
from .detail import bind_article_page

__all__ = [
    "AuthorAllocator",
    "LinkPrefixes",
    "SlotBinder",
    "bind",
    "bind_article_page",
]
