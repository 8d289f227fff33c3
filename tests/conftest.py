"""Shared fixtures and in-memory stand-ins for the remote capabilities.

Nothing here touches the network: ``StubFetcher`` serves canned
``BinaryResponse`` objects by URL, ``StubDocs`` plays the Drive listing and
Docs retrieval, and the template fixtures provide small front page and
article page markups shaped like a real news site.
"""

from __future__ import annotations

import typing as typ

import pytest

from autospoof.articles.models import DocumentEntry, FullArticle
from autospoof.config import build_site_config
from autospoof.errors import FetchError
from autospoof.fetcher import BinaryResponse

if typ.TYPE_CHECKING:
    from autospoof.config import SiteConfig

FRONTPAGE_URL = "https://news.example.com/"
ARTICLE_URL = "https://news.example.com/2024/01/01/real-story"
FALLBACK_URL = "https://news.example.com/"

_TOP_STORY = """
  <article class="top-story">
    <a class="link" href="/real/{n}"><h2>Real headline {n}</h2></a>
    <p class="dek">Real dek {n}</p>
    <img class="photo" src="/img/{n}.jpg" srcset="/img/{n}@2x.jpg 2x">
    <span class="byline">Real Author</span>
  </article>"""
_CARD = """
  <li class="card"><a href="/real/card-{n}">Card {n}</a></li>"""

FRONTPAGE_HTML = (
    "<html><head><title>Example News</title>"
    '<link rel="stylesheet" href="/static/site.css"></head><body>'
    '<div class="advert">Buy now</div>'
    '<section class="lead">'
    + "".join(_TOP_STORY.format(n=n) for n in (1, 2))
    + '</section><ul class="grid">'
    + "".join(_CARD.format(n=n) for n in range(1, 6))
    + "</ul></body></html>"
)

ARTICLE_HTML = """<html><head><title>Real story | Example News</title></head><body>
<div class="advert">Buy now</div>
<h1 class="headline">Real story</h1>
<p class="standfirst">Real standfirst</p>
<span class="author">Real Author</span>
<figure><img class="hero" src="/img/hero.jpg"></figure>
<div class="article-body"><p>Real paragraph</p></div>
<ul class="related">
  <li class="more"><a href="/x">Other story</a></li>
  <li class="more"><a href="/y">Another story</a></li>
</ul>
</body></html>"""

SITE_CONFIG: dict[str, typ.Any] = {
    "frontpage": {
        "url": FRONTPAGE_URL,
        "remove": [".advert"],
        "articles": {
            ".top-story": {
                "title": "h2",
                "href": "a",
                "subtitle": ".dek",
                "image": "img",
                "author": ".byline",
            },
            ".card": {"title": "a", "href": "a"},
        },
    },
    "article": {
        "url": ARTICLE_URL,
        "remove": [".advert"],
        "title": "h1",
        "subtitle": ".standfirst",
        "body": ".article-body",
        "image": "figure img",
        "author": ".author",
        "title_suffix": " | Example News",
        "links": {".related .more": {"title": "a", "href": "a"}},
    },
    "default": FALLBACK_URL,
    "authors": ["Jane Roe", "John Doe"],
}


class StubFetcher:
    """Serve canned responses by URL; unknown URLs answer 404."""

    def __init__(self) -> None:
        self.responses: dict[str, BinaryResponse | Exception] = {}
        self.calls: list[str] = []

    def add(
        self,
        url: str,
        content: bytes | str = b"",
        *,
        status: int = 200,
        content_type: str | None = "text/html; charset=utf-8",
    ) -> None:
        body = content.encode("utf-8") if isinstance(content, str) else content
        self.responses[url] = BinaryResponse(url, status, content_type, body)

    def fail(self, url: str) -> None:
        self.responses[url] = FetchError(f"Failed to reach {url}", url=url)

    def fetch_binary(self, url: str) -> BinaryResponse:
        self.calls.append(url)
        response = self.responses.get(url)
        if isinstance(response, Exception):
            raise response
        if response is None:
            return BinaryResponse(url, 404, None, b"")
        return response


class StubDocs:
    """Play the Drive folder listing and Docs retrieval from memory."""

    def __init__(self) -> None:
        self.entries: list[DocumentEntry] = []
        self.documents: dict[str, dict[str, typ.Any]] = {}
        self.listed: list[str] = []

    def add(self, document_id: str, name: str, document: dict[str, typ.Any]) -> None:
        self.entries.append(DocumentEntry(id=document_id, name=name))
        self.documents[document_id] = document

    def add_unreadable(self, document_id: str, name: str) -> None:
        self.entries.append(DocumentEntry(id=document_id, name=name))

    def list_documents(self, folder_ref: str) -> list[DocumentEntry]:
        self.listed.append(folder_ref)
        return list(self.entries)

    def get_document(self, document_id: str) -> dict[str, typ.Any]:
        try:
            return self.documents[document_id]
        except KeyError:
            msg = f"Received status 404 while trying to access {document_id}"
            raise FetchError(msg, status=404) from None


def build_document(
    paragraphs: typ.Sequence[str],
    *,
    inline_uri: str | None = None,
    positioned_uri: str | None = None,
) -> dict[str, typ.Any]:
    """Return a Docs API shaped document with one text run per paragraph."""
    document: dict[str, typ.Any] = {
        "body": {
            "content": [{"sectionBreak": {}}]
            + [
                {"paragraph": {"elements": [{"textRun": {"content": text}}]}}
                for text in paragraphs
            ]
        }
    }
    if inline_uri:
        document["inlineObjects"] = {
            "kix.inline": {
                "inlineObjectProperties": {
                    "embeddedObject": {"imageProperties": {"contentUri": inline_uri}}
                }
            }
        }
    if positioned_uri:
        document["positionedObjects"] = {
            "kix.positioned": {
                "positionedObjectProperties": {
                    "embeddedObject": {"imageProperties": {"contentUri": positioned_uri}}
                }
            }
        }
    return document


@pytest.fixture
def make_document() -> typ.Callable[..., dict[str, typ.Any]]:
    """Return the Docs API document builder."""
    return build_document


@pytest.fixture
def make_article() -> typ.Callable[..., FullArticle]:
    """Return a factory for FullArticle records with sensible defaults."""

    def _make(
        title: str,
        *,
        image: str | None = None,
        subtitle: str | None = None,
        body: str | None = None,
    ) -> FullArticle:
        text = body if body is not None else f"{title} summary.\nMore about {title}."
        return FullArticle(
            title=title,
            subtitle=subtitle if subtitle is not None else text.split("\n", 1)[0],
            image=image,
            body=text,
            document_id=f"id-{title.lower().replace(' ', '-')}",
            image_data=b"\x89PNG" if image else None,
        )

    return _make


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    """Return a fetcher already serving both template pages."""
    fetcher = StubFetcher()
    fetcher.add(FRONTPAGE_URL, FRONTPAGE_HTML)
    fetcher.add(ARTICLE_URL, ARTICLE_HTML)
    return fetcher


@pytest.fixture
def stub_docs() -> StubDocs:
    """Return an empty in-memory Drive folder."""
    return StubDocs()


@pytest.fixture
def site_config() -> SiteConfig:
    """Return the parsed configuration matching the template fixtures."""
    return build_site_config(SITE_CONFIG)


@pytest.fixture
def frontpage_html() -> str:
    """Return the front page template markup."""
    return FRONTPAGE_HTML


@pytest.fixture
def article_html() -> str:
    """Return the article page template markup."""
    return ARTICLE_HTML
