"""Unit tests for selector-driven slot binding and byline allocation."""

from __future__ import annotations

import logging
import typing as typ

import pytest
from bs4 import BeautifulSoup

from autospoof._constants import FALLBACK_AUTHOR
from autospoof.articles.models import Article
from autospoof.binding import AuthorAllocator, LinkPrefixes, bind, bind_article_page
from autospoof.config import SlotSpec

if typ.TYPE_CHECKING:
    from autospoof.articles.models import FullArticle
    from autospoof.config import SiteConfig

TOP_STORY = SlotSpec(title="h2", href="a", subtitle=".dek", image="img", author=".byline")
CARD = SlotSpec(title="a", href="a")


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _three_articles(make_article: typ.Callable[..., FullArticle]) -> list[FullArticle]:
    return [
        make_article("First Story", image="first-story.png"),
        make_article("Second Story", image="second-story.jpeg"),
        make_article("Third Story"),
    ]


def test_bind_consumes_articles_in_selector_order_and_prunes_surplus(
    frontpage_html: str, make_article: typ.Callable[..., FullArticle]
) -> None:
    """Two top stories take articles 1-2, one card takes article 3, four cards go."""
    document = _soup(frontpage_html)
    articles = _three_articles(make_article)

    bind(
        document,
        {".top-story": TOP_STORY, ".card": CARD},
        articles,
        AuthorAllocator(["Jane Roe"]),
        LinkPrefixes(),
    )

    top_stories = document.select(".top-story")
    assert [node.h2.get_text() for node in top_stories] == ["First Story", "Second Story"]
    assert [node.a["href"] for node in top_stories] == [
        "articles/first-story.html",
        "articles/second-story.html",
    ]
    assert top_stories[0].select_one(".dek").get_text() == "First Story summary."
    cards = document.select(".card")
    assert len(cards) == 1, f"expected surplus cards to be removed, found {len(cards)}"
    assert cards[0].a.get_text() == "Third Story"
    assert cards[0].a["href"] == "articles/third-story.html"


def test_image_slot_points_at_local_image_without_responsive_sources(
    frontpage_html: str, make_article: typ.Callable[..., FullArticle]
) -> None:
    """Bound images use the images prefix and lose srcset."""
    document = _soup(frontpage_html)
    bind(
        document,
        {".top-story": TOP_STORY},
        [make_article("Pic", image="pic.png")],
        AuthorAllocator(),
        LinkPrefixes(),
    )
    image = document.select_one(".top-story img")
    assert image["src"] == "images/pic.png"
    assert "srcset" not in image.attrs
    assert image["alt"] == "Pic"


def test_image_slot_is_removed_for_articles_without_image(
    frontpage_html: str, make_article: typ.Callable[..., FullArticle]
) -> None:
    """No empty or stale <img> remains when the article has no image."""
    document = _soup(frontpage_html)
    bind(
        document,
        {".top-story": TOP_STORY},
        [make_article("No Picture"), make_article("Also None")],
        AuthorAllocator(),
        LinkPrefixes(),
    )
    assert document.select(".top-story img") == []
    assert "/img/1.jpg" not in str(document)


def test_rebinding_pruned_document_is_a_no_op(
    frontpage_html: str, make_article: typ.Callable[..., FullArticle]
) -> None:
    """Binding again with identical inputs leaves the markup unchanged."""
    articles = _three_articles(make_article)
    slots = {".top-story": TOP_STORY, ".card": CARD}
    document = _soup(frontpage_html)
    bind(document, slots, articles, AuthorAllocator(["A", "B"]), LinkPrefixes())
    first = str(document)

    allocator = AuthorAllocator(["A", "B"])
    bind(document, slots, articles, allocator, LinkPrefixes())
    assert str(document) == first


def test_bound_elements_never_exceed_article_count(
    frontpage_html: str, make_article: typ.Callable[..., FullArticle]
) -> None:
    """With a single article, the second top story and every card vanish."""
    document = _soup(frontpage_html)
    bind(
        document,
        {".top-story": TOP_STORY, ".card": CARD},
        [make_article("Lonely")],
        AuthorAllocator(),
        LinkPrefixes(),
    )
    assert len(document.select(".top-story")) == 1
    assert document.select(".card") == []


def test_no_articles_prunes_every_slot(frontpage_html: str) -> None:
    """An empty article list removes every matched slot."""
    document = _soup(frontpage_html)
    bind(document, {".top-story": TOP_STORY, ".card": CARD}, [], AuthorAllocator(), LinkPrefixes())
    assert document.select(".top-story, .card") == []


def test_pruning_happens_per_selector_before_later_selectors_run(
    make_article: typ.Callable[..., FullArticle],
) -> None:
    """An exhausted selector removes its elements before the next one matches.

    ``.slot`` and ``.wide`` overlap: once ``.slot`` has consumed the only
    article, its other elements are gone, so ``.wide`` only sees the bound
    element and keeps it.
    """
    document = _soup(
        '<div><p class="slot wide">x</p><p class="slot wide">y</p><p class="slot">z</p></div>'
    )
    bind(
        document,
        {".slot": SlotSpec(), ".wide": SlotSpec()},
        [make_article("Only")],
        AuthorAllocator(),
        LinkPrefixes(),
    )
    paragraphs = document.select("p")
    assert len(paragraphs) == 1
    assert paragraphs[0].get_text() == "Only"
    assert paragraphs[0]["href"] == "articles/only.html"


def test_shorthand_label_is_superseded_by_article_title(
    make_article: typ.Callable[..., FullArticle],
) -> None:
    """A plain-string slot binds the article title onto the element itself."""
    document = _soup('<ul><li><a class="t" href="/real">Real</a></li></ul>')
    bind(
        document,
        {".t": SlotSpec(label="Top Story")},
        [make_article("Parody")],
        AuthorAllocator(),
        LinkPrefixes(),
    )
    anchor = document.select_one(".t")
    assert anchor.get_text() == "Parody"
    assert anchor["href"] == "articles/parody.html"


def test_author_slots_use_node_ordinals(make_article: typ.Callable[..., FullArticle]) -> None:
    """Each byline node of an element receives its own slot index."""
    document = _soup('<div class="s"><h2></h2><i class="by"></i><i class="by"></i></div>')
    bind(
        document,
        {".s": SlotSpec(title="h2", author=".by")},
        [make_article("Two Bylines")],
        AuthorAllocator(["Ann", "Bob", "Cid"]),
        LinkPrefixes(),
    )
    assert [node.get_text() for node in document.select(".by")] == ["Ann", "Bob"]


def test_allocator_memoizes_per_article_and_slot() -> None:
    """The cursor advances once per distinct (article, slot) pair."""
    allocator = AuthorAllocator(["Ann", "Bob", "Cid"])
    first, second = Article("First"), Article("Second")

    assert allocator.assign(first, 0) == "Ann"
    assert allocator.assign(first, 0) == "Ann"
    assert allocator.assign(second, 0) == "Bob"
    assert allocator.assign(first, 1) == "Cid"
    assert allocator.assign(second, 1) == "Ann", "the pool wraps around"
    assert allocator.assign(second, 0) == "Bob"


def test_allocator_without_pool_uses_placeholder() -> None:
    """An empty pool yields the fallback byline for every slot."""
    allocator = AuthorAllocator([])
    assert allocator.assign(Article("Any"), 0) == FALLBACK_AUTHOR
    assert allocator.assign(Article("Other"), 3) == FALLBACK_AUTHOR


def test_reset_allocator_reproduces_assignments(
    frontpage_html: str, make_article: typ.Callable[..., FullArticle]
) -> None:
    """Binding twice with a reset allocator gives identical bylines."""
    articles = _three_articles(make_article)
    allocator = AuthorAllocator(["Ann", "Bob", "Cid"])
    slots = {".top-story": TOP_STORY}

    first = bind(_soup(frontpage_html), slots, articles, allocator, LinkPrefixes())
    allocator.reset()
    second = bind(_soup(frontpage_html), slots, articles, allocator, LinkPrefixes())
    assert [n.get_text() for n in first.select(".byline")] == ["Ann", "Bob"]
    assert [n.get_text() for n in second.select(".byline")] == ["Ann", "Bob"]


def test_article_page_binds_detail_fields_and_related_links(
    article_html: str,
    site_config: SiteConfig,
    make_article: typ.Callable[..., FullArticle],
) -> None:
    """The article template receives detail fields, suffix, and links."""
    articles = _three_articles(make_article)
    allocator = AuthorAllocator(["Jane Roe", "John Doe"])
    front_byline = allocator.assign(articles[1], 0)
    document = bind_article_page(
        _soup(article_html),
        site_config.article,
        articles[1],
        articles,
        allocator,
        LinkPrefixes(articles=".", images="../images"),
    )

    assert document.title.get_text() == "Second Story | Example News"
    assert document.select_one("h1").get_text() == "Second Story"
    assert document.select_one(".standfirst").get_text() == "Second Story summary."
    assert document.select_one(".author").get_text() == front_byline, (
        "the byline must match the one assigned on the front page"
    )
    assert [p.get_text() for p in document.select(".article-body p")] == [
        "Second Story summary.",
        "More about Second Story.",
    ]
    assert document.select_one("figure img")["src"] == "../images/second-story.jpeg"
    related = document.select(".related .more a")
    assert [a["href"] for a in related] == ["./first-story.html", "./second-story.html"]


def test_article_page_without_image_drops_image_node(
    article_html: str,
    site_config: SiteConfig,
    make_article: typ.Callable[..., FullArticle],
) -> None:
    """The hero image disappears for imageless articles."""
    article = make_article("Plain")
    document = bind_article_page(
        _soup(article_html),
        site_config.article,
        article,
        [article],
        AuthorAllocator(),
        LinkPrefixes(articles=".", images="../images"),
    )
    assert document.select("figure img") == []
    assert len(document.select(".related .more")) == 1


PICTURE_HTML = """<div class="story"><h2>Real</h2><picture>
<source media="(min-width: 600px)" srcset="https://real/orig.webp" type="image/webp">
<source srcset="https://real/orig.jpg">
<img src="https://real/orig-small.jpg" srcset="https://real/orig@2x.jpg 2x">
</picture></div>"""


@pytest.mark.parametrize(
    ("image", "expected_images"),
    [("pictured.png", ["images/pictured.png"]), (None, [])],
)
def test_picture_sources_never_show_the_original_photo(
    make_article: typ.Callable[..., FullArticle],
    image: str | None,
    expected_images: list[str],
) -> None:
    """Bound <picture> elements keep no <source> pointing at the real story."""
    document = _soup(PICTURE_HTML)
    bind(
        document,
        {".story": SlotSpec(title="h2", image="img")},
        [make_article("Pictured", image=image)],
        AuthorAllocator(),
        LinkPrefixes(),
    )
    assert "https://real/" not in str(document), "original photo URLs must be gone"
    assert document.select("source") == []
    assert [img["src"] for img in document.select("img")] == expected_images
    if image is None:
        assert document.select("picture") == []


def test_missing_subselector_is_reported(
    make_article: typ.Callable[..., FullArticle], caplog: pytest.LogCaptureFixture
) -> None:
    """Writing the title onto the slot itself leaves later subselectors empty."""
    document = _soup('<li class="slot"><a href="/x"><img src="/x.jpg"></a></li>')
    with caplog.at_level(logging.WARNING, logger="autospoof.binding.binder"):
        bind(
            document,
            {".slot": SlotSpec(href="a", image="img")},
            [make_article("Loose Title", image="loose.png")],
            AuthorAllocator(),
            LinkPrefixes(),
        )
    assert document.select_one(".slot").get_text() == "Loose Title"
    assert "Href subselector 'a' matched nothing" in caplog.text
    assert "Image subselector 'img' matched nothing" in caplog.text
