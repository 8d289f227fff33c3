"""High-level orchestration for building a parody site.

This module coordinates listing the Drive folder, extracting every Google Doc
into an article, resolving the priority order, binding the front page and one
article page per article onto freshly parsed templates, and writing the
result. It exposes :class:`SiteBuilder`, which consumes a
:class:`~autospoof.config.SiteConfig` plus the remote capabilities, and only
writes files once every page has been bound.

Example
-------
>>> from pathlib import Path
>>> from autospoof.config import load_site_config
>>> from autospoof.site import SiteBuilder
>>> config = load_site_config(Path("siteconfig.yaml"))  # doctest: +SKIP
>>> builder = SiteBuilder(config, documents=client, fetcher=fetcher)  # doctest: +SKIP
>>> builder.run("https://drive.google.com/drive/folders/1AbC", Path("output"))  # doctest: +SKIP
[PosixPath('output/images/mayor-eats-own-hat.png'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

from ._constants import (
    ARTICLE_FILENAME_TEMPLATE,
    ARTICLES_DIRNAME,
    IMAGES_DIRNAME,
    INDEX_FILENAME,
)
from .articles.extractor import DocumentExtractor, DocumentSource, extract_articles
from .articles.ordering import OrderingOracle, keep_default, resolve_order
from .binding import AuthorAllocator, LinkPrefixes, SlotBinder, bind_article_page
from .errors import EmptyFolderError
from .templates import TemplateLoader
from .writer import SiteWriter

if typ.TYPE_CHECKING:
    from .articles.extractor import BinaryFetcher
    from .articles.models import DocumentEntry, FullArticle
    from .config import SiteConfig

logger = logging.getLogger(__name__)

FRONTPAGE_PREFIXES = LinkPrefixes(articles=ARTICLES_DIRNAME, images=IMAGES_DIRNAME)
ARTICLE_PAGE_PREFIXES = LinkPrefixes(articles=".", images=f"../{IMAGES_DIRNAME}")


class DocumentLister(DocumentSource, typ.Protocol):
    """Capability listing a folder and fetching each document."""

    def list_documents(self, folder_ref: str) -> list[DocumentEntry]: ...


@dc.dataclass(slots=True)
class RenderedSite:
    """Serialized pages keyed by their path relative to the output folder."""

    index: str
    articles: dict[str, str]


class SiteBuilder:
    """Turn a Drive folder of parody articles into a static site."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        documents: DocumentLister,
        fetcher: BinaryFetcher,
        writer: SiteWriter | None = None,
        oracle: OrderingOracle = keep_default,
        max_workers: int = 4,
    ) -> None:
        """Initialize the builder with configuration and capabilities.

        Parameters
        ----------
        config : SiteConfig
            Parsed site configuration.
        documents : DocumentLister
            Folder listing and document retrieval (``GoogleDocsClient``).
        fetcher : BinaryFetcher
            Retrieval used for template pages and embedded images.
        writer : SiteWriter, optional
            Filesystem capability; a new :class:`SiteWriter` by default.
        oracle : OrderingOracle, optional
            Decides the article priority order; keeps the default
            images-first order when omitted.
        max_workers : int, optional
            Number of documents extracted concurrently.
        """
        self.config = config
        self.documents = documents
        self.fetcher = fetcher
        self.writer = writer or SiteWriter()
        self.oracle = oracle
        self.max_workers = max_workers
        self.allocator = AuthorAllocator(config.authors)

    def run(self, folder_ref: str, output: Path) -> list[Path]:
        """Build the whole site into ``output``.

        Returns
        -------
        list[Path]
            Written files: images, then article pages, then ``index.html``.

        Raises
        ------
        ListError
            If the folder cannot be listed.
        EmptyFolderError
            If the folder holds no documents or none could be extracted.
        FetchError
            If a template page cannot be retrieved.
        """
        entries = self.documents.list_documents(folder_ref)
        if not entries:
            msg = f"No Google Docs found in {folder_ref}"
            raise EmptyFolderError(msg)

        articles_dir = self.writer.ensure_dir(output / ARTICLES_DIRNAME)
        images_dir = self.writer.ensure_dir(output / IMAGES_DIRNAME)

        extracted = extract_articles(
            self.documents,
            entries,
            DocumentExtractor(self.fetcher),
            max_workers=self.max_workers,
        )
        if not extracted:
            msg = f"None of the {len(entries)} documents in {folder_ref} could be read"
            raise EmptyFolderError(msg)

        ordered = resolve_order(extracted, self.oracle)
        rendered = self.render(ordered)

        written: list[Path] = []
        for article in ordered:
            if article.image and article.image_data is not None:
                path = images_dir / article.image
                written.append(self.writer.write_file(path, article.image_data))
        for filename, html in rendered.articles.items():
            written.append(self.writer.write_file(articles_dir / filename, html))
        written.append(self.writer.write_file(output / INDEX_FILENAME, rendered.index))
        return written

    def render(self, ordered: typ.Sequence[FullArticle]) -> RenderedSite:
        """Bind the front page and every article page without touching disk.

        Parameters
        ----------
        ordered : Sequence[FullArticle]
            Articles in their resolved priority order.

        Returns
        -------
        RenderedSite
            Serialized front page and article pages keyed by filename.
        """
        loader = TemplateLoader(self.fetcher, fallback_link=self.config.fallback_link)
        frontpage_template = loader.load(self.config.frontpage)
        article_template = loader.load(self.config.article)

        frontpage = SlotBinder(self.allocator, FRONTPAGE_PREFIXES).bind(
            frontpage_template.fresh(), self.config.frontpage.articles, ordered
        )

        pages: dict[str, str] = {}
        for article in ordered:
            document = bind_article_page(
                article_template.fresh(),
                self.config.article,
                article,
                ordered,
                self.allocator,
                ARTICLE_PAGE_PREFIXES,
            )
            filename = ARTICLE_FILENAME_TEMPLATE.format(slug=article.slug)
            if filename in pages:
                logger.warning(
                    'Article "%s" shares the file %s with another article', article.title, filename
                )
            pages[filename] = str(document)
        return RenderedSite(index=str(frontpage), articles=pages)


__all__ = [
    "ARTICLE_PAGE_PREFIXES",
    "FRONTPAGE_PREFIXES",
    "DocumentLister",
    "RenderedSite",
    "SiteBuilder",
]
