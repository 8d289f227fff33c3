"""Turn raw Google Docs documents into :class:`FullArticle` records.

The Docs API returns a nested structure of paragraphs and text runs plus
separate collections of inline and positioned objects. Extraction flattens
the runs into a plain-text body, derives the subtitle from its first line, and
downloads the first embedded image it can resolve. Images are held in memory
on the article so nothing is written to disk before the whole site binds.

Typical usage fans out over a folder listing:

>>> from autospoof.articles.extractor import DocumentExtractor, extract_articles
>>> extractor = DocumentExtractor(fetcher)  # doctest: +SKIP
>>> articles = extract_articles(client, entries, extractor)  # doctest: +SKIP
>>> next(iter(articles.values())).title  # doctest: +SKIP
'MAYOR EATS OWN HAT'
"""

from __future__ import annotations

import logging
import typing as typ
from concurrent.futures import ThreadPoolExecutor

from autospoof.errors import FetchError

from .models import DocumentEntry, FullArticle, slugify

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from autospoof.fetcher import BinaryResponse

logger = logging.getLogger(__name__)

RawDocument = typ.Mapping[str, typ.Any]


class DocumentSource(typ.Protocol):
    """Capability returning the raw structure of one document."""

    def get_document(self, document_id: str) -> dict[str, typ.Any]: ...


class BinaryFetcher(typ.Protocol):
    """Capability downloading an arbitrary URL."""

    def fetch_binary(self, url: str) -> BinaryResponse: ...


def iter_text_runs(document: RawDocument) -> cabc.Iterator[str]:
    """Yield every paragraph text run of ``document`` in document order."""
    body = document.get("body") or {}
    for block in body.get("content") or []:
        paragraph = block.get("paragraph") if isinstance(block, dict) else None
        if not isinstance(paragraph, dict):
            continue
        for element in paragraph.get("elements") or []:
            run = element.get("textRun") if isinstance(element, dict) else None
            if isinstance(run, dict) and isinstance(run.get("content"), str):
                yield run["content"]


def assemble_body(document: RawDocument, name: str) -> str:
    """Concatenate text runs, dropping runs that merely restate ``name``.

    >>> doc = {"body": {"content": [
    ...     {"paragraph": {"elements": [{"textRun": {"content": "FOO\\n"}}]}},
    ...     {"paragraph": {"elements": [{"textRun": {"content": "Story.\\n"}}]}},
    ... ]}}
    >>> assemble_body(doc, "FOO")
    'Story.'
    """
    heading = name.strip().lower()
    parts = [
        text
        for text in iter_text_runs(document)
        if text and text.strip().lower() != heading
    ]
    return "".join(parts).strip()


def first_line(body: str) -> str:
    """Return ``body`` up to, not including, its first line break."""
    return body.split("\n", 1)[0]


def find_image_uri(document: RawDocument) -> str | None:
    """Return the first image ``contentUri`` among inline, then positioned objects."""
    collections = (
        ("inlineObjects", "inlineObjectProperties"),
        ("positionedObjects", "positionedObjectProperties"),
    )
    for collection_key, properties_key in collections:
        objects = document.get(collection_key) or {}
        if not isinstance(objects, dict):
            continue
        for obj in objects.values():
            if not isinstance(obj, dict):
                continue
            match obj.get(properties_key):
                case {"embeddedObject": {"imageProperties": {"contentUri": str(uri)}}} if uri:
                    return uri
                case _:
                    continue
    return None


class DocumentExtractor:
    """Build one :class:`FullArticle` per listed document."""

    def __init__(self, fetcher: BinaryFetcher) -> None:
        self.fetcher = fetcher

    def extract(self, entry: DocumentEntry, document: RawDocument) -> FullArticle:
        """Return the article for ``entry`` built from its raw ``document``.

        Parameters
        ----------
        entry : DocumentEntry
            Listing entry; its ``name`` becomes the title unmodified.
        document : Mapping
            Raw Docs API structure. Missing or malformed parts yield an empty
            body rather than an error.

        Returns
        -------
        FullArticle
            Article with body, subtitle, and, when an embedded image could be
            downloaded, ``image`` and ``image_data`` set.
        """
        body = assemble_body(document, entry.name)
        image, image_data = self._download_image(entry, document)
        return FullArticle(
            title=entry.name,
            subtitle=first_line(body),
            image=image,
            body=body,
            document_id=entry.id,
            image_data=image_data,
        )

    def _download_image(
        self, entry: DocumentEntry, document: RawDocument
    ) -> tuple[str | None, bytes | None]:
        uri = find_image_uri(document)
        if not uri:
            logger.info('No embedded image with a content URI in "%s"', entry.name)
            return None, None
        try:
            response = self.fetcher.fetch_binary(uri)
        except FetchError as exc:
            logger.warning('Could not download image for "%s": %s', entry.name, exc)
            return None, None
        if not response.ok:
            logger.warning(
                'Received status %s while trying to access image for "%s"',
                response.status,
                entry.name,
            )
            return None, None
        extension = response.subtype
        if not extension:
            logger.warning(
                'Image for "%s" has unusable Content-Type %r',
                entry.name,
                response.content_type,
            )
            return None, None
        return f"{slugify(entry.name)}.{extension}", response.content


def extract_articles(
    source: DocumentSource,
    entries: cabc.Iterable[DocumentEntry],
    extractor: DocumentExtractor,
    *,
    max_workers: int = 4,
) -> dict[str, FullArticle]:
    """Fetch and extract every entry, keyed by document id in listing order.

    Document fetches run concurrently on a thread pool; each task touches only
    its own document. A document whose fetch fails is logged and left out.

    Parameters
    ----------
    source : DocumentSource
        Capability returning raw documents (``GoogleDocsClient`` in practice).
    entries : Iterable[DocumentEntry]
        Listing entries to process.
    extractor : DocumentExtractor
        Extractor used for every document.
    max_workers : int, optional
        Thread pool size; ``1`` processes documents sequentially.

    Returns
    -------
    dict[str, FullArticle]
        Extracted articles keyed by document id.
    """
    listed = list(entries)

    def _process(entry: DocumentEntry) -> FullArticle | None:
        logger.info('Processing "%s"...', entry.name)
        try:
            document = source.get_document(entry.id)
        except FetchError as exc:
            logger.warning('Skipping "%s" (%s): %s', entry.name, entry.id, exc)
            return None
        return extractor.extract(entry, document)

    if max_workers <= 1 or len(listed) <= 1:
        results = [_process(entry) for entry in listed]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(_process, listed))

    return {
        entry.id: article
        for entry, article in zip(listed, results, strict=True)
        if article is not None
    }


__all__ = [
    "BinaryFetcher",
    "DocumentExtractor",
    "DocumentSource",
    "assemble_body",
    "extract_articles",
    "find_image_uri",
    "first_line",
    "iter_text_runs",
]
