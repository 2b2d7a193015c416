# wanderplan/services/grounding.py

"""
Collect supporting source URLs from grounding metadata.

Grounding metadata is loosely shaped: the metadata object, its chunk list
and each chunk's ``web``/``maps`` entries may all be missing. Chunks are
decoded into tagged ``GroundingReference`` values and anything unrecognised
is discarded rather than probed further.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Literal

from wanderplan.monitoring import get_logger
from wanderplan.schemas.generation import GroundingReference

logger = get_logger(__name__)

SOURCE_KINDS: tuple[Literal["web", "maps"], ...] = ("web", "maps")


def grounding_chunks(metadata: Mapping[str, Any] | None) -> list[Any]:
    """Return the chunk list of grounding metadata, or an empty list."""
    if not isinstance(metadata, Mapping):
        return []
    chunks = metadata.get("grounding_chunks", metadata.get("groundingChunks"))
    if not isinstance(chunks, list):
        return []
    return chunks


def decode_chunk(chunk: Any) -> list[GroundingReference]:  # noqa: ANN401
    """
    Decode one chunk into zero, one or two references.

    Args:
        chunk: A raw chunk, e.g. ``{"web": {"uri": "https://..."}}``.

    Returns:
        The web reference (if any) followed by the maps reference (if any).
    """
    if not isinstance(chunk, Mapping):
        return []

    references = []
    for kind in SOURCE_KINDS:
        source = chunk.get(kind)
        if not isinstance(source, Mapping):
            continue
        uri = source.get("uri")
        if isinstance(uri, str) and uri:
            references.append(GroundingReference(kind=kind, uri=uri))
    return references


def collect_source_urls(chunks: Iterable[Any] | None) -> list[str]:
    """
    Collect web and maps URIs from grounding chunks.

    Args:
        chunks: Raw grounding chunks; ``None`` is treated as empty.

    Returns:
        Unique URIs in first-seen order.
    """
    urls: list[str] = []
    unknown = 0
    for chunk in chunks or ():
        references = decode_chunk(chunk)
        if not references:
            unknown += 1
        urls.extend(reference.uri for reference in references)

    if unknown:
        logger.debug("Discarded grounding chunks without a web or maps URI", count=unknown)

    # dict keeps insertion order, so this drops later duplicates only
    return list(dict.fromkeys(urls))


def source_urls_from_metadata(metadata: Mapping[str, Any] | None) -> list[str]:
    """Collect source URLs straight from a grounding metadata object."""
    return collect_source_urls(grounding_chunks(metadata))
