"""Metadata access: tag vocabulary, rationals and the per-image store."""

from watermarker.metadata.rational import Rational
from watermarker.metadata.store import MetadataStore, RationalTriple
from watermarker.metadata.tags import Directory, Tag, TagKind

__all__ = [
    "Directory",
    "MetadataStore",
    "Rational",
    "RationalTriple",
    "Tag",
    "TagKind",
]
