"""Transformer module for querying and reshaping extracted DRE data.

Submodules
----------
aliases
    Semantic key -> sheet row resolution (exact key, then substring).
normalizer
    Pandas DataFrame views of a snapshot.
"""

from dre_extract.transformer.aliases import AliasMatch, AliasResolver, build_index
from dre_extract.transformer.normalizer import snapshot_to_frame, snapshot_to_long_frame

__all__ = [
    "AliasMatch",
    "AliasResolver",
    "build_index",
    "snapshot_to_frame",
    "snapshot_to_long_frame",
]
