"""
Content metadata module.

Provides tools for:
- Deriving slug, position, locale and flags from content paths
- Loading content records from a content directory
- Building a sorted, filtered content index
- Writing derived metadata back into front matter
"""

from pathmeta.content.frontmatter import FrontMatterEditor, write_path_meta
from pathmeta.content.loader import ContentLoader, ContentRecord
from pathmeta.content.path_meta import (
    PathMeta,
    apply_path_meta,
    derive_path_meta,
    generate_position,
    generate_slug,
    generate_title,
    is_draft,
    is_partial,
    refine_url_part,
)
from pathmeta.content.pipeline import build_index, find_by_slug, summarize, transform_record

__all__ = [
    # Path metadata
    "PathMeta",
    "derive_path_meta",
    "apply_path_meta",
    "refine_url_part",
    "generate_slug",
    "generate_position",
    "generate_title",
    "is_draft",
    "is_partial",
    # Loading
    "ContentLoader",
    "ContentRecord",
    # Pipeline
    "transform_record",
    "build_index",
    "find_by_slug",
    "summarize",
    # Front matter
    "FrontMatterEditor",
    "write_path_meta",
]
