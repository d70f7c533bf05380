"""Table of contents generation: configuration, collection and building."""

from .builder import TOCBuilder, toc_instruction
from .collector import HeadingCollector, fallback_bookmark_id, generated_bookmark_name, text_hash_id
from .config import TOCConfig
from .entry import TOCEntry

__all__ = [
    'TOCBuilder',
    'TOCConfig',
    'TOCEntry',
    'HeadingCollector',
    'fallback_bookmark_id',
    'generated_bookmark_name',
    'text_hash_id',
    'toc_instruction',
]
