"""pagetext: plain-text extraction from parsed HTML documents."""

from pagetext.config import ConfigError, ExtractorConfig, config_from_mapping, load_config
from pagetext.extractor import TextExtractor, TextVisitor, extract_from_html
from pagetext.traversal import NodeVisitor, TraversalContext, traverse

__all__ = [
    "ConfigError",
    "ExtractorConfig",
    "NodeVisitor",
    "TextExtractor",
    "TextVisitor",
    "TraversalContext",
    "config_from_mapping",
    "extract_from_html",
    "load_config",
    "traverse",
]
