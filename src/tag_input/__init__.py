"""Extract ``name:value`` tags from a single line of free text."""

from loguru import logger

from tag_input.domain.models import DuplicateHandling, ParseResult, TagDescriptor, TagValue
from tag_input.registry import TagRegistry, TagRegistryError
from tag_input.session import TagBadge, TagInputSession
from tag_input.tag_parsing import parse_input_text

__version__ = "0.1.0"

parse = parse_input_text

logger.disable("tag_input")

__all__ = [
    "DuplicateHandling",
    "ParseResult",
    "TagBadge",
    "TagDescriptor",
    "TagInputSession",
    "TagRegistry",
    "TagRegistryError",
    "TagValue",
    "__version__",
    "parse",
    "parse_input_text",
]
