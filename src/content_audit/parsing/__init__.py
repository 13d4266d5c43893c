"""Content parsing: prose cleaning, frontmatter, positions and readability."""

from .content_parser import (
    clean,
    inside_code_block,
    paragraphs,
    remove_code_blocks,
    remove_html,
    strip_frontmatter,
    strip_frontmatter_and_code,
    words,
)
from .frontmatter import (
    FrontmatterError,
    extract_frontmatter,
    frontmatter_list,
    frontmatter_value,
    parse_frontmatter,
    split_frontmatter,
)
from .positions import context_around, find_line, position_for
from .readability import count_syllables, flesch_kincaid_grade, reading_level_label
from .titles import display_name, display_path, first_h1, resolve_title

__all__ = [
    "FrontmatterError",
    "clean",
    "context_around",
    "count_syllables",
    "display_name",
    "display_path",
    "extract_frontmatter",
    "find_line",
    "first_h1",
    "flesch_kincaid_grade",
    "frontmatter_list",
    "frontmatter_value",
    "inside_code_block",
    "paragraphs",
    "parse_frontmatter",
    "position_for",
    "reading_level_label",
    "remove_code_blocks",
    "remove_html",
    "resolve_title",
    "split_frontmatter",
    "strip_frontmatter",
    "strip_frontmatter_and_code",
    "words",
]
