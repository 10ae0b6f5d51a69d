"""
BindKit Go Doc Comment Filter

Turns Markdown-like API prose into Go comment lines. Code examples in other
languages, `**Usage**` sections and `- extends:` boilerplate are dropped;
cross references such as [`method: Page.goto`] become call-style `Page.goto()`.
"""

import re
import textwrap
from dataclasses import dataclass
from typing import Iterable, List, Optional

from bindkit.core.constants import EXAMPLE_LANGUAGES


USAGE_MARKER = "**Usage**"
DETAILS_MARKER = "**Details**"
DEPRECATED_PREFIX = "Deprecated: "
CODE_FENCE = "```"

_CROSS_REFERENCE = re.compile(r"\[`(?:method|property): ([^`]+)`\]")
_EXTENDS_BOILERPLATE = re.compile(r"^- extends: [^\n]*\n[ \t]*\n", re.MULTILINE)


@dataclass
class CommentFilterState:
    """The two flags of the filter state machine."""
    inside_usage_section: bool = False
    inside_example_block: bool = False

    def suppressed(self) -> bool:
        return self.inside_usage_section or self.inside_example_block


def filter_comment(
    text: Optional[str],
    example_languages: Iterable[str] = EXAMPLE_LANGUAGES,
    width: int = 0
) -> List[str]:
    """
    Clean API prose into comment lines (without the `//` prefix).

    Args:
        text: Raw documentation prose, may be None
        example_languages: Fence tags whose blocks are treated as examples
        width: Wrap kept lines at this width, 0 keeps lines as they are

    Returns:
        Trimmed, non-empty lines to emit
    """
    if not text:
        return []

    text = _CROSS_REFERENCE.sub(r"\1()", text)
    text = _EXTENDS_BOILERPLATE.sub("", text)

    languages = {language.lower() for language in example_languages}
    state = CommentFilterState()
    lines = []

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if advance(state, line, languages):
            lines.extend(_wrap(line, width))

    return lines


def advance(state: CommentFilterState, line: str, example_languages: set) -> bool:
    """
    Apply one trimmed line to the state machine.

    Returns:
        True when the line should be emitted
    """
    if not line:
        return False

    if line == USAGE_MARKER:
        state.inside_usage_section = True
    elif line == DETAILS_MARKER or line.startswith(DEPRECATED_PREFIX):
        state.inside_usage_section = False

    if line.startswith(CODE_FENCE):
        tag = _fence_tag(line)
        if not tag:
            if state.inside_example_block:
                state.inside_example_block = False
                return False
        elif tag in example_languages:
            state.inside_example_block = True
            return False

    return not state.suppressed()


def _fence_tag(line: str) -> str:
    """First word of a fence's info string, lower-cased ("```python async" -> "python")."""
    info = line[len(CODE_FENCE):].strip()
    return info.split()[0].lower() if info else ""


def _wrap(line: str, width: int) -> List[str]:
    if width <= 0 or len(line) <= width:
        return [line]
    return textwrap.wrap(line, width=width, break_long_words=False, break_on_hyphens=False) or [line]


def render_comment(lines: List[str], indent: str = "") -> List[str]:
    """Prefix cleaned lines as Go line comments."""
    return [f"{indent}// {line}" for line in lines]
