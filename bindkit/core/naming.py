"""
BindKit Name Transformation

Maps documented member names (`$eval`, `pdf`, `setExtraHTTPHeaders`, ...) to
exported Go identifiers. The transformation is not idempotent: a name that
already went through it may match a marker again, so apply it exactly once.
"""

from typing import Tuple

from bindkit.core.constants import SELECTOR_MARKERS, ACRONYMS, GenerationDefaults


class NameTransformer:
    """Selector-marker expansion, acronym casing and capitalization."""

    def __init__(self, selector_style: str = GenerationDefaults.SELECTOR_STYLE):
        if selector_style not in SELECTOR_MARKERS:
            raise ValueError(f"Unknown selector style: {selector_style}")
        self.selector_style = selector_style
        self._markers: Tuple[Tuple[str, str], ...] = SELECTOR_MARKERS[selector_style]

    def transform(self, name: str) -> str:
        """
        Convert a documented member name to a Go identifier.

        Each marker and acronym is substituted at its first occurrence only,
        in table order, then the first character is upper-cased.

        Args:
            name: Documented name, e.g. "$$eval" or "pdf"

        Returns:
            Exported Go name, e.g. "EvaluateOnSelectorAll" or "PDF"
        """
        if not name:
            return name

        for marker, replacement in self._markers:
            name = name.replace(marker, replacement, 1)

        for lower, upper in ACRONYMS:
            name = name.replace(lower, upper, 1)

        return name[0].upper() + name[1:]

    def pascal_case(self, name: str) -> str:
        """Struct field / struct name form: first underscore dropped, then transformed."""
        return self.transform(name.replace("_", "", 1))


_default_transformer = NameTransformer()


def to_go_name(name: str) -> str:
    return _default_transformer.transform(name)


def to_pascal_case(name: str) -> str:
    return _default_transformer.pascal_case(name)
