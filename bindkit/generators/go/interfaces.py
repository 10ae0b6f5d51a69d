"""
BindKit Go Interface Emitter

Emits one Go interface per signature-table class. The signature table decides
which members exist and what they look like; the description tree only
contributes the doc comments layered on top.
"""

import logging
from typing import List, Optional

from bindkit.core.config import BindKitConfig
from bindkit.core.naming import NameTransformer
from bindkit.core.schema import (
    DescriptionTree, ApiClass, ApiMember, MemberKind, SignatureTable,
    Signature, Inheritance,
)
from bindkit.generators.go.comments import filter_comment, render_comment, DEPRECATED_PREFIX


logger = logging.getLogger(__name__)

INDENT = "\t"


class InterfaceEmitter:
    """Renders interface declarations from a signature table plus description docs."""

    def __init__(self, config: Optional[BindKitConfig] = None, transformer: Optional[NameTransformer] = None):
        self.config = config or BindKitConfig()
        self.transformer = transformer or NameTransformer(self.config.selector_style)

    def emit(self, tree: DescriptionTree, table: SignatureTable) -> List[str]:
        """
        Render every interface of the signature table, in table order.

        Returns:
            One Go source block per interface
        """
        blocks = []
        for class_name, members in table.classes.items():
            api_class = tree.find_class(class_name)
            if api_class is None:
                logger.warning(f"Interface '{class_name}' has no documentation in the API description")
            blocks.append(self.emit_interface(class_name, members, api_class))
        return blocks

    def emit_interface(self, class_name: str, members: dict, api_class: Optional[ApiClass]) -> str:
        """Render a single interface declaration."""
        lines = []

        if api_class is not None:
            lines.extend(render_comment(self._comment_lines(api_class.doc)))

        lines.append(f"type {class_name} interface {{")

        chunks = []
        for member_name, entry in members.items():
            if isinstance(entry, Inheritance):
                chunks.append([f"{INDENT}{parent}" for parent in entry.parents])
                continue

            chunk = []
            member = self.find_member(api_class, member_name) if api_class is not None else None
            if member is not None:
                chunk.extend(render_comment(self._comment_lines(member_documentation(member)), indent=INDENT))
            else:
                logger.debug(f"No documentation for {class_name}.{member_name}")
            chunk.append(f"{INDENT}{render_signature(member_name, entry)}")
            chunks.append(chunk)

        for index, chunk in enumerate(chunks):
            if index > 0:
                lines.append("")
            lines.extend(chunk)

        lines.append("}")
        return "\n".join(lines)

    def find_member(self, api_class: ApiClass, declared_name: str) -> Optional[ApiMember]:
        """
        Find the documented member whose Go name equals the declared name.

        Methods win over properties; events are never matched.
        """
        candidates = [m for m in api_class.members if m.kind == MemberKind.METHOD]
        candidates += [m for m in api_class.members if m.kind == MemberKind.PROPERTY]
        for member in candidates:
            if self.transformer.transform(member.name_for(self.config.target_language)) == declared_name:
                return member
        return None

    def _comment_lines(self, text: Optional[str]) -> List[str]:
        return filter_comment(text, self.config.example_languages, self.config.comment_width)


def member_documentation(member: ApiMember) -> Optional[str]:
    """Member prose with deprecation and discouragement notes appended as `Deprecated:` lines."""
    parts = [member.doc] if member.doc else []
    for note in (member.deprecated, member.discouraged):
        if note:
            parts.append(f"{DEPRECATED_PREFIX}{note}")
    return "\n".join(parts) if parts else None


def render_signature(member_name: str, signature: Signature) -> str:
    """`Name(params) returns`, wrapping multiple return values in parentheses."""
    returns = format_returns(signature.returns)
    declaration = f"{member_name}({signature.params})"
    return f"{declaration} {returns}" if returns else declaration


def format_returns(returns: str) -> str:
    if not returns:
        return ""
    if returns.startswith("("):
        return returns
    if "," not in returns:
        return returns
    return f"({returns})"


def emit_interfaces(tree: DescriptionTree, table: SignatureTable, config: Optional[BindKitConfig] = None) -> List[str]:
    return InterfaceEmitter(config).emit(tree, table)
