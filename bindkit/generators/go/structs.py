"""
BindKit Go Options Struct Synthesizer

Collects each method's optional parameters into a `<Class><Method>Options`
struct, recursing into object-shaped parameters (and unions carrying an
object branch) to produce the nested structs they reference.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from bindkit.core.config import BindKitConfig
from bindkit.core.naming import NameTransformer
from bindkit.core.type_conversion import TypeMapper
from bindkit.core.schema import (
    DescriptionTree, ApiMember, ApiArgument, ObjectType,
    StructDeclaration, StructField, StructRegistry,
)
from bindkit.generators.go.comments import filter_comment, render_comment


logger = logging.getLogger(__name__)

OPTIONS_SUFFIX = "Options"


@dataclass(frozen=True)
class SynthesisResult:
    """Options struct of one method (None when it has no fields) and the nested structs it needs."""
    declaration: Optional[StructDeclaration]
    nested: Tuple[StructDeclaration, ...] = ()


class StructSynthesizer:
    """Builds option structs for the methods of a description tree."""

    def __init__(self, config: Optional[BindKitConfig] = None, transformer: Optional[NameTransformer] = None):
        self.config = config or BindKitConfig()
        self.transformer = transformer or NameTransformer(self.config.selector_style)
        self.mapper = TypeMapper(self.build_struct, self.transformer)

    def synthesize_tree(self, tree: DescriptionTree) -> List[StructDeclaration]:
        """
        Synthesize every options struct of the tree.

        Returns:
            Option structs in tree order followed by nested structs in
            first-discovered order, coalesced by name
        """
        options = StructRegistry()
        nested = StructRegistry()

        for api_class in tree.classes:
            for member in api_class.methods():
                if not member.langs.applies_to(self.config.target_language):
                    continue
                result = self.synthesize_method(api_class.name, member)
                if result.declaration is not None:
                    options.add(result.declaration)
                nested.extend(list(result.nested))

        logger.debug(f"Synthesized {len(options)} options structs and {len(nested)} nested structs")
        return options.declarations() + [decl for decl in nested.declarations() if decl.name not in options]

    def synthesize_method(self, class_name: str, member: ApiMember) -> SynthesisResult:
        """Build the options struct for a single method."""
        candidates = self.optional_parameters(class_name, member)
        if not candidates:
            return SynthesisResult(declaration=None)

        if len(candidates) == 1 and isinstance(candidates[0].type, ObjectType):
            candidates = list(candidates[0].type.properties)

        prefix = class_name + self.transformer.pascal_case(member.name)
        fields, nested = self._build_fields(prefix, candidates)
        if not fields:
            return SynthesisResult(declaration=None, nested=tuple(nested))

        declaration = StructDeclaration(name=prefix + OPTIONS_SUFFIX, fields=tuple(fields))
        return SynthesisResult(declaration=declaration, nested=tuple(nested))

    def optional_parameters(self, class_name: str, member: ApiMember) -> List[ApiArgument]:
        """Arguments that belong in the options struct."""
        spread = self.config.should_spread(class_name, member.name)
        return [
            arg for arg in member.args
            if not arg.required or arg.name.startswith(self.config.options_prefix) or spread
        ]

    def build_struct(self, name: str, properties: Sequence[ApiArgument]) -> List[StructDeclaration]:
        """Nested struct `name` from object properties, followed by the structs it references."""
        fields, nested = self._build_fields(name, properties)
        return [StructDeclaration(name=name, fields=tuple(fields))] + nested

    def _build_fields(self, prefix: str, properties: Sequence[ApiArgument]) -> Tuple[List[StructField], List[StructDeclaration]]:
        fields: List[StructField] = []
        nested: List[StructDeclaration] = []

        for prop in properties:
            if not prop.langs.applies_to(self.config.target_language):
                logger.debug(f"Skipping {prefix}.{prop.name}: restricted to {', '.join(prop.langs.only)}")
                continue

            if self._spreads(prop):
                inner_fields, inner_nested = self._build_fields(prefix, prop.type.properties)
                fields.extend(inner_fields)
                nested.extend(inner_nested)
                continue

            mapped = self.mapper.map_type(prop.name, prop.type, prefix)
            fields.append(StructField(
                name=self.transformer.pascal_case(prop.name),
                type=mapped.go_type,
                tag=prop.name,
                doc=tuple(filter_comment(prop.doc, self.config.example_languages, self.config.comment_width)),
            ))
            nested.extend(mapped.nested)

        return fields, nested

    def _spreads(self, prop: ApiArgument) -> bool:
        """`options`-style properties carrying an object shape are inlined."""
        return (
            prop.name.startswith(self.config.options_prefix)
            and isinstance(prop.type, ObjectType)
            and bool(prop.type.properties)
        )


def render_struct(declaration: StructDeclaration) -> str:
    """Render a struct declaration as Go source."""
    lines = [f"type {declaration.name} struct {{"]
    for struct_field in declaration.fields:
        lines.extend(render_comment(list(struct_field.doc), indent="\t"))
        lines.append(f'\t{struct_field.name} {struct_field.type} `json:"{struct_field.tag}"`')
    lines.append("}")
    return "\n".join(lines)


def synthesize_structs(tree: DescriptionTree, config: Optional[BindKitConfig] = None) -> List[StructDeclaration]:
    return StructSynthesizer(config).synthesize_tree(tree)
