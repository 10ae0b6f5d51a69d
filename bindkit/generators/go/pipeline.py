"""
BindKit Go Generation Pipeline

Assembles generated declarations into complete Go files: a package header
line followed by the declarations, separated by blank lines.
"""

from typing import List, Optional

from bindkit.core.config import BindKitConfig
from bindkit.core.schema import DescriptionTree, SignatureTable
from bindkit.generators.go.structs import StructSynthesizer, render_struct
from bindkit.generators.go.interfaces import InterfaceEmitter
from bindkit.generators.go.must import emit_must_wrappers


def generate_structs_file(tree: DescriptionTree, config: Optional[BindKitConfig] = None) -> str:
    """Options structs of every method plus all nested structs."""
    config = config or BindKitConfig()
    declarations = StructSynthesizer(config).synthesize_tree(tree)
    return assemble_go_file(config.package, [render_struct(decl) for decl in declarations])


def generate_interfaces_file(
    tree: DescriptionTree,
    table: SignatureTable,
    config: Optional[BindKitConfig] = None
) -> str:
    """Documented interface declarations in signature-table order."""
    config = config or BindKitConfig()
    blocks = InterfaceEmitter(config).emit(tree, table)
    return assemble_go_file(config.package, blocks)


def generate_bindings_file(
    tree: DescriptionTree,
    table: SignatureTable,
    config: Optional[BindKitConfig] = None
) -> str:
    """Interfaces followed by every synthesized struct, in one file."""
    config = config or BindKitConfig()
    blocks = InterfaceEmitter(config).emit(tree, table)
    blocks += [render_struct(decl) for decl in StructSynthesizer(config).synthesize_tree(tree)]
    return assemble_go_file(config.package, blocks)


def generate_must_file(table: SignatureTable, config: Optional[BindKitConfig] = None) -> str:
    """Panicking Must-wrappers for every error-returning signature."""
    config = config or BindKitConfig()
    return assemble_go_file(config.package, emit_must_wrappers(table))


def assemble_go_file(package: str, blocks: List[str]) -> str:
    sections = [f"package {package}"] + [block for block in blocks if block]
    return "\n\n".join(sections) + "\n"
