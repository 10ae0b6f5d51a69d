"""
BindKit Integration

Config-driven entry points tying input loading, generation and validation
together. Each function loads what it needs, runs one generation or
validation pass and returns the result; printing is left to the caller.
"""

import logging
from pathlib import Path
from typing import Optional, Union, IO

from bindkit.core.config import BindKitConfig, load_bindkit_config
from bindkit.core.schema import DescriptionTree, SignatureTable
from bindkit.introspection.description import load_description
from bindkit.introspection.signatures import load_signature_table
from bindkit.generators.go.pipeline import (
    generate_structs_file, generate_interfaces_file, generate_bindings_file, generate_must_file,
)
from bindkit.validation.coverage import CoverageValidator, CoverageReport, parse_go_doc


logger = logging.getLogger(__name__)

Source = Union[str, Path, IO[str]]


def load_inputs(
    api_source: Source,
    signatures_source: Optional[Source] = None,
    config: Optional[BindKitConfig] = None,
):
    """
    Load the description tree and, when given, the signature table.

    Returns:
        Tuple of (DescriptionTree, Optional[SignatureTable])

    Raises:
        DescriptionLoadError: If the API description cannot be loaded
        SignatureTableError: If the signature table cannot be loaded
    """
    config = config or BindKitConfig()
    tree = load_description(api_source, handle_type=config.handle_type)
    table = None
    if signatures_source is not None:
        table = load_signature_table(signatures_source, inheritance_key=config.inheritance_key)
    logger.debug(f"Loaded {len(tree.classes)} documented classes")
    return tree, table


def structs(api_source: Source, project_root: Optional[str] = None) -> str:
    """Generate the options-struct Go file."""
    config = load_bindkit_config(project_root)
    tree, _ = load_inputs(api_source, config=config)
    return generate_structs_file(tree, config)


def interfaces(
    api_source: Source,
    signatures_source: Source,
    project_root: Optional[str] = None,
    include_structs: bool = False,
) -> str:
    """Generate the interface Go file, optionally followed by all option structs."""
    config = load_bindkit_config(project_root)
    tree, table = load_inputs(api_source, signatures_source, config)
    if include_structs:
        return generate_bindings_file(tree, table, config)
    return generate_interfaces_file(tree, table, config)


def must_wrappers(signatures_source: Source, project_root: Optional[str] = None) -> str:
    """Generate the Must-wrapper Go file from the signature table alone."""
    config = load_bindkit_config(project_root)
    table = load_signature_table(signatures_source, inheritance_key=config.inheritance_key)
    return generate_must_file(table, config)


def validate(
    api_source: Source,
    signatures_source: Optional[Source] = None,
    go_doc_text: Optional[str] = None,
    project_root: Optional[str] = None,
) -> CoverageReport:
    """
    Validate coverage against the signature table or introspected `go doc` text.

    Exactly one of `signatures_source` and `go_doc_text` must be given.
    """
    if (signatures_source is None) == (go_doc_text is None):
        raise ValueError("Pass either a signature table or go doc output, not both or neither")

    config = load_bindkit_config(project_root)
    tree, table = load_inputs(api_source, signatures_source, config)
    validator = CoverageValidator(config)

    if table is not None:
        return validator.validate(tree, table)
    return validator.validate_introspected(tree, parse_go_doc(go_doc_text))


def generate_all(
    tree: DescriptionTree,
    table: SignatureTable,
    config: Optional[BindKitConfig] = None,
) -> dict:
    """
    Generate every Go file from already-loaded inputs.

    Returns:
        Dict mapping file name -> generated content
    """
    config = config or BindKitConfig()
    return {
        "generated-structs.go": generate_structs_file(tree, config),
        "generated-interfaces.go": generate_interfaces_file(tree, table, config),
        "generated-must-methods.go": generate_must_file(table, config),
    }
