"""
Go declaration generation: option structs, interfaces and Must-wrappers.
"""

from .pipeline import (
    generate_structs_file,
    generate_interfaces_file,
    generate_bindings_file,
    generate_must_file,
)


__all__ = [
    'generate_structs_file',
    'generate_interfaces_file',
    'generate_bindings_file',
    'generate_must_file',
]
