"""
BindKit input loading - API description tree and signature table
"""

from .description import load_description, parse_description, DescriptionLoadError
from .signatures import load_signature_table, parse_signature_table, SignatureTableError


__all__ = [
    'load_description', 'parse_description', 'DescriptionLoadError',
    'load_signature_table', 'parse_signature_table', 'SignatureTableError',
]
