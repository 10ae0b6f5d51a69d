"""
Coverage validation of the generated Go surface against the API description
"""

from .coverage import CoverageValidator, CoverageReport, parse_go_doc


__all__ = ['CoverageValidator', 'CoverageReport', 'parse_go_doc']
