"""
Variable resolution module.
Implements placeholder matching, path lookup/mutation, substitution and scanning.
"""

from .pattern import PatternCache, PatternCompiler, Placeholder
from .resolver import ABSENT, resolve_key, resolve_path
from .mutator import is_writable_path, set_at_path
from .substitution import ReplacementResult, VariableSubstitutor, substitute
from .scanner import DocumentScanner, Position, Variable, VariableStatus, scan

__all__ = [
    'ABSENT',
    'DocumentScanner',
    'PatternCache',
    'PatternCompiler',
    'Placeholder',
    'Position',
    'ReplacementResult',
    'Variable',
    'VariableStatus',
    'VariableSubstitutor',
    'is_writable_path',
    'resolve_key',
    'resolve_path',
    'scan',
    'set_at_path',
    'substitute',
]
