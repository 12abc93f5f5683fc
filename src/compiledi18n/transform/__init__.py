"""Build-time transforms: call-site rewrite and bundle substitution.

Python 3.13+.
"""

from .rewrite import (
    CallSiteRewriter,
    ImportSpecifier,
    MarkerCall,
    StringLiteral,
    SyntaxRewriter,
    is_rewritten,
    transform_localize,
)
from .scanner import ArgumentScanner, ScannedCall, scan_call
from .substitute import make_translated_expr, substitute

__all__ = [
    "ArgumentScanner",
    "CallSiteRewriter",
    "ImportSpecifier",
    "MarkerCall",
    "ScannedCall",
    "StringLiteral",
    "SyntaxRewriter",
    "is_rewritten",
    "make_translated_expr",
    "scan_call",
    "substitute",
    "transform_localize",
]
