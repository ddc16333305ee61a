"""
Patcher module exports.
"""

from .generator import apply_fix, apply_fixes, build_fix_preview

__all__ = ["apply_fix", "apply_fixes", "build_fix_preview"]
