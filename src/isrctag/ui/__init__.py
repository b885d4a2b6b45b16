"""
User interface components for isrctag.
"""

from .selector import Selector, InteractiveSelector, ScriptedSelector

__all__ = [
    'Selector',
    'InteractiveSelector',
    'ScriptedSelector'
]
