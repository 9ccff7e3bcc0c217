"""
Activator - declarative, multi-source activation planner

Activator collects conditional activation rules for named items from several
configuration sources, merges them into one ordered plan and reconciles that
plan against an item registry.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
