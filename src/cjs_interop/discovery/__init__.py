"""
Discovery Subpackage.

Inspects installed npm packages to find out which of them are CommonJS.
"""

from cjs_interop.discovery.module_types import ModuleTypes, classify_manifest, determine_module_types

__all__ = ["ModuleTypes", "classify_manifest", "determine_module_types"]
