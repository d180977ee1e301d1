"""
PlayAs SDK Command-Line Interface
=================================

- **playas**: build patched zobjs and inspect manifests and zobjs

The tool is a Click-based CLI application with comprehensive help and
error reporting.
"""

__all__ = ["playas"]
