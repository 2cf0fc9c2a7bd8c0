"""
mkdocs-d2m — Doxygen XML ingestion for MkDocs.

Reads a directory of Doxygen XML output into a cross-referenced registry
of compounds, classes, functions, variables, macros and enums, with parsed
doc comments and display-ready signatures, ready to be rendered as API
reference pages.
"""

__version__ = "0.3.0"
