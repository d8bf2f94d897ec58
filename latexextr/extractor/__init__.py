"""Regex-based math extraction and cleanup for LaTeX text.

The extractor runs a fixed set of delimiter scans over the source text and the
normalizer strips comments and layout-only commands from each match.
"""
from latexextr.extractor.math_extractor import extract_math_expressions
from latexextr.extractor.normalizer import clean_expression, render_output

__all__ = ["extract_math_expressions", "clean_expression", "render_output"]
