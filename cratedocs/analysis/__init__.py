"""Heuristic analysis of converted documentation: examples and type relationships."""

from .examples import ExampleExtractor, generated_snippet
from .relationships import RelationshipAnalyzer, render_report

__all__ = [
    "ExampleExtractor",
    "generated_snippet",
    "RelationshipAnalyzer",
    "render_report",
]
