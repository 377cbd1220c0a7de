"""Documentation analysis -- report defects in synthesized records."""

from specdoc.analysis.analyzer import analyze_documentation, recommendations

__all__ = ["analyze_documentation", "recommendations"]
