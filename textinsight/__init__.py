"""Text Insight - readability and grammar analysis for pasted content."""

__version__ = "1.0.0"
