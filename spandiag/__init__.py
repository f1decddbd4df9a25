"""Diagnostic protocol types: source spans, labels, severities and span reading."""

__version__ = "0.1.0"

__all__ = ["protocol", "source", "named_source", "panic"]