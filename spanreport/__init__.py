"""Source spans, labeled spans, diagnostics and context-aware span reading."""

__version__ = "0.1.0"
__all__ = ["protocol", "source_impls", "named_source"]