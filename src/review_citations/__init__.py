"""Citation enrichment for paper review documents."""

__version__ = "0.1.0"
