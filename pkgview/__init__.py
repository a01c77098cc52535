"""Tabular viewer for Salesforce package.xml manifests."""

__version__ = "0.1.0"

__all__ = ["__version__"]
