"""Streaming RDF/XML parsing and formatting, with RDF term types and IRI helpers."""

__version__ = "0.1.0"
__all__ = ["errors", "model", "names", "iri", "formatter", "entities", "states", "parser"]