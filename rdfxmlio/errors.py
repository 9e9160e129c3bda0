"""Exceptions raised while reading or writing RDF/XML."""

from __future__ import annotations


class RdfXmlError(ValueError):
    """Base error for invalid RDF/XML input or unsupported output."""


class XmlSyntaxError(RdfXmlError):
    """The underlying XML document is malformed."""


class InvalidIriError(RdfXmlError):
    """An IRI found in the document could not be parsed or resolved."""

    def __init__(self, iri: str, reason: str) -> None:
        super().__init__(f"error while parsing IRI '{iri}': {reason}")
        self.iri = iri
        self.reason = reason


class InvalidLanguageTagError(RdfXmlError):
    """An ``xml:lang`` value is not a well-formed language tag."""

    def __init__(self, tag: str, reason: str) -> None:
        super().__init__(f"error while parsing language tag '{tag}': {reason}")
        self.tag = tag
        self.reason = reason