"""RDF terms and triples handled by the RDF/XML parser and formatter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from rdfxmlio.errors import RdfXmlError

_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r"})


@dataclass(frozen=True, order=True)
class NamedNode:
    """A node identified by an IRI."""

    iri: str

    def __str__(self) -> str:
        return f"<{self.iri}>"


@dataclass(frozen=True, order=True)
class BlankNode:
    """A node identified only by a document-local id."""

    id: str

    def __str__(self) -> str:
        return f"_:{self.id}"


@dataclass(frozen=True)
class Literal:
    """A literal value, optionally tagged with a language or a datatype."""

    value: str
    language: str | None = None
    datatype: NamedNode | None = None

    def __post_init__(self) -> None:
        if self.language is not None and self.datatype is not None:
            raise ValueError("a literal cannot have both a language tag and a datatype")

    def __str__(self) -> str:
        text = f'"{self.value.translate(_ESCAPES)}"'
        if self.language is not None:
            return f"{text}@{self.language}"
        if self.datatype is not None:
            return f"{text}^^{self.datatype}"
        return text


Subject = Union[NamedNode, BlankNode, "Triple"]
Term = Union[NamedNode, BlankNode, Literal, "Triple"]


def _term_str(term: Term) -> str:
    if isinstance(term, Triple):
        return f"<< {term.subject_str()} {term.predicate} {_term_str(term.object)} >>"
    return str(term)


@dataclass(frozen=True)
class Triple:
    """A statement made of a subject, a predicate and an object."""

    subject: Subject
    predicate: NamedNode
    object: Term

    def subject_str(self) -> str:
        return _term_str(self.subject)

    def __str__(self) -> str:
        return f"{_term_str(self.subject)} {self.predicate} {_term_str(self.object)} ."


def as_subject(term: Term) -> NamedNode | BlankNode:
    """Return ``term`` if RDF/XML can use it as a subject, else raise."""
    if isinstance(term, (NamedNode, BlankNode)):
        return term
    raise RdfXmlError("RDF/XML only supports named or blank subject")