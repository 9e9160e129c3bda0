"""Parser states for the RDF/XML element stack and triple helpers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Union

from rdfxmlio.model import BlankNode, Literal, NamedNode, Triple

RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RDF_ABOUT = RDF_NS + "about"
RDF_ABOUT_EACH = RDF_NS + "aboutEach"
RDF_ABOUT_EACH_PREFIX = RDF_NS + "aboutEachPrefix"
RDF_BAG_ID = RDF_NS + "bagID"
RDF_DATATYPE = RDF_NS + "datatype"
RDF_DESCRIPTION = RDF_NS + "Description"
RDF_FIRST = RDF_NS + "first"
RDF_ID = RDF_NS + "ID"
RDF_LI = RDF_NS + "li"
RDF_NIL = RDF_NS + "nil"
RDF_NODE_ID = RDF_NS + "nodeID"
RDF_OBJECT = RDF_NS + "object"
RDF_PARSE_TYPE = RDF_NS + "parseType"
RDF_PREDICATE = RDF_NS + "predicate"
RDF_RDF = RDF_NS + "RDF"
RDF_REST = RDF_NS + "rest"
RDF_RESOURCE = RDF_NS + "resource"
RDF_STATEMENT = RDF_NS + "Statement"
RDF_SUBJECT = RDF_NS + "subject"
RDF_TYPE = RDF_NS + "type"
RDF_XML_LITERAL = RDF_NS + "XMLLiteral"

RESERVED_RDF_ELEMENTS = frozenset(
    {
        RDF_ABOUT,
        RDF_ABOUT_EACH,
        RDF_ABOUT_EACH_PREFIX,
        RDF_BAG_ID,
        RDF_DATATYPE,
        RDF_ID,
        RDF_LI,
        RDF_NODE_ID,
        RDF_PARSE_TYPE,
        RDF_RDF,
        RDF_RESOURCE,
    }
)
RESERVED_RDF_ATTRIBUTES = frozenset(
    {RDF_ABOUT_EACH, RDF_ABOUT_EACH_PREFIX, RDF_LI, RDF_RDF, RDF_RESOURCE}
)

Node = Union[NamedNode, BlankNode]
NodeOrText = Union[NamedNode, BlankNode, str]


@dataclass
class DocState:
    """The document level, before the root element."""

    base_iri: str | None = None
    language: str | None = field(default=None, init=False)


@dataclass
class RdfState:
    """Inside the ``rdf:RDF`` element."""

    base_iri: str | None
    language: str | None


@dataclass
class NodeEltState:
    """Inside a node element describing ``subject``."""

    base_iri: str | None
    language: str | None
    subject: Node
    li_counter: int = 0


@dataclass
class PropertyEltState:
    """Inside a resource, literal or empty property element."""

    iri: str
    base_iri: str | None
    language: str | None
    subject: Node
    object: NodeOrText | None = None
    id_attr: NamedNode | None = None
    datatype_attr: NamedNode | None = None


@dataclass
class CollectionPropertyEltState:
    """Inside a property element with ``rdf:parseType="Collection"``."""

    iri: str
    base_iri: str | None
    language: str | None
    subject: Node
    objects: list[Node] = field(default_factory=list)
    id_attr: NamedNode | None = None


@dataclass
class LiteralPropertyEltState:
    """Inside a property element whose content is kept as raw XML.

    ``emit`` is false for unknown parse types, whose content is dropped.
    """

    iri: str
    base_iri: str | None
    language: str | None
    subject: Node
    chunks: list[str] = field(default_factory=list)
    id_attr: NamedNode | None = None
    emit: bool = True


State = Union[
    DocState,
    RdfState,
    NodeEltState,
    PropertyEltState,
    CollectionPropertyEltState,
    LiteralPropertyEltState,
]


def new_literal(
    value: str, language: str | None, datatype: NamedNode | None
) -> Literal:
    """Build a literal; a datatype takes precedence over a language."""
    if datatype is not None:
        return Literal(value, datatype=datatype)
    if language is not None:
        return Literal(value, language=language)
    return Literal(value)


def reify(triple: Triple, statement_id: Node) -> Iterator[Triple]:
    """Yield the four reification triples of ``triple`` named ``statement_id``."""
    yield Triple(statement_id, NamedNode(RDF_TYPE), NamedNode(RDF_STATEMENT))
    yield Triple(statement_id, NamedNode(RDF_SUBJECT), triple.subject)
    yield Triple(statement_id, NamedNode(RDF_PREDICATE), triple.predicate)
    yield Triple(statement_id, NamedNode(RDF_OBJECT), triple.object)


def property_attr_triples(
    subject: Node,
    attributes: Iterable[tuple[NamedNode, str]],
    language: str | None,
) -> Iterator[Triple]:
    """Yield a literal triple for each property attribute of an element."""
    for predicate, value in attributes:
        yield Triple(subject, predicate, Literal(value, language=language))