"""Streaming RDF/XML parser."""

from __future__ import annotations

import io
from collections import ChainMap, deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Any, Union
from xml.parsers import expat

from rdfxmlio.entities import BlankNodeIdGenerator
from rdfxmlio.errors import InvalidLanguageTagError, RdfXmlError, XmlSyntaxError
from rdfxmlio.iri import parse_iri, parse_language_tag, resolve
from rdfxmlio.model import BlankNode, Literal, NamedNode, Triple
from rdfxmlio.names import is_nc_name
from rdfxmlio.states import (
    RDF_ABOUT,
    RDF_BAG_ID,
    RDF_DATATYPE,
    RDF_DESCRIPTION,
    RDF_FIRST,
    RDF_ID,
    RDF_LI,
    RDF_NIL,
    RDF_NODE_ID,
    RDF_NS,
    RDF_PARSE_TYPE,
    RDF_RDF,
    RDF_RESOURCE,
    RDF_REST,
    RDF_TYPE,
    RDF_XML_LITERAL,
    RESERVED_RDF_ATTRIBUTES,
    RESERVED_RDF_ELEMENTS,
    CollectionPropertyEltState,
    DocState,
    LiteralPropertyEltState,
    Node,
    NodeEltState,
    PropertyEltState,
    RdfState,
    State,
    new_literal,
    property_attr_triples,
    reify,
)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
_WHITESPACE = " \t\n\r"
_CHUNK_SIZE = 1 << 16

Source = Union[bytes, bytearray, str, IO[Any]]


class _ParseType(Enum):
    DEFAULT = "default"
    COLLECTION = "Collection"
    LITERAL = "Literal"
    RESOURCE = "Resource"
    OTHER = "other"


_PARSE_TYPES = {
    "Collection": _ParseType.COLLECTION,
    "Literal": _ParseType.LITERAL,
    "Resource": _ParseType.RESOURCE,
}

_TEXT_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;"})
_ATTRIBUTE_ESCAPES = str.maketrans(
    {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;"}
)


@dataclass
class _Attributes:
    base_iri: str | None
    language: str | None
    id: NamedNode | None = None
    node_id: BlankNode | None = None
    about: NamedNode | None = None
    resource: NamedNode | None = None
    datatype: NamedNode | None = None
    type: NamedNode | None = None
    parse_type: _ParseType = _ParseType.DEFAULT
    properties: list[tuple[NamedNode, str]] = field(default_factory=list)


class RdfXmlParser:
    """Reads RDF/XML from bytes, text or a stream and yields its triples.

    The document is read in chunks; only the stack of open elements and the
    set of ``rdf:ID`` values already seen are kept in memory.
    """

    def __init__(self, source: Source, base_iri: str | None = None) -> None:
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._stream: IO[Any] = io.BytesIO(bytes(source))
        elif isinstance(source, str):
            self._stream = io.StringIO(source)
        else:
            self._stream = source
        self._states: list[State] = [
            DocState(None if base_iri is None else parse_iri(base_iri))
        ]
        self._namespaces: ChainMap[str, str] = ChainMap({"xml": XML_NAMESPACE})
        self._bnode_ids = BlankNodeIdGenerator()
        self._known_ids: set[str] = set()
        self._literal_depth = 0
        self._events: deque[tuple] = deque()
        self._text_parts: list[str] = []
        self._in_cdata = False
        self._consumed = False

    def __iter__(self) -> Iterator[Triple]:
        if self._consumed:
            raise RdfXmlError("the document has already been parsed")
        self._consumed = True
        xml_parser = None
        while True:
            chunk = self._stream.read(_CHUNK_SIZE)
            if xml_parser is None:
                xml_parser = self._create_xml_parser(text=isinstance(chunk, str))
            final = not chunk
            data = chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk)
            failure = None
            try:
                xml_parser.Parse(data, final)
            except expat.ExpatError as error:
                failure = error
            yield from self._drain()
            if failure is not None:
                raise XmlSyntaxError(str(failure)) from failure
            if final:
                return

    # XML event collection

    def _create_xml_parser(self, *, text: bool):
        xml_parser = expat.ParserCreate("UTF-8" if text else None)
        xml_parser.ordered_attributes = True
        xml_parser.StartElementHandler = self._on_start
        xml_parser.EndElementHandler = self._on_end
        xml_parser.CharacterDataHandler = self._on_text
        xml_parser.CommentHandler = lambda data: self._flush_text()
        xml_parser.ProcessingInstructionHandler = lambda target, data: self._flush_text()
        xml_parser.StartCdataSectionHandler = self._on_cdata_start
        xml_parser.EndCdataSectionHandler = self._on_cdata_end
        return xml_parser

    def _flush_text(self) -> None:
        if self._text_parts:
            self._events.append(("text", "".join(self._text_parts)))
            self._text_parts.clear()

    def _on_start(self, name: str, attributes: list[str]) -> None:
        self._flush_text()
        self._events.append(("start", name, attributes))

    def _on_end(self, name: str) -> None:
        self._flush_text()
        self._events.append(("end", name))

    def _on_text(self, data: str) -> None:
        if not self._in_cdata:
            self._text_parts.append(data)

    def _on_cdata_start(self) -> None:
        self._flush_text()
        self._in_cdata = True

    def _on_cdata_end(self) -> None:
        self._in_cdata = False

    def _drain(self) -> Iterator[Triple]:
        while self._events:
            match self._events.popleft():
                case ("start", name, attributes):
                    yield from self._start(name, attributes)
                case ("end", name):
                    yield from self._end(name)
                case ("text", text):
                    self._text(text)

    # Namespaces and attributes

    def _expand(self, qname: str, *, attribute: bool) -> str:
        prefix, colon, local = qname.partition(":")
        if not colon:
            if attribute:
                return qname
            return self._namespaces.get("", "") + qname
        namespace = self._namespaces.get(prefix)
        if namespace is None:
            return qname
        return namespace + local

    def _read_attributes(
        self, pairs: list[tuple[str, str]], parent: State
    ) -> _Attributes:
        language = parent.language
        base_iri = parent.base_iri
        rdf_id = None
        node_id = None
        parse_type = _ParseType.DEFAULT
        iri_values: dict[str, str] = {}
        properties: list[tuple[NamedNode, str]] = []

        for key, value in pairs:
            if key == "xml:lang":
                try:
                    language = parse_language_tag(value.lower())
                except InvalidLanguageTagError as error:
                    raise InvalidLanguageTagError(value, error.reason) from None
            elif key == "xml:base":
                base_iri = parse_iri(value)
            elif key.startswith("xml"):
                continue
            else:
                url = self._expand(key, attribute=True)
                if url == RDF_ID:
                    if not is_nc_name(value):
                        raise RdfXmlError(f"{value} is not a valid rdf:ID value")
                    rdf_id = "#" + value
                elif url == RDF_BAG_ID:
                    if not is_nc_name(value):
                        raise RdfXmlError(f"{value} is not a valid rdf:bagID value")
                elif url == RDF_NODE_ID:
                    if not is_nc_name(value):
                        raise RdfXmlError(f"{value} is not a valid rdf:nodeID value")
                    node_id = BlankNode(value)
                elif url in (RDF_ABOUT, RDF_RESOURCE, RDF_DATATYPE, RDF_TYPE):
                    iri_values[url] = value
                elif url == RDF_PARSE_TYPE:
                    parse_type = _PARSE_TYPES.get(value, _ParseType.OTHER)
                elif url in RESERVED_RDF_ATTRIBUTES:
                    raise RdfXmlError(f"{url} is not a valid attribute")
                else:
                    properties.append((NamedNode(url), value))

        id_node = None
        if rdf_id is not None:
            iri = resolve(base_iri, rdf_id)
            if iri in self._known_ids:
                raise RdfXmlError(f"{iri} has already been used as rdf:ID value")
            self._known_ids.add(iri)
            id_node = NamedNode(iri)

        def iri_of(url: str) -> NamedNode | None:
            value = iri_values.get(url)
            return None if value is None else NamedNode(resolve(base_iri, value))

        return _Attributes(
            base_iri=base_iri,
            language=language,
            id=id_node,
            node_id=node_id,
            about=iri_of(RDF_ABOUT),
            resource=iri_of(RDF_RESOURCE),
            datatype=iri_of(RDF_DATATYPE),
            type=iri_of(RDF_TYPE),
            parse_type=parse_type,
            properties=properties,
        )

    # Element handling

    def _start(self, name: str, attributes: list[str]) -> Iterator[Triple]:
        pairs = list(zip(attributes[::2], attributes[1::2]))
        declared = {}
        for key, value in pairs:
            if key == "xmlns":
                declared[""] = value
            elif key.startswith("xmlns:"):
                declared[key[len("xmlns:") :]] = value
        self._namespaces = self._namespaces.new_child(declared)

        if not self._states:
            raise RdfXmlError("No state in the stack: the XML is not balanced")
        parent = self._states[-1]

        if isinstance(parent, LiteralPropertyEltState):
            rendered = "".join(
                f' {key}="{value.translate(_ATTRIBUTE_ESCAPES)}"' for key, value in pairs
            )
            parent.chunks.append(f"<{name}{rendered}>")
            self._literal_depth += 1
            return

        iri = self._expand(name, attribute=False)
        attrs = self._read_attributes(pairs, parent)

        if isinstance(parent, DocState):
            if iri == RDF_RDF:
                state: State = RdfState(attrs.base_iri, attrs.language)
            elif iri in RESERVED_RDF_ELEMENTS:
                raise RdfXmlError(f"Invalid node element tag name: {iri}")
            else:
                state = yield from self._node_elt(iri, attrs)
        elif isinstance(parent, NodeEltState):
            state = yield from self._property_elt(iri, attrs, parent)
        else:
            if iri in RESERVED_RDF_ELEMENTS:
                raise RdfXmlError(f"Invalid property element tag name: {iri}")
            state = yield from self._node_elt(iri, attrs)
        self._states.append(state)

    def _node_elt(self, iri: str, attrs: _Attributes) -> Iterator[Triple]:
        generated = self._bnode_ids.generate()
        if attrs.id is not None and attrs.node_id is not None:
            raise RdfXmlError("Not both rdf:ID and rdf:nodeID could be set at the same time")
        if attrs.node_id is not None and attrs.about is not None:
            raise RdfXmlError(
                "Not both rdf:nodeID and rdf:resource could be set at the same time"
            )
        if attrs.id is not None and attrs.about is not None:
            raise RdfXmlError("Not both rdf:ID and rdf:resource could be set at the same time")

        subject: Node
        if attrs.id is not None:
            subject = attrs.id
        elif attrs.node_id is not None:
            subject = attrs.node_id
        elif attrs.about is not None:
            subject = attrs.about
        else:
            subject = BlankNode(generated)

        yield from property_attr_triples(subject, attrs.properties, attrs.language)
        if attrs.type is not None:
            yield Triple(subject, NamedNode(RDF_TYPE), attrs.type)
        if iri != RDF_DESCRIPTION:
            yield Triple(subject, NamedNode(RDF_TYPE), NamedNode(iri))
        return NodeEltState(attrs.base_iri, attrs.language, subject)

    def _property_elt(
        self, iri: str, attrs: _Attributes, parent: NodeEltState
    ) -> Iterator[Triple]:
        if iri == RDF_LI:
            parent.li_counter += 1
            iri = f"{RDF_NS}_{parent.li_counter}"
        elif iri in RESERVED_RDF_ELEMENTS or iri == RDF_DESCRIPTION:
            raise RdfXmlError(f"Invalid property element tag name: {iri}")

        common = {
            "iri": iri,
            "base_iri": attrs.base_iri,
            "language": attrs.language,
            "subject": parent.subject,
        }
        parse_type = attrs.parse_type
        if parse_type is _ParseType.LITERAL:
            return LiteralPropertyEltState(**common, id_attr=attrs.id)
        if parse_type is _ParseType.OTHER:
            return LiteralPropertyEltState(**common, id_attr=attrs.id, emit=False)
        if parse_type is _ParseType.COLLECTION:
            return CollectionPropertyEltState(**common, id_attr=attrs.id)
        if parse_type is _ParseType.RESOURCE:
            obj = BlankNode(self._bnode_ids.generate())
            triple = Triple(parent.subject, NamedNode(iri), obj)
            if attrs.id is not None:
                yield from reify(triple, attrs.id)
            yield triple
            return NodeEltState(attrs.base_iri, attrs.language, obj)

        if attrs.resource is None and attrs.node_id is None and not attrs.properties:
            return PropertyEltState(
                **common, id_attr=attrs.id, datatype_attr=attrs.datatype
            )
        if attrs.resource is not None and attrs.node_id is not None:
            raise RdfXmlError(
                "Not both rdf:resource and rdf:nodeID could be set at the same time"
            )
        node: Node
        if attrs.resource is not None:
            node = attrs.resource
        elif attrs.node_id is not None:
            node = attrs.node_id
        else:
            node = BlankNode(self._bnode_ids.generate())
        yield from property_attr_triples(node, attrs.properties, attrs.language)
        if attrs.type is not None:
            yield Triple(node, NamedNode(RDF_TYPE), attrs.type)
        return PropertyEltState(
            **common, object=node, id_attr=attrs.id, datatype_attr=attrs.datatype
        )

    def _end(self, name: str) -> Iterator[Triple]:
        top = self._states[-1] if self._states else None
        if self._literal_depth > 0 and isinstance(top, LiteralPropertyEltState):
            top.chunks.append(f"</{name}>")
            self._literal_depth -= 1
        elif self._states:
            yield from self._end_state(self._states.pop())
        self._namespaces = self._namespaces.parents

    def _end_state(self, state: State) -> Iterator[Triple]:
        if isinstance(state, PropertyEltState):
            obj = state.object
            if obj is None:
                obj = new_literal("", state.language, state.datatype_attr)
            elif isinstance(obj, str):
                obj = new_literal(obj, state.language, state.datatype_attr)
            triple = Triple(state.subject, NamedNode(state.iri), obj)
            if state.id_attr is not None:
                yield from reify(triple, state.id_attr)
            yield triple
        elif isinstance(state, CollectionPropertyEltState):
            current: Node = NamedNode(RDF_NIL)
            for item in reversed(state.objects):
                cell = BlankNode(self._bnode_ids.generate())
                yield Triple(cell, NamedNode(RDF_FIRST), item)
                yield Triple(cell, NamedNode(RDF_REST), current)
                current = cell
            triple = Triple(state.subject, NamedNode(state.iri), current)
            if state.id_attr is not None:
                yield from reify(triple, state.id_attr)
            yield triple
        elif isinstance(state, LiteralPropertyEltState):
            if state.emit:
                value = "".join(state.chunks)
                if not value:
                    raise RdfXmlError(
                        f"No value found for rdf:XMLLiteral value of property {state.iri}"
                    )
                triple = Triple(
                    state.subject,
                    NamedNode(state.iri),
                    Literal(value, datatype=NamedNode(RDF_XML_LITERAL)),
                )
                if state.id_attr is not None:
                    yield from reify(triple, state.id_attr)
                yield triple
        elif isinstance(state, NodeEltState) and self._states:
            parent = self._states[-1]
            if isinstance(parent, PropertyEltState):
                parent.object = state.subject
            elif isinstance(parent, CollectionPropertyEltState):
                parent.objects.append(state.subject)

    def _text(self, text: str) -> None:
        top = self._states[-1] if self._states else None
        if isinstance(top, PropertyEltState):
            if text.strip(_WHITESPACE):
                top.object = text
        elif isinstance(top, LiteralPropertyEltState):
            top.chunks.append(text.translate(_TEXT_ESCAPES))
        elif text.strip(_WHITESPACE):
            raise RdfXmlError(f"Unexpected text event: {text}")


def parse(source: Source, base_iri: str | None = None) -> Iterator[Triple]:
    """Iterate over the triples of an RDF/XML document."""
    return iter(RdfXmlParser(source, base_iri))