"""Streaming RDF/XML writer."""

from __future__ import annotations

import io
from typing import IO, Any

from rdfxmlio.errors import RdfXmlError
from rdfxmlio.model import BlankNode, Literal, NamedNode, Triple, as_subject
from rdfxmlio.names import is_name_char, is_name_start_char

RDF_NAMESPACE = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"

_XML_ESCAPES = str.maketrans(
    {"<": "&lt;", ">": "&gt;", "&": "&amp;", "'": "&apos;", '"': "&quot;"}
)


def _escape(text: str) -> str:
    return text.translate(_XML_ESCAPES)


def _tag_content(name: str, attributes: list[tuple[str, str]]) -> str:
    return name + "".join(f' {key}="{_escape(value)}"' for key, value in attributes)


def split_iri(iri: str) -> tuple[str, str]:
    """Split ``iri`` into a namespace and a local name usable as an XML name."""
    base = next(
        (
            position
            for position in range(len(iri) - 1, -1, -1)
            if not is_name_char(iri[position]) or iri[position] == ":"
        ),
        None,
    )
    if base is None:
        return iri, ""
    for position in range(base, len(iri)):
        c = iri[position]
        if is_name_start_char(c) and c != ":":
            return iri[:position], iri[position:]
    return iri, ""


class RdfXmlFormatter:
    """Writes triples as RDF/XML to a binary or text stream.

    Consecutive triples sharing a subject are grouped in one
    ``rdf:Description`` element.
    """

    def __init__(self, output: IO[Any], indentation: int | None = None) -> None:
        self._output = output
        self._binary = not isinstance(output, io.TextIOBase)
        self._indentation = indentation
        self._depth = 0
        self._line_break = False
        self._current_subject: NamedNode | BlankNode | None = None
        self._finished = False
        self._emit('<?xml version="1.0" encoding="UTF-8"?>')
        self._line_break = True
        self._start("rdf:RDF", [("xmlns:rdf", RDF_NAMESPACE)])

    def _emit(self, text: str) -> None:
        self._output.write(text.encode("utf-8") if self._binary else text)

    def _new_line(self) -> None:
        if self._indentation is not None and self._line_break:
            self._emit("\n" + " " * (self._depth * self._indentation))

    def _start(self, name: str, attributes: list[tuple[str, str]]) -> None:
        self._new_line()
        self._emit(f"<{_tag_content(name, attributes)}>")
        self._depth += 1
        self._line_break = True

    def _empty(self, name: str, attributes: list[tuple[str, str]]) -> None:
        self._new_line()
        self._emit(f"<{_tag_content(name, attributes)}/>")
        self._line_break = True

    def _end(self, name: str) -> None:
        self._depth -= 1
        self._new_line()
        self._emit(f"</{name}>")
        self._line_break = True

    def _text(self, text: str) -> None:
        self._emit(_escape(text))
        self._line_break = False

    def format(self, triple: Triple) -> None:
        """Write one triple."""
        if self._finished:
            raise RdfXmlError("the formatter has already been finished")
        subject = as_subject(triple.subject)
        obj = triple.object
        if not isinstance(obj, (NamedNode, BlankNode, Literal)):
            raise RdfXmlError("RDF/XML only supports named, blank or literal object")

        if subject != self._current_subject:
            if self._current_subject is not None:
                self._end("rdf:Description")
            if isinstance(subject, NamedNode):
                attribute = ("rdf:about", subject.iri)
            else:
                attribute = ("rdf:nodeID", subject.id)
            self._start("rdf:Description", [attribute])

        prefix, local_name = split_iri(triple.predicate.iri)
        if local_name:
            qname, attributes = local_name, [("xmlns", prefix)]
        else:
            qname, attributes = "prop:", [("xmlns:prop", prefix)]

        if isinstance(obj, NamedNode):
            attributes.append(("rdf:resource", obj.iri))
            self._empty(qname, attributes)
        elif isinstance(obj, BlankNode):
            attributes.append(("rdf:nodeID", obj.id))
            self._empty(qname, attributes)
        else:
            if obj.language is not None:
                attributes.append(("xml:lang", obj.language))
            elif obj.datatype is not None:
                attributes.append(("rdf:datatype", obj.datatype.iri))
            self._start(qname, attributes)
            self._text(obj.value)
            self._end(qname)
        self._current_subject = subject

    def finish(self) -> IO[Any]:
        """Close the open elements, flush and return the output stream."""
        if self._finished:
            raise RdfXmlError("the formatter has already been finished")
        if self._current_subject is not None:
            self._end("rdf:Description")
        self._end("rdf:RDF")
        self._finished = True
        flush = getattr(self._output, "flush", None)
        if flush is not None:
            flush()
        return self._output

    def __enter__(self) -> RdfXmlFormatter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None and not self._finished:
            self.finish()