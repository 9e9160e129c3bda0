# rdfxmlio

A streaming parser and a formatter for RDF/XML. It is written in pure Python
and needs nothing beyond the standard library.

## Installation

```
pip install rdfxmlio
```

## Parsing

`rdfxmlio.parser.parse(source, base_iri)` reads an RDF/XML document and yields
`Triple` objects one at a time as the document is read. `source` may be
`bytes`, a `str`, or a binary or text file-like object. The stream is read in
chunks of 64 KiB. Relative IRIs are resolved against `base_iri`, which may be
`None`. In that case every IRI in the document must be absolute.

```python
from rdfxmlio.parser import parse
from rdfxmlio.model import NamedNode

document = b"""<?xml version="1.0"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns:schema="http://schema.org/">
  <rdf:Description rdf:about="http://example.com/foo">
    <rdf:type rdf:resource="http://schema.org/Person"/>
    <schema:name>Foo</schema:name>
  </rdf:Description>
  <schema:Person rdf:about="http://example.com/bar" schema:name="Bar"/>
</rdf:RDF>"""

rdf_type = NamedNode("http://www.w3.org/1999/02/22-rdf-syntax-ns#type")
person = NamedNode("http://schema.org/Person")

people = sum(
    1
    for triple in parse(document, None)
    if triple.predicate == rdf_type and triple.object == person
)
assert people == 2
```

`parse` is a thin wrapper around `RdfXmlParser(source, base_iri)`, which is an
iterable of triples. It can be iterated only once. A second iteration raises
`RdfXmlError`.

The parser supports:

- `rdf:about`, `rdf:ID`, `rdf:nodeID` and `rdf:resource`
- typed node elements, `rdf:type` attributes and property attributes
- `rdf:li` container membership, numbered `rdf:_1`, `rdf:_2` and so on
- `rdf:parseType="Resource"`, `"Collection"` and `"Literal"`
- other `rdf:parseType` values, whose content is skipped
- reification through `rdf:ID` on property elements
- `xml:lang`, which is lower-cased and checked as a BCP 47 tag, and `xml:base`
- internal entities declared in the document type

Blank nodes without an `rdf:nodeID` get generated ids such as `riog00000001`.
An `rdf:ID` that resolves to an IRI already used in the document is an error.

### Errors

Documents that break the RDF/XML grammar raise `rdfxmlio.errors.RdfXmlError`,
which is a `ValueError`. Its subclasses report the specific cause:

- `XmlSyntaxError`: the XML itself is malformed.
- `InvalidIriError`: an IRI could not be parsed or resolved. It has `iri` and
  `reason` attributes.
- `InvalidLanguageTagError`: an `xml:lang` value is not well formed. It has
  `tag` and `reason` attributes.

Triples that come before the error in the document have already been yielded
when the error is raised.

## Formatting

`RdfXmlFormatter(output, indentation)` writes triples to a text or binary
stream. Binary streams receive UTF-8. The XML declaration and the opening
`rdf:RDF` element are written right away. Consecutive triples that share a
subject are grouped in one `rdf:Description` element. Each predicate is
written as an element whose default namespace is the start of the IRI.

Call `finish()` to close the document. It flushes the stream and returns it.
You can also use the formatter as a context manager, which calls `finish()`
when the block ends without an exception.

```python
import io

from rdfxmlio.formatter import RdfXmlFormatter
from rdfxmlio.model import NamedNode, Triple

output = io.StringIO()
with RdfXmlFormatter(output, None) as formatter:
    formatter.format(Triple(
        NamedNode("http://example.com/foo"),
        NamedNode("http://www.w3.org/1999/02/22-rdf-syntax-ns#type"),
        NamedNode("http://schema.org/Person"),
    ))
print(output.getvalue())
```

Pass a number of spaces as `indentation` to indent the output. With `None`,
everything is written on one line after the declaration.

RDF/XML can only express named or blank subjects, and named, blank or literal
objects. Any other term, such as a quoted `Triple`, makes `format` raise
`RdfXmlError`. Calling `format` or `finish` after `finish` also raises it.

`rdfxmlio.formatter.split_iri(iri)` returns the namespace and local-name split
that the formatter uses for predicates.

## Model

`rdfxmlio.model` holds the immutable term types:

- `NamedNode(iri)`
- `BlankNode(id)`
- `Literal(value, language=None, datatype=None)`. A literal cannot have both a
  language and a datatype.
- `Triple(subject, predicate, object)`

`str()` on any of them gives its N-Triples form. `as_subject(term)` returns a
named or blank node unchanged and raises `RdfXmlError` for anything else.

## Helpers

- `rdfxmlio.names`: `is_name_start_char`, `is_name_char`, `is_name` and
  `is_nc_name` test strings against the XML name productions.
- `rdfxmlio.iri`: `parse_iri` checks an absolute IRI, `resolve_iri` resolves a
  reference against a base, `resolve` does either depending on whether a base
  is given, and `parse_language_tag` checks a BCP 47 tag.
- `rdfxmlio.entities`: `BlankNodeIdGenerator` and `parse_entity_declarations`,
  which reads `<!ENTITY name "value">` declarations from a DOCTYPE body.
- `rdfxmlio.states`: the parser's element-stack states and the RDF vocabulary
  constants. It also provides `new_literal`, `reify` and
  `property_attr_triples`.

## What it does not do

This is a library only. It has no command-line tool. It reads and writes
RDF/XML alone, and it does not store triples: parsed triples are handed to you
one by one.