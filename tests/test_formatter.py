import io
import xml.etree.ElementTree as ET

import pytest

from rdfxmlio.errors import RdfXmlError
from rdfxmlio.formatter import RdfXmlFormatter, split_iri
from rdfxmlio.model import BlankNode, Literal, NamedNode, Triple

RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
XML_NS = "http://www.w3.org/XML/1998/namespace"
FOO = NamedNode("http://example.com/foo")
RDF_TYPE = NamedNode(RDF + "type")
PERSON = NamedNode("http://schema.org/Person")
NAME = NamedNode("http://schema.org/name")


def _write(triples, indentation=None):
    formatter = RdfXmlFormatter(io.BytesIO(), indentation)
    for triple in triples:
        formatter.format(triple)
    return formatter.finish().getvalue().decode("utf-8")


def test_split_iri():
    assert split_iri("http://schema.org/Person") == ("http://schema.org/", "Person")
    assert split_iri("http://schema.org/") == ("http://schema.org/", "")


def test_split_iri_with_colon_in_path():
    assert split_iri("http://example.org/properties:p") == ("http://example.org/properties:", "p")


def test_split_iri_rejoins():
    for iri in ("http://example.com/b%adar", "http://a/b#c", "urn:x:y", "http://example.com/1"):
        prefix, local = split_iri(iri)
        assert prefix + local == iri


def test_single_triple_exact_output():
    xml = _write([Triple(FOO, RDF_TYPE, PERSON)])
    assert xml == (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<rdf:RDF xmlns:rdf="{RDF}">'
        '<rdf:Description rdf:about="http://example.com/foo">'
        f'<type xmlns="{RDF}" rdf:resource="http://schema.org/Person"/>'
        "</rdf:Description></rdf:RDF>"
    )


def test_empty_document():
    xml = _write([])
    root = ET.fromstring(xml.encode("utf-8"))
    assert root.tag == f"{{{RDF}}}RDF"
    assert len(root) == 0


def test_same_subject_shares_description():
    xml = _write(
        [
            Triple(FOO, RDF_TYPE, PERSON),
            Triple(FOO, NAME, Literal("Foo")),
            Triple(NamedNode("http://example.com/bar"), NAME, Literal("Bar")),
        ]
    )
    root = ET.fromstring(xml.encode("utf-8"))
    descriptions = root.findall(f"{{{RDF}}}Description")
    assert len(descriptions) == 2
    assert len(descriptions[0]) == 2
    assert descriptions[1].get(f"{{{RDF}}}about") == "http://example.com/bar"


def test_blank_nodes_use_node_id():
    bnode = BlankNode("foobar")
    xml = _write([Triple(bnode, NAME, bnode)])
    root = ET.fromstring(xml.encode("utf-8"))
    description = root[0]
    assert description.get(f"{{{RDF}}}nodeID") == "foobar"
    assert description[0].tag == "{http://schema.org/}name"
    assert description[0].get(f"{{{RDF}}}nodeID") == "foobar"


def test_literals_are_escaped_and_tagged():
    datatype = NamedNode("http://example.com/d\U00013000t")
    xml = _write(
        [
            Triple(FOO, NAME, Literal('sim"le <&> \'x\'')),
            Triple(FOO, NAME, Literal('sim"le', language="en")),
            Triple(FOO, NAME, Literal('sim"le', datatype=datatype)),
        ]
    )
    description = ET.fromstring(xml.encode("utf-8"))[0]
    plain, tagged, typed = list(description)
    assert plain.text == 'sim"le <&> \'x\''
    assert tagged.get(f"{{{XML_NS}}}lang") == "en"
    assert tagged.text == 'sim"le'
    assert typed.get(f"{{{RDF}}}datatype") == datatype.iri


def test_empty_literal_has_open_and_close_tags():
    xml = _write([Triple(FOO, NAME, Literal(""))])
    assert '<name xmlns="http://schema.org/"></name>' in xml


def test_predicate_without_local_name_uses_prop_prefix():
    xml = _write([Triple(FOO, NamedNode("http://example.com/1"), FOO)])
    assert '<prop: xmlns:prop="http://example.com/1" rdf:resource="http://example.com/foo"/>' in xml


def test_indentation():
    xml = _write([Triple(FOO, NAME, Literal("Foo"))], indentation=2)
    assert xml.split("\n") == [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<rdf:RDF xmlns:rdf="{RDF}">',
        '  <rdf:Description rdf:about="http://example.com/foo">',
        '    <name xmlns="http://schema.org/">Foo</name>',
        "  </rdf:Description>",
        "</rdf:RDF>",
    ]


def test_text_stream_output():
    output = io.StringIO()
    formatter = RdfXmlFormatter(output)
    formatter.format(Triple(FOO, RDF_TYPE, PERSON))
    assert formatter.finish() is output
    assert output.getvalue() == _write([Triple(FOO, RDF_TYPE, PERSON)])


def test_context_manager_finishes():
    output = io.BytesIO()
    with RdfXmlFormatter(output) as formatter:
        formatter.format(Triple(FOO, RDF_TYPE, PERSON))
    assert output.getvalue().endswith(b"</rdf:Description></rdf:RDF>")


def test_format_after_finish_fails():
    formatter = RdfXmlFormatter(io.BytesIO())
    formatter.finish()
    with pytest.raises(RdfXmlError):
        formatter.format(Triple(FOO, RDF_TYPE, PERSON))


def test_formatting_rdf_star_subject_fails_cleanly():
    iri = NamedNode("tag:iri")
    triple = Triple(Triple(iri, iri, iri), iri, iri)
    formatter = RdfXmlFormatter(io.BytesIO())
    with pytest.raises(RdfXmlError, match="named or blank subject"):
        formatter.format(triple)


def test_formatting_rdf_star_object_fails_cleanly():
    iri = NamedNode("tag:iri")
    triple = Triple(iri, iri, Triple(iri, iri, iri))
    formatter = RdfXmlFormatter(io.BytesIO())
    with pytest.raises(RdfXmlError, match="named, blank or literal object"):
        formatter.format(triple)