"""Common test fixtures for the n3core tests"""

import pytest

from n3core.graph import Graph, Triple
from n3core.terms import IRI, BlankNode, Literal


@pytest.fixture
def subject() -> IRI:
    return IRI.from_string('<http://a/s>')


@pytest.fixture
def predicate() -> IRI:
    return IRI.from_string('<http://a/p>')


@pytest.fixture
def blank_node() -> BlankNode:
    return BlankNode(0, 'b0')


@pytest.fixture
def graph(subject, predicate, blank_node) -> Graph:
    return Graph([
        Triple(subject, predicate, Literal.tagged('x', 'en')),
        Triple(subject, predicate, blank_node),
        Triple(blank_node, predicate, Literal('line1\nline2')),
    ])
