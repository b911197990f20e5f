"""Conversion between the core term model and `rdflib`."""

import logging
from typing import Optional

import rdflib
from rdflib.term import Node

from n3core.graph import Graph, Triple
from n3core.namespaces import get_manager
from n3core.terms import IRI, BlankNode, Literal, Term, TermKind, RDF_LANG_STRING, term_kind

logger = logging.getLogger(__name__)


class BlankNodeScope:
    """Assigns sequential integer ids to blank node labels within a single
    document. The same label always gets the same id."""
    def __init__(self, start: int = 0):
        self.next_id = start
        self.ids: dict[str, int] = {}

    def get(self, label: str) -> BlankNode:
        if label not in self.ids:
            self.ids[label] = self.next_id
            self.next_id += 1
        return BlankNode(self.ids[label], label)

    def __len__(self):
        return len(self.ids)


def to_rdflib_term(term: Term) -> rdflib.term.Identifier:
    kind = term_kind(term)
    if kind is TermKind.IRI:
        return rdflib.URIRef(term.raw_value)
    elif kind is TermKind.BLANK_NODE:
        return rdflib.BNode(term.name)
    elif kind is TermKind.LITERAL:
        if term.language:
            return rdflib.Literal(term.lexical_form, lang=term.language)
        # keep the lexical form exactly as given; rdflib would otherwise
        # replace it with the canonical form of its datatype
        return rdflib.Literal(term.lexical_form, datatype=rdflib.URIRef(term.datatype.raw_value), normalize=False)
    raise AssertionError(f'Unhandled term kind {kind}')


def from_rdflib_term(node: Node, blank_nodes: Optional[BlankNodeScope] = None) -> Term:
    """Convert an rdflib node to a term. Blank nodes get their ids from
    `blank_nodes`; if it is not given, a new scope is used, so ids are only
    consistent within a single call."""
    if isinstance(node, rdflib.URIRef):
        return IRI.parse(str(node))
    elif isinstance(node, rdflib.BNode):
        if blank_nodes is None:
            blank_nodes = BlankNodeScope()
        return blank_nodes.get(str(node))
    elif isinstance(node, rdflib.Literal):
        if node.language:
            return Literal(str(node), RDF_LANG_STRING, node.language)
        elif node.datatype is not None:
            return Literal.typed(str(node), IRI.parse(str(node.datatype)))
        else:
            return Literal(str(node))
    raise TypeError(f'Cannot convert {type(node).__name__} {node!r} to an RDF term')


def to_rdflib_graph(graph: Graph) -> rdflib.Graph:
    """Copy the triples of `graph` into a new `rdflib.Graph`, with the
    prefixes from `n3core.namespaces` bound. Duplicate triples collapse,
    since an `rdflib.Graph` is a set."""
    rdflib_graph = rdflib.Graph()
    rdflib_graph.namespace_manager = get_manager(rdflib_graph)
    for triple in graph:
        rdflib_graph.add(tuple(to_rdflib_term(term) for term in triple))
    logger.debug(f'Converted {len(graph)} triples to an rdflib graph with {len(rdflib_graph)} triples')
    return rdflib_graph


def from_rdflib_graph(rdflib_graph: rdflib.Graph, blank_nodes: Optional[BlankNodeScope] = None) -> Graph:
    """Copy the triples of `rdflib_graph` into a new `Graph`. Since an
    `rdflib.Graph` is unordered, the triples are sorted by their N-Triples
    form, and blank node ids are assigned in that order."""
    if blank_nodes is None:
        blank_nodes = BlankNodeScope()
    graph = Graph()
    for s, p, o in sorted(rdflib_graph, key=lambda t: tuple(node.n3() for node in t)):
        graph.add(Triple(
            from_rdflib_term(s, blank_nodes),
            from_rdflib_term(p, blank_nodes),
            from_rdflib_term(o, blank_nodes),
        ))
    logger.debug(f'Converted {len(graph)} triples from an rdflib graph ({len(blank_nodes)} blank nodes)')
    return graph
