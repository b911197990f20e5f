from dataclasses import dataclass
from typing import Iterable, Iterator

from n3core.exceptions import TypeViolation
from n3core.terms import IRI, BlankNode, Literal, Term


@dataclass(frozen=True)
class Triple:
    """An RDF statement. The subject must be an IRI or blank node, the
    predicate must be an IRI, and the object may be any term."""
    subject: IRI | BlankNode
    predicate: IRI
    object: Term

    def __post_init__(self):
        if not isinstance(self.subject, (IRI, BlankNode)):
            raise TypeViolation('subject', self.subject)
        if not isinstance(self.predicate, IRI):
            raise TypeViolation('predicate', self.predicate)
        if not isinstance(self.object, (IRI, BlankNode, Literal)):
            raise TypeViolation('object', self.object)

    def n3(self) -> str:
        """A single N-Triples statement, without a line terminator."""
        return f'{self.subject.n3()} {self.predicate.n3()} {self.object.n3()} .'

    def __iter__(self) -> Iterator[Term]:
        return iter((self.subject, self.predicate, self.object))

    def __str__(self):
        return f'{self.subject} {self.predicate} {self.object} .'


class Graph:
    """An ordered sequence of triples.

    Insertion order is preserved, and duplicate triples are kept; use
    `deduplicated()` to get set semantics. No locking is done, so callers
    that add triples from several threads must serialize those calls."""
    def __init__(self, triples: Iterable[Triple] = ()):
        self._triples: list[Triple] = []
        self.extend(triples)

    def add(self, triple: Triple):
        """Append a single triple to the end of this graph."""
        if not isinstance(triple, Triple):
            raise TypeError(f'Cannot add {triple!r} to a graph; it is not a Triple')
        self._triples.append(triple)

    append = add

    def extend(self, triples: Iterable[Triple]):
        """Append each triple in the `triples` iterable to this graph."""
        for triple in triples:
            self.add(triple)

    def deduplicated(self) -> 'Graph':
        """A new graph with only the first occurrence of each triple."""
        return Graph(dict.fromkeys(self._triples))

    def serialize(self) -> str:
        """Render this graph as an N-Triples document; each statement is
        terminated by a newline."""
        return ''.join(f'{triple.n3()}\n' for triple in self._triples)

    def __iter__(self) -> Iterator[Triple]:
        return iter(self._triples)

    def __len__(self):
        return len(self._triples)

    def __getitem__(self, index: int) -> Triple:
        return self._triples[index]

    def __contains__(self, triple) -> bool:
        return triple in self._triples

    def __eq__(self, other):
        if not isinstance(other, Graph):
            return NotImplemented
        return self._triples == other._triples

    def __repr__(self):
        return f'<{self.__class__.__name__} with {len(self)} triples>'

    def __str__(self):
        return '\n'.join(str(triple) for triple in self._triples)
