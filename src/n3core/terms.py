"""The RDF term model: IRIs, blank nodes, and literals.

`Term` is a closed union of the three variants. Consumers that need to
branch on the variant can use `term_kind()`, or structural pattern
matching on the classes:

```python
match term:
    case IRI():
        ...
    case BlankNode(id=node_id):
        ...
    case Literal(lexical_form, datatype, language):
        ...
```
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union
from urllib.parse import urlsplit, urljoin

from urlobject import URLObject

from n3core.escapes import iri_body, lexical_form, escape_iri, escape_string
from n3core.exceptions import MalformedIRI
from n3core.namespaces import rdf, xsd

logger = logging.getLogger(__name__)

# IRIREF does not allow ASCII control characters or space, escaped or not
INVALID_IRI_CHARS = re.compile(r'[\x00-\x20\x7f]')
INVALID_PERCENT_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')


class TermKind(Enum):
    IRI = 'iri'
    BLANK_NODE = 'blank_node'
    LITERAL = 'literal'


@dataclass(frozen=True, eq=False)
class IRI:
    """An IRI reference, wrapping its parsed URI.

    Two IRIs are equal if their rendered `<...>` forms are equal; no
    normalization (case folding, percent-encoding) is applied."""
    kind: ClassVar[TermKind] = TermKind.IRI

    uri: URLObject

    @classmethod
    def parse(cls, value: str) -> 'IRI':
        """Parse an already decoded URI string. Raises `MalformedIRI` if
        the string contains control characters or spaces, a malformed
        percent escape, an unbalanced IPv6 host, or a non-numeric port."""
        match = INVALID_IRI_CHARS.search(value)
        if match:
            raise MalformedIRI(value, f'invalid character U+{ord(match.group()):04X} at {match.start()}')
        match = INVALID_PERCENT_ESCAPE.search(value)
        if match:
            raise MalformedIRI(value, f'invalid percent escape at {match.start()}')
        try:
            # port is only validated when accessed
            urlsplit(value).port
        except ValueError as e:
            raise MalformedIRI(value, str(e)) from e
        return cls(URLObject(value))

    @classmethod
    def from_string(cls, value: str, base: Optional[Union['IRI', str]] = None) -> 'IRI':
        """Build an IRI from its source form, with or without the surrounding
        angle brackets. Unicode escapes are decoded before parsing. If `base`
        is given, a relative reference is resolved against it, and `MalformedIRI`
        is raised if the result is still relative. `urljoin` leaves references
        against bases such as `urn:` unresolved."""
        body = iri_body(value)
        if base is not None:
            base_uri = base.uri if isinstance(base, IRI) else base
            body = urljoin(str(base_uri), body)
        try:
            iri = cls.parse(body)
        except MalformedIRI:
            logger.debug(f'Unable to parse IRI from {value!r}')
            raise
        if base is not None and not iri.is_absolute:
            logger.debug(f'Unable to resolve {value!r} against {base_uri}')
            raise MalformedIRI(body, f'cannot be resolved against base {base_uri}')
        return iri

    @property
    def scheme(self) -> str:
        return str(self.uri.scheme)

    @property
    def authority(self) -> str:
        return str(self.uri.netloc)

    @property
    def path(self) -> str:
        return str(self.uri.path)

    @property
    def query(self) -> str:
        return str(self.uri.query)

    @property
    def fragment(self) -> str:
        return str(self.uri.fragment)

    @property
    def is_absolute(self) -> bool:
        return self.scheme != ''

    @property
    def raw_value(self) -> str:
        return str(self.uri)

    def n3(self) -> str:
        """N-Triples form, with characters not allowed in an IRIREF escaped."""
        return f'<{escape_iri(str(self.uri))}>'

    def __str__(self):
        return f'<{self.uri}>'

    def __eq__(self, other):
        if not isinstance(other, IRI):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self):
        return hash(str(self))


RDF_LANG_STRING = IRI.parse(str(rdf.langString))
XSD_STRING = IRI.parse(str(xsd.string))


@dataclass(frozen=True)
class BlankNode:
    """A blank node. Identity is carried by `id` alone; `label` is the name
    it had in its source document (without the `_:` prefix), kept for
    `str()` only. `n3()` writes the id-derived `name` instead."""
    kind: ClassVar[TermKind] = TermKind.BLANK_NODE

    id: int
    label: str = field(default='', compare=False)

    @property
    def raw_value(self) -> str:
        return self.label

    @property
    def name(self) -> str:
        """Label written to N-Triples and rdflib. It is derived from `id`
        only, so that distinct nodes sharing a label stay distinct."""
        return f'b{self.id}'

    def n3(self) -> str:
        return f'_:{self.name}'

    def __str__(self):
        return f'_:{self.label}'


@dataclass(frozen=True)
class Literal:
    """An RDF literal. `lexical_form` is the fully decoded value. A
    language-tagged literal has the datatype `rdf:langString`; an untagged
    literal without an explicit datatype has `xsd:string`."""
    kind: ClassVar[TermKind] = TermKind.LITERAL

    lexical_form: str
    datatype: IRI = XSD_STRING
    language: str = ''

    @classmethod
    def typed(cls, lexical: str, datatype: IRI | str) -> 'Literal':
        if not isinstance(datatype, IRI):
            datatype = IRI.from_string(datatype)
        return cls(lexical, datatype)

    @classmethod
    def tagged(cls, lexical: str, language: str) -> 'Literal':
        return cls(lexical, RDF_LANG_STRING, language)

    @classmethod
    def from_token(cls, token: str, datatype: Optional[IRI | str] = None, language: str = '') -> 'Literal':
        """Build a literal from a raw quoted token, decoding its escapes. A
        language tag takes precedence over a datatype."""
        lexical = lexical_form(token)
        if language:
            return cls.tagged(lexical, language)
        elif datatype is not None:
            return cls.typed(lexical, datatype)
        else:
            return cls(lexical)

    @property
    def raw_value(self) -> str:
        return self.lexical_form

    def n3(self) -> str:
        """N-Triples form. Unlike `str()`, the lexical form is escaped, and
        the default `xsd:string` datatype is omitted."""
        quoted = f'"{escape_string(self.lexical_form)}"'
        if self.language:
            return f'{quoted}@{self.language}'
        elif self.datatype == XSD_STRING:
            return quoted
        else:
            return f'{quoted}^^{self.datatype.n3()}'

    def __str__(self):
        if self.language:
            return f'"{self.lexical_form}"@{self.language}'
        return f'"{self.lexical_form}"^^{self.datatype}'


Term = Union[IRI, BlankNode, Literal]
"""Any RDF term"""

TERM_CLASSES = (IRI, BlankNode, Literal)


def term_kind(term: Term) -> TermKind:
    """Return the kind of `term`. Raises `TypeError` if `term` is not one
    of the three term classes."""
    if isinstance(term, TERM_CLASSES):
        return term.kind
    raise TypeError(f'{term!r} is not an RDF term')
