class N3CoreError(Exception):
    def __init__(self, message):
        self.message = message

    def __str__(self):
        return self.message


class MalformedEscape(N3CoreError, ValueError):
    """A `\\u` or `\\U` escape that is truncated, contains non-hex digits, or
    does not denote a Unicode scalar value. `start` and `end` give the
    character range of the escape within `value`."""
    def __init__(self, value: str, start: int, end: int, message: str):
        super().__init__(f'{message} at {start}:{end} in {value!r}')
        self.value = value
        self.start = start
        self.end = end


class MalformedIRI(N3CoreError, ValueError):
    def __init__(self, value: str, reason: str):
        super().__init__(f'Malformed IRI {value!r}: {reason}')
        self.value = value
        self.reason = reason


class TypeViolation(N3CoreError, TypeError):
    """A term of the wrong kind in a triple position."""
    def __init__(self, position: str, term):
        super().__init__(f'{type(term).__name__} {term} is not allowed in the {position} position')
        self.position = position
        self.term = term


class MalformedLiteral(N3CoreError, ValueError):
    def __init__(self, token: str, reason: str):
        super().__init__(f'Malformed literal token {token!r}: {reason}')
        self.token = token
        self.reason = reason
