class QueryError(ValueError):
    """Base class for query codec failures."""


class UnsupportedEncoding(QueryError):
    pass


class MalformedQuery(QueryError):
    pass


class InvalidQueryPair(QueryError):
    pass
