"""
Unsigned AWS requests.
"""

from .body import Body, EmptyBody
from .decode import ResponseDecoder
from .encoding import (
    encode_query_pairs, percent_encode, render_query_string)

def _check_pairs(name, pairs):
    result = []
    for i, pair in enumerate(pairs):
        try:
            key, value = pair
        except (TypeError, ValueError):
            raise TypeError("%s entry %d must be a (key, value) pair: %r" %
                            (name, i, pair))

        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError("%s entry %d must be a pair of strings: %r" %
                            (name, i, pair))
        result.append((key, value))
    return tuple(result)

class Request:
    # pylint: disable=R0902
    """
    Request(
        name: str,
        method: str,
        path: str,
        body: Body=EmptyBody(),
        decoder: ResponseDecoder=None,
        error_decoder: Optional[Callable[[Response], Any]]=None,
        headers: Iterable[Tuple[str, str]]=(),
        query: Iterable[Tuple[str, str]]=())

    An unsigned request to an AWS API.

    name: The operation name ("DescribeTable"). Used for the x-amz-target
        header of JSON-protocol APIs and the Action parameter of query
        APIs.
    method: The HTTP method.
    path: The request path. It must already be percent-safe.
    body: The request body.
    decoder: Converts a response into the expected result.
    error_decoder: Converts a non-2xx response into the caller's error
        value, or returns None if it does not recognize the payload.
    headers: Extra headers. Duplicates are allowed.
    query: Unencoded query parameters. Duplicates are allowed. They are
        percent-encoded once, here; query_pairs holds the encoded form.

    Requests are immutable. add_headers() and add_query() return a new
    request with the given entries appended after the existing ones.
    """
    __slots__ = ("_name", "_method", "_path", "_body", "_decoder",
                 "_error_decoder", "_headers", "_query_pairs")

    def __init__(self, name, method, path, body=None, decoder=None,
                 error_decoder=None, headers=(), query=()):
        if not isinstance(name, str):
            raise TypeError("Expected name to be a string.")

        if not isinstance(method, str):
            raise TypeError("Expected method to be a string.")

        if not isinstance(path, str):
            raise TypeError("Expected path to be a string.")

        if body is None:
            body = EmptyBody()
        elif not isinstance(body, Body):
            raise TypeError("Expected body to be a Body.")

        if not isinstance(decoder, ResponseDecoder):
            raise TypeError("Expected decoder to be a ResponseDecoder.")

        if error_decoder is not None and not callable(error_decoder):
            raise TypeError("Expected error_decoder to be callable.")

        self._name = name
        self._method = method.upper()
        self._path = path
        self._body = body
        self._decoder = decoder
        self._error_decoder = error_decoder
        self._headers = _check_pairs("headers", headers)
        self._query_pairs = tuple(encode_query_pairs(
            _check_pairs("query", query)))

    @property
    def name(self):
        return self._name

    @property
    def method(self):
        return self._method

    @property
    def path(self):
        return self._path

    @property
    def body(self):
        return self._body

    @property
    def decoder(self):
        return self._decoder

    @property
    def error_decoder(self):
        return self._error_decoder

    @property
    def headers(self):
        """
        The extra headers, in insertion order.
        """
        return self._headers

    @property
    def query_pairs(self):
        """
        The percent-encoded query parameters, in insertion order.
        """
        return self._query_pairs

    @property
    def query_string(self):
        """
        The query string in insertion order (no leading '?').
        """
        return render_query_string(self._query_pairs)

    def has_header(self, name):
        """
        Indicates whether a header with the given name (compared
        case-insensitively) is present.
        """
        name = name.lower()
        return any(key.lower() == name for key, _ in self._headers)

    def has_query_key(self, key):
        """
        Indicates whether an (unencoded) query parameter is present.
        """
        key = percent_encode(key)
        return any(k == key for k, _ in self._query_pairs)

    def _copy(self):
        result = Request.__new__(Request)
        for slot in Request.__slots__:
            setattr(result, slot, getattr(self, slot))
        return result

    def add_headers(self, headers):
        """
        add_headers(headers: Iterable[Tuple[str, str]]) -> Request

        Return a new request with the given headers appended.
        """
        result = self._copy()
        result._headers = self._headers + _check_pairs("headers", headers)
        return result

    def add_query(self, query):
        """
        add_query(query: Iterable[Tuple[str, str]]) -> Request

        Return a new request with the given (unencoded) query parameters
        percent-encoded and appended.
        """
        result = self._copy()
        result._query_pairs = self._query_pairs + tuple(
            encode_query_pairs(_check_pairs("query", query)))
        return result

    def __repr__(self):
        return "Request(%r, %r, %r)" % (self._name, self._method, self._path)

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
