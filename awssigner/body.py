"""
Request bodies: empty, JSON, or a string with an explicit mime type.
"""

from hashlib import sha256
import json

class Body:
    """
    Base class for request bodies. Use empty_body(), json_body(), or
    string_body() to construct one.
    """
    __slots__ = ()

    def to_string(self):
        """
        The body as text. Never fails.
        """
        raise NotImplementedError()

    def to_bytes(self):
        """
        The body as UTF-8 encoded bytes. Never fails.
        """
        return self.to_string().encode("utf-8")

    def payload_hash(self):
        """
        The lower-case hex SHA-256 digest of the body bytes.
        """
        return sha256(self.to_bytes()).hexdigest()

    def content_type(self, service):
        """
        The Content-Type header value for this body, or None if no header
        should be sent.
        """
        raise NotImplementedError()

    def to_transport(self, service):
        """
        to_transport(service: Service) -> Tuple[bytes, Optional[str]]

        The bytes to send and the Content-Type header value to send them
        with.
        """
        return self.to_bytes(), self.content_type(service)

    def __str__(self):
        return self.to_string()

class EmptyBody(Body):
    __slots__ = ()

    def to_string(self):
        return ""

    def to_bytes(self):
        return b""

    def content_type(self, service):
        return None

    def __eq__(self, other):
        return isinstance(other, EmptyBody)

    def __hash__(self):
        return hash(EmptyBody)

    def __repr__(self):
        return "EmptyBody()"

class JsonBody(Body):
    """
    A body holding a JSON-serializable value. It is serialized compactly,
    without pretty-printing, and sent with the service's JSON content type.
    """
    __slots__ = ("_value", "_text")

    def __init__(self, value):
        self._value = value
        self._text = json.dumps(value, separators=(",", ":"))

    @property
    def value(self):
        return self._value

    def to_string(self):
        return self._text

    def content_type(self, service):
        return service.json_content_type

    def __eq__(self, other):
        return isinstance(other, JsonBody) and self._text == other._text

    def __hash__(self):
        return hash((JsonBody, self._text))

    def __repr__(self):
        return "JsonBody(%s)" % (self._text,)

class StringBody(Body):
    """
    A raw string body sent with a caller-supplied mime type, verbatim.
    """
    __slots__ = ("_mime_type", "_text")

    def __init__(self, mime_type, text):
        if not isinstance(mime_type, str):
            raise TypeError("Expected mime_type to be a string.")

        if not isinstance(text, str):
            raise TypeError("Expected text to be a string.")

        self._mime_type = mime_type
        self._text = text

    @property
    def mime_type(self):
        return self._mime_type

    def to_string(self):
        return self._text

    def content_type(self, service):
        return self._mime_type

    def __eq__(self, other):
        return (isinstance(other, StringBody) and
                self._mime_type == other._mime_type and
                self._text == other._text)

    def __hash__(self):
        return hash((StringBody, self._mime_type, self._text))

    def __repr__(self):
        return "StringBody(%r, %r)" % (self._mime_type, self._text)

def empty_body():
    return EmptyBody()

def json_body(value):
    """
    json_body(value) -> JsonBody

    A TypeError is raised if the value is not JSON serializable.
    """
    return JsonBody(value)

def string_body(mime_type, text):
    return StringBody(mime_type, text)

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
