"""
HTTP responses and the decoders that turn them into typed results.

A ResponseDecoder has one method, decode(response), which returns the
decoded value or raises DecodeError. The concrete decoders here cover the
usual cases:

    FullDecoder      - sees status, headers, and body text.
    JsonFullDecoder  - sees status, headers, and the parsed JSON payload.
    BodyDecoder      - sees only the body text, and only for 2xx responses.
    JsonBodyDecoder  - sees only the parsed JSON payload, only for 2xx.
    ConstantDecoder  - ignores the body; returns a fixed value for 2xx.

Error decoders are plain callables taking a Response and returning the
caller's error value, or None if the payload is not an error they
recognize.
"""

from abc import ABC, abstractmethod
import json
from logging import getLogger
from xml.etree import ElementTree

from .exc import DecodeError

# Logging instance
log = getLogger("awssigner.decode")

class Response:
    """
    Response(status_code: int, headers: Dict[str, str], body: bytes)

    A raw HTTP response. Header names are stored lower-cased.
    """
    __slots__ = ("_status_code", "_headers", "_body")

    def __init__(self, status_code, headers=None, body=b""):
        if not isinstance(status_code, int):
            raise TypeError("Expected status_code to be an int.")

        if not isinstance(body, bytes):
            raise TypeError("Expected body to be a byte array.")

        self._status_code = status_code
        self._headers = dict([(key.lower(), value) for key, value in
                              (headers or {}).items()])
        self._body = body

    @classmethod
    def from_httpx(cls, response):
        """
        Wrap an httpx.Response whose body has been read.
        """
        return cls(response.status_code, dict(response.headers.items()),
                   response.content)

    @property
    def status_code(self):
        return self._status_code

    @property
    def headers(self):
        return self._headers

    @property
    def body(self):
        return self._body

    @property
    def text(self):
        return self._body.decode("utf-8", errors="replace")

    @property
    def is_good(self):
        """
        Indicates whether the status code is in [200, 300).
        """
        return 200 <= self._status_code < 300

    def __repr__(self):
        return "Response(%d, %d bytes)" % (self._status_code, len(self._body))

def _parse_json(text):
    try:
        return json.loads(text)
    except ValueError as e:
        raise DecodeError("Invalid JSON body: %s" % e)

def run_decoder(fn, *args):
    """
    Call a decoder function, turning KeyError and ValueError into
    DecodeError.
    """
    try:
        return fn(*args)
    except DecodeError:
        raise
    except (KeyError, ValueError) as e:
        raise DecodeError(str(e))

class ResponseDecoder(ABC):
    """
    Converts a Response into a typed result.
    """

    @abstractmethod
    def decode(self, response):
        """
        decode(response: Response) -> Any

        Return the decoded value or raise DecodeError.
        """
        raise NotImplementedError()

class FullDecoder(ResponseDecoder):
    """
    FullDecoder(fn: Callable[[int, Dict[str, str], str], Any])

    Passes status, headers, and body text to fn for every response. fn
    rejects a response by raising ValueError (or KeyError); the message
    becomes a bad-body DecodeError.
    """
    def __init__(self, fn):
        self.fn = fn

    def decode(self, response):
        return run_decoder(
            self.fn, response.status_code, response.headers, response.text)

class JsonFullDecoder(ResponseDecoder):
    """
    JsonFullDecoder(fn: Callable[[int, Dict[str, str], Any], Any])

    Like FullDecoder, but fn receives the parsed JSON payload. An empty
    body is passed as None.
    """
    def __init__(self, fn):
        self.fn = fn

    def decode(self, response):
        text = response.text
        payload = _parse_json(text) if text.strip() else None
        return run_decoder(
            self.fn, response.status_code, response.headers, payload)

class BodyDecoder(ResponseDecoder):
    """
    BodyDecoder(fn: Callable[[str], Any])

    Passes the body text to fn, but only for 2xx responses. Any other status
    produces a bad-status DecodeError without the body being looked at.
    """
    def __init__(self, fn):
        self.fn = fn

    def decode(self, response):
        if not response.is_good:
            raise DecodeError.bad_status(response.status_code)
        return run_decoder(self.fn, response.text)

class JsonBodyDecoder(ResponseDecoder):
    """
    JsonBodyDecoder(fn: Optional[Callable[[Any], Any]]=None)

    Parses the body of a 2xx response as JSON and passes it to fn (or
    returns it as-is if fn is None).
    """
    def __init__(self, fn=None):
        self.fn = fn

    def decode(self, response):
        if not response.is_good:
            raise DecodeError.bad_status(response.status_code)

        payload = _parse_json(response.text)
        if self.fn is None:
            return payload
        return run_decoder(self.fn, payload)

class ConstantDecoder(ResponseDecoder):
    """
    ConstantDecoder(value: Any)

    Ignores the body and returns value for any 2xx response.
    """
    def __init__(self, value):
        self.value = value

    def decode(self, response):
        if not response.is_good:
            raise DecodeError.bad_status(response.status_code)
        return self.value

class AWSAppError:
    """
    AWSAppError(type: str, message: Optional[str], status_code: int)

    The standard error payload returned by AWS APIs.
    """
    __slots__ = ("type", "message", "status_code")

    def __init__(self, type, message, status_code): # pylint: disable=W0622
        self.type = type
        self.message = message
        self.status_code = status_code

    def __eq__(self, other):
        return (isinstance(other, AWSAppError) and
                (self.type, self.message, self.status_code) ==
                (other.type, other.message, other.status_code))

    def __hash__(self):
        return hash((self.type, self.message, self.status_code))

    def __repr__(self):
        return "AWSAppError(%r, %r, %d)" % (
            self.type, self.message, self.status_code)

def _strip_error_type(error_type):
    # "com.amazonaws.dynamodb.v20120810#ResourceNotFoundException" and
    # "ValidationException:http://internal.amazon.com/..." both carry the
    # bare name.
    error_type = error_type.split(":", 1)[0]
    return error_type.rsplit("#", 1)[-1]

def _find_xml_text(root, tag):
    for el in root.iter():
        if el.tag == tag or el.tag.endswith("}" + tag):
            return el.text
    return None

def aws_app_error_decoder(response):
    """
    aws_app_error_decoder(response: Response) -> Optional[AWSAppError]

    Decode the AWS error payload of a non-2xx response. Both the JSON form
    ({"__type": ..., "message": ...}) and the XML form
    (<Error><Code>...</Code><Message>...</Message></Error>) are understood.
    None is returned if the body is neither.
    """
    if response.is_good:
        return None

    text = response.text.strip()
    header_type = response.headers.get("x-amzn-errortype")

    if text.startswith("{"):
        try:
            payload = json.loads(text)
        except ValueError:
            log.debug("Unparseable JSON error body: %r", text)
            return None

        if not isinstance(payload, dict):
            return None

        error_type = (payload.get("__type") or payload.get("code") or
                      payload.get("Code") or header_type)
        if not isinstance(error_type, str) or not error_type:
            return None

        message = payload.get("message")
        if message is None:
            message = payload.get("Message")

        return AWSAppError(
            _strip_error_type(error_type), message, response.status_code)

    if text.startswith("<"):
        try:
            root = ElementTree.fromstring(text)
        except ElementTree.ParseError:
            log.debug("Unparseable XML error body: %r", text)
            return None

        code = _find_xml_text(root, "Code")
        if code is None:
            return None

        return AWSAppError(
            code, _find_xml_text(root, "Message"), response.status_code)

    if header_type:
        return AWSAppError(
            _strip_error_type(header_type), None, response.status_code)

    return None

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
