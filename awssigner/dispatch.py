"""
Send AWS requests, signed or unsigned, and decode their responses.
"""

from datetime import datetime
from inspect import isawaitable
from logging import getLogger

import httpx
from pytz import UTC

from .dateutil import format_amz_timestamp
from .decode import Response, run_decoder
from .encoding import render_query_string
from .exc import ServiceError, SigningUnsupportedError, TransportError
from .service import Protocol, Signer
from .sigv4 import AWSSigV4Signer

# Logging instance
log = getLogger("awssigner.dispatch")

def utc_now():
    """
    The current time as an aware UTC datetime.
    """
    return datetime.now(UTC)

def protocol_request(service, request):
    """
    protocol_request(service: Service, request: Request) -> Request

    Add the headers and query parameters the service's protocol requires:

    * JSON protocol: x-amz-target: <target prefix>.<operation name>
    * QUERY and EC2 protocols: Action=<operation name>, Version=<api version>
    * All protocols: Accept and Content-Type, unless already supplied.

    Entries the caller already supplied are left alone.
    """
    headers = []

    if (service.protocol is Protocol.JSON and
            not request.has_header("x-amz-target")):
        headers.append(
            ("x-amz-target", "%s.%s" % (service.target_prefix, request.name)))

    if not request.has_header("accept"):
        headers.append(("Accept", service.accept_type))

    _, content_type = request.body.to_transport(service)
    if content_type is not None and not request.has_header("content-type"):
        headers.append(("Content-Type", content_type))

    query = []
    if service.protocol in (Protocol.QUERY, Protocol.EC2):
        if not request.has_query_key("Action"):
            query.append(("Action", request.name))
        if not request.has_query_key("Version"):
            query.append(("Version", service.api_version))

    return request.add_headers(headers).add_query(query)

def build_url(service, request):
    """
    The absolute URL of a request: https://<host><path>[?<query>]. The
    query string is in canonical (sorted) order.
    """
    url = "https://" + service.host + request.path
    query_string = render_query_string(request.query_pairs, sort=True)
    if query_string:
        url += "?" + query_string
    return url

def decode_response(request, response):
    """
    decode_response(request: Request, response: Response) -> Any

    Route a response through the request's decoders. A non-2xx response is
    first offered to the error decoder; if it returns a value, ServiceError
    is raised with it. Everything else goes to the response decoder.

    A decoder that fails with KeyError or ValueError raises DecodeError.
    """
    if not response.is_good and request.error_decoder is not None:
        error = run_decoder(request.error_decoder, response)
        if error is not None:
            raise ServiceError(error, response.status_code)

    return request.decoder.decode(response)

def _wire_url(service, request):
    try:
        return httpx.URL(build_url(service, request))
    except httpx.InvalidURL as e:
        raise TransportError(TransportError.BAD_URL, str(e)) from e

def _wire_path(url):
    # The path exactly as it goes out in the request line.
    return url.raw_path.split(b"?", 1)[0].decode("ascii") or "/"

def _strip_authorization(request):
    headers = []
    for name, value in request.headers:
        if name.lower() == "authorization":
            log.warning("Dropping Authorization header from request %s",
                        request.name)
            continue
        headers.append((name, value))
    return headers

def _http_request(method, url, headers, body):
    try:
        return httpx.Request(method, url, headers=headers, content=body)
    except httpx.InvalidURL as e:
        raise TransportError(TransportError.BAD_URL, str(e)) from e

class Dispatcher:
    """
    Sends requests to AWS services.
    """

    def __init__(self, **kw):
        """
        Dispatcher(
            client: Optional[httpx.AsyncClient]=None,
            clock: Callable[[], datetime|Awaitable[datetime]]=utc_now)

        Create a new Dispatcher instance. Properties can be specified as
        keyword arguments.

        client: The HTTP client to send requests with. If None, a client is
            created for each call and closed afterwards. Timeouts, proxies,
            and connection reuse are configured on the client.
        clock: Returns the current time, or an awaitable of it. Called once
            per request.
        """
        super().__init__()
        self._client = None
        self._clock = utc_now

        for key, value in kw.items():
            setattr(self, key, value)
        return

    @property
    def client(self):
        """
        The httpx.AsyncClient used to send requests, or None.
        """
        return self._client

    @client.setter
    def client(self, value):
        if value is not None and not isinstance(value, httpx.AsyncClient):
            raise TypeError("Expected client to be an httpx.AsyncClient.")

        self._client = value
        return

    @property
    def clock(self):
        """
        A callable returning the current time.
        """
        return self._clock

    @clock.setter
    def clock(self, value):
        if not callable(value):
            raise TypeError("Expected clock to be callable.")

        self._clock = value
        return

    async def now(self):
        """
        Read the clock.
        """
        value = self.clock()
        if isawaitable(value):
            value = await value

        if not isinstance(value, datetime):
            raise TypeError("Clock returned %r, not a datetime" % (value,))
        return value

    def prepare_signed(self, service, credentials, request, timestamp):
        """
        prepare_signed(service, credentials, request, timestamp)
            -> httpx.Request

        Build the signed HTTP request without sending it.

        SigningUnsupportedError is raised if the service uses a signing
        scheme other than SigV4. The canonical request covers the path as
        it is sent on the wire. A caller-supplied Authorization header is
        dropped; the only one sent is the signer's.
        """
        if service.signer is not Signer.SIGN_V4:
            raise SigningUnsupportedError(service.signer)

        request = protocol_request(service, request)
        body, _ = request.body.to_transport(service)
        url = _wire_url(service, request)

        signer = AWSSigV4Signer(
            request_method=request.method, uri_path=_wire_path(url),
            query_pairs=request.query_pairs,
            headers=_strip_authorization(request), body=body,
            host=service.host, region=service.region,
            service=service.signing_name, credentials=credentials,
            timestamp=timestamp)
        headers = signer.sign()

        return _http_request(request.method, url, headers, body)

    def prepare_unsigned(self, service, request, timestamp):
        """
        prepare_unsigned(service, request, timestamp) -> httpx.Request

        Build the unsigned HTTP request without sending it. x-amz-date and
        x-amz-content-sha256 are still added. No Authorization header is
        ever included.
        """
        request = protocol_request(service, request)
        body, _ = request.body.to_transport(service)

        headers = _strip_authorization(request)
        headers.append(("x-amz-date", format_amz_timestamp(timestamp)))
        headers.append(("x-amz-content-sha256", request.body.payload_hash()))

        return _http_request(
            request.method, _wire_url(service, request), headers, body)

    async def send_signed(self, service, credentials, request):
        """
        send_signed(service: Service, credentials: Credentials,
                    request: Request) -> Any

        Sign a request with SigV4, send it, and return the decoded result.

        Raises SigningUnsupportedError before reading the clock or touching
        the network if the service's signing scheme is not implemented.
        Raises TransportError if no response was received, ServiceError if
        the error decoder recognized the response, and DecodeError if the
        response decoder rejected it.
        """
        if service.signer is not Signer.SIGN_V4:
            raise SigningUnsupportedError(service.signer)

        timestamp = await self.now()
        http_request = self.prepare_signed(
            service, credentials, request, timestamp)
        response = await self._send(http_request)
        return decode_response(request, response)

    async def send_unsigned(self, service, request):
        """
        send_unsigned(service: Service, request: Request) -> Any

        Send a request without signing it and return the decoded result.
        Errors are as for send_signed(), except that signing is never
        attempted.
        """
        timestamp = await self.now()
        http_request = self.prepare_unsigned(service, request, timestamp)
        response = await self._send(http_request)
        return decode_response(request, response)

    async def _send(self, http_request):
        log.debug("%s %s", http_request.method, http_request.url)

        try:
            if self.client is not None:
                http_response = await self.client.send(http_request)
            else:
                async with httpx.AsyncClient() as client:
                    http_response = await client.send(http_request)
        except httpx.InvalidURL as e:
            raise TransportError(TransportError.BAD_URL, str(e)) from e
        except httpx.UnsupportedProtocol as e:
            raise TransportError(TransportError.BAD_URL, str(e)) from e
        except httpx.TimeoutException as e:
            raise TransportError(TransportError.TIMEOUT, str(e)) from e
        except httpx.TransportError as e:
            raise TransportError(TransportError.NETWORK, str(e)) from e

        log.debug("%s %s -> %d", http_request.method, http_request.url,
                  http_response.status_code)
        return Response.from_httpx(http_response)

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
