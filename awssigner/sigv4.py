"""
SigV4 request signing routines.
"""

from collections import OrderedDict
from datetime import datetime
from hashlib import sha256
import hmac
from logging import getLogger
from re import compile as re_compile

from .credentials import Credentials
from .dateutil import format_amz_timestamp, parse_iso8601
from .encoding import render_query_string

# pylint: disable=C0103

# Algorithm for AWS SigV4
AWS4_HMAC_SHA256 = "AWS4-HMAC-SHA256"

# Header keys
_authorization = "Authorization"
_aws4_request = "aws4_request"
_aws4_request_bytes = _aws4_request.encode("utf-8")
_host = "Host"
_x_amz_content_sha256 = "x-amz-content-sha256"
_x_amz_date = "x-amz-date"
_x_amz_security_token = "x-amz-security-token"

# Match for multiple spaces
_multispace = re_compile(r"  +")

# Logging instance
log = getLogger("awssigner.sigv4")

def canonical_headers(headers):
    """
    canonical_headers(headers: Iterable[Tuple[str, str]]) -> Tuple[str, str]

    Canonicalize a list of (name, value) header pairs. Returns a 2-tuple of
    the canonical header block and the signed-headers list.

    Names are lower-cased; values are trimmed and runs of spaces collapsed.
    Values of repeated headers are joined with ',' in the order given. The
    block is sorted by name and every line, including the last, ends in
    '\\n'. The signed-headers list is the sorted names joined with ';'.
    """
    merged = OrderedDict()
    for name, value in headers:
        key = name.strip().lower()
        value = _multispace.sub(" ", value.strip())
        merged.setdefault(key, []).append(value)

    names = sorted(merged)
    header_lines = "".join(
        ["%s:%s\n" % (name, ",".join(merged[name])) for name in names])
    return header_lines, ";".join(names)

def canonical_request(request_method, uri_path, canonical_query_string,
                      header_lines, signed_headers, payload_hash):
    """
    The AWS SigV4 canonical request. This process is outlined here:
    http://docs.aws.amazon.com/general/latest/gr/sigv4-create-canonical-request.html

    The canonical request is:
        request_method + '\\n' +
        uri_path + '\\n' +
        canonical_query_string + '\\n' +
        canonical_headers + '\\n' +
        signed_headers + '\\n' +
        sha256(body).hexdigest()

    The canonical header block already ends in a newline, so it is followed
    by an empty line.

    uri_path is used exactly as it is sent on the wire (an empty path is
    sent as "/"); it is not normalized.
    """
    return (request_method + "\n" +
            (uri_path or "/") + "\n" +
            canonical_query_string + "\n" +
            header_lines + "\n" +
            signed_headers + "\n" +
            payload_hash)

def credential_scope(date, region, service):
    """
    The credential scope: date/region/service/aws4_request.
    """
    return date + "/" + region + "/" + service + "/" + _aws4_request

def string_to_sign(amz_date, scope, canonical_req):
    """
    The AWS SigV4 string being signed.
    """
    return (AWS4_HMAC_SHA256 + "\n" +
            amz_date + "\n" +
            scope + "\n" +
            sha256(canonical_req.encode("utf-8")).hexdigest())

def derive_signing_key(secret_key, date, region, service):
    """
    derive_signing_key(secret_key, date, region, service) -> bytes

    Derive the scoped SigV4 signing key:
        kDate = HMAC("AWS4" + secret_key, date)
        kRegion = HMAC(kDate, region)
        kService = HMAC(kRegion, service)
        kSigning = HMAC(kService, "aws4_request")

    The result depends only on the arguments.
    """
    k_secret = b"AWS4" + secret_key.encode("utf-8")
    k_date = hmac.new(k_secret, date.encode("utf-8"), sha256).digest()
    k_region = hmac.new(k_date, region.encode("utf-8"), sha256).digest()
    k_service = hmac.new(k_region, service.encode("utf-8"), sha256).digest()
    return hmac.new(k_service, _aws4_request_bytes, sha256).digest()

def calculate_signature(signing_key, to_sign):
    """
    The lower-case hex HMAC-SHA256 of the string to sign.
    """
    return hmac.new(signing_key, to_sign.encode("utf-8"), sha256).hexdigest()

def authorization_header(access_key, scope, signed_headers, signature):
    """
    The value of the Authorization header.
    """
    return "%s Credential=%s/%s, SignedHeaders=%s, Signature=%s" % (
        AWS4_HMAC_SHA256, access_key, scope, signed_headers, signature)

class AWSSigV4Signer:
    # pylint: disable=R0902,R0904
    """
    Sign a request according to AWS SigV4.
    """

    def __init__(self, **kw):
        """
        AWSSigV4Signer(
            request_method: str,
            uri_path: str,
            query_pairs: Iterable[Tuple[str, str]],
            headers: Iterable[Tuple[str, str]],
            body: bytes,
            host: str,
            region: str,
            service: str,
            credentials: Credentials,
            timestamp: datetime|str)

        Create a new AWSSigV4Signer instance. Properties can be specified
        as keyword arguments.

        request_method: The HTTP request method (GET, PUT, POST, etc.).
        uri_path: The path accessed (usually just "/"), exactly as it is sent.
            It is not normalized.
        query_pairs: The percent-encoded query parameters as (key, value)
            pairs.
        headers: The HTTP headers to send, as (name, value) pairs. The
            signing headers (x-amz-date, x-amz-content-sha256, Host) are
            added by the signer.
        body: The request body (if any). This should be undecoded (bytes, not
            a Unicode str)
        host: The host the request is sent to.
        region: The AWS region (or pseudo-region) of the service.
        service: The signing name of the service.
        credentials: The credentials to sign with.
        timestamp: The time of the request, as an aware datetime or an
            ISO 8601 string. Every signature is bound to this timestamp; the
            signer never reads the clock.
        """
        super().__init__()
        self._request_method = "GET"
        self._uri_path = "/"
        self._query_pairs = ()
        self._headers = ()
        self._body = b""
        self._host = ""
        self._region = "us-east-1"
        self._service = "none"
        self._credentials = None
        self._timestamp = None

        for key, value in kw.items():
            setattr(self, key, value)
        return

    @property
    def request_method(self):
        """
        The HTTP method (GET, POST, PUT) used to make the request.
        """
        return self._request_method

    @request_method.setter
    def request_method(self, value):
        if not isinstance(value, str):
            raise TypeError("Expected request_method to be a string.")

        self._request_method = value
        return

    @property
    def uri_path(self):
        """
        The path component of the URI.
        """
        return self._uri_path

    @uri_path.setter
    def uri_path(self, value):
        if not isinstance(value, str):
            raise TypeError("Expected uri_path to be a string.")

        self._uri_path = value
        return

    @property
    def query_pairs(self):
        """
        The percent-encoded query parameters.
        """
        return self._query_pairs

    @query_pairs.setter
    def query_pairs(self, value):
        pairs = []
        for i, pair in enumerate(value):
            if (not isinstance(pair, tuple) or len(pair) != 2 or
                    not isinstance(pair[0], str) or
                    not isinstance(pair[1], str)):
                raise TypeError(
                    "Query parameter %d must be a pair of strings: %r" %
                    (i, pair))
            pairs.append(pair)

        self._query_pairs = tuple(pairs)
        return

    @property
    def headers(self):
        """
        The HTTP headers sent with the request, excluding the signing
        headers.
        """
        return self._headers

    @headers.setter
    def headers(self, value):
        if isinstance(value, dict):
            value = list(value.items())

        new_headers = []
        for i, pair in enumerate(value):
            if not isinstance(pair, tuple) or len(pair) != 2:
                raise TypeError("Header %d must be a (name, value) pair: %r" %
                                (i, pair))

            key, header_value = pair
            if not isinstance(key, str):
                raise TypeError("Header must be a string: %r" % (key,))

            if not isinstance(header_value, str):
                raise TypeError("Header %r value must be a string: %r" %
                                (key, type(header_value).__name__))
            new_headers.append(pair)

        self._headers = tuple(new_headers)

    @property
    def body(self):
        """
        The body sent with the HTTP request (for PUT and POST requests).
        """
        return self._body

    @body.setter
    def body(self, value):
        if not isinstance(value, bytes):
            raise TypeError("Expected body to be a byte array.")

        self._body = value
        return

    @property
    def host(self):
        """
        The host the request is sent to.
        """
        return self._host

    @host.setter
    def host(self, value):
        if not isinstance(value, str):
            raise TypeError("Expected host to be a string.")

        self._host = value
        return

    @property
    def region(self):
        """
        The region the service is running in.
        """
        return self._region

    @region.setter
    def region(self, value):
        if not isinstance(value, str):
            raise TypeError("Expected region to be a string.")

        self._region = value
        return

    @property
    def service(self):
        """
        The signing name of the service being invoked.
        """
        return self._service

    @service.setter
    def service(self, value):
        if not isinstance(value, str):
            raise TypeError("Expected service to be a string.")

        self._service = value
        return

    @property
    def credentials(self):
        """
        The credentials used to sign the request.
        """
        return self._credentials

    @credentials.setter
    def credentials(self, value):
        if not isinstance(value, Credentials):
            raise TypeError("Expected credentials to be a Credentials.")

        self._credentials = value
        return

    @property
    def timestamp(self):
        """
        The timestamp of the request as a datetime.
        """
        return self._timestamp

    @timestamp.setter
    def timestamp(self, value):
        if isinstance(value, str):
            parsed = parse_iso8601(value)
            if parsed is None:
                raise ValueError(
                    "Timestamp is not a valid ISO 8601 string: %r" % value)
            value = parsed
        elif not isinstance(value, datetime):
            raise TypeError("Expected timestamp to be a datetime or string.")

        self._timestamp = value
        return

    @property
    def amz_date(self):
        """
        The request timestamp in YYYYMMDDTHHMMSSZ format.
        """
        if self._timestamp is None:
            raise AttributeError("Timestamp has not been set")
        return format_amz_timestamp(self._timestamp)

    @property
    def request_date(self):
        """
        The UTC date of the request in ISO8601 YYYYMMDD format.
        """
        return self.amz_date[:8]

    @property
    def payload_hash(self):
        """
        The SHA-256 hex digest of the body.
        """
        return sha256(self.body).hexdigest()

    @property
    def signing_headers(self):
        """
        The headers covered by the signature: the request headers followed
        by x-amz-date, x-amz-content-sha256, and Host.
        """
        return self.headers + (
            (_x_amz_date, self.amz_date),
            (_x_amz_content_sha256, self.payload_hash),
            (_host, self.host))

    @property
    def canonical_query_string(self):
        """
        The canonical query string: the encoded parameters sorted by key
        and value.
        """
        return render_query_string(self.query_pairs, sort=True)

    @property
    def signed_headers(self):
        """
        The sorted, lower-cased, ';'-separated list of signed header names.
        """
        return canonical_headers(self.signing_headers)[1]

    @property
    def canonical_request(self):
        """
        The AWS SigV4 canonical request for this request.
        """
        header_lines, signed_headers = canonical_headers(self.signing_headers)
        return canonical_request(
            self.request_method, self.uri_path, self.canonical_query_string,
            header_lines, signed_headers, self.payload_hash)

    @property
    def credential_scope(self):
        """
        The scope of the credentials to use.
        """
        return credential_scope(self.request_date, self.region, self.service)

    @property
    def string_to_sign(self):
        """
        The AWS SigV4 string being signed.
        """
        canonical_req = self.canonical_request
        log.debug("Canonical request:\n%s", canonical_req)

        result = string_to_sign(
            self.amz_date, self.credential_scope, canonical_req)
        log.debug("String to sign:\n%s", result)
        return result

    @property
    def signing_key(self):
        """
        The signing key scoped to this request's date, region, and service.
        """
        if self.credentials is None:
            raise AttributeError("Credentials have not been set")

        return derive_signing_key(
            self.credentials.secret_access_key, self.request_date,
            self.region, self.service)

    @property
    def signature(self):
        """
        The AWS SigV4 signature of the request.
        """
        return calculate_signature(self.signing_key, self.string_to_sign)

    @property
    def authorization(self):
        """
        The value of the Authorization header.
        """
        return authorization_header(
            self.credentials.access_key_id, self.credential_scope,
            self.signed_headers, self.signature)

    def sign(self):
        """
        sign() -> List[Tuple[str, str]]

        Return the full list of headers to send: the request headers, the
        signing headers, and the Authorization header. If the credentials
        carry a session token, x-amz-security-token comes last; it is not
        part of the signed headers.
        """
        result = list(self.signing_headers)
        result.append((_authorization, self.authorization))

        session_token = self.credentials.session_token
        if session_token:
            result.append((_x_amz_security_token, session_token))

        return result

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
