"""
Per-API service descriptors.

A Service describes one AWS API surface: how it is addressed (endpoint
prefix, topology, host naming), how its payloads are shaped (protocol,
JSON version, timestamp format, XML namespace), and how requests to it are
signed. Descriptors are immutable; the with_* methods return modified
copies.
"""

from enum import Enum

from .dateutil import TimestampFormat

# Region used to sign requests to global endpoints.
DEFAULT_GLOBAL_REGION = "us-east-1"

# DigitalOcean Spaces has no global endpoint; this is its default region.
DEFAULT_DIGITAL_OCEAN_REGION = "nyc3"

class Protocol(Enum):
    """
    The wire shape an API uses for requests and responses.
    """
    JSON = "json"
    QUERY = "query"
    EC2 = "ec2"
    REST_JSON = "rest-json"
    REST_XML = "rest-xml"

class Signer(Enum):
    """
    Request signing schemes.
    """
    SIGN_V4 = "v4"
    SIGN_S3 = "s3"

class HostResolver(Enum):
    """
    Named host-resolution rules.

    AWS: <prefix>.<region>.amazonaws.com for regional endpoints and
    <prefix>.amazonaws.com for global ones.

    DIGITAL_OCEAN: <region>.digitaloceanspaces.com (S3-compatible Spaces).
    """
    AWS = "aws"
    DIGITAL_OCEAN = "digital-ocean"

class GlobalEndpoint:
    """
    The service has a single endpoint for all regions.
    """
    __slots__ = ()

    region = None

    def __eq__(self, other):
        return isinstance(other, GlobalEndpoint)

    def __hash__(self):
        return hash(GlobalEndpoint)

    def __repr__(self):
        return "GlobalEndpoint()"

class RegionalEndpoint:
    """
    The service has one endpoint per region.
    """
    __slots__ = ("_region",)

    def __init__(self, region):
        if not isinstance(region, str):
            raise TypeError("Expected region to be a string.")
        self._region = region

    @property
    def region(self):
        return self._region

    def __eq__(self, other):
        return (isinstance(other, RegionalEndpoint) and
                self._region == other._region)

    def __hash__(self):
        return hash((RegionalEndpoint, self._region))

    def __repr__(self):
        return "RegionalEndpoint(%r)" % (self._region,)

def resolve_host(resolver, endpoint_prefix, endpoint):
    """
    resolve_host(resolver: HostResolver, endpoint_prefix: str,
                 endpoint: GlobalEndpoint|RegionalEndpoint) -> str

    Compute the hostname for a service. Never fails.
    """
    if resolver is HostResolver.DIGITAL_OCEAN:
        region = endpoint.region or DEFAULT_DIGITAL_OCEAN_REGION
        return "%s.digitaloceanspaces.com" % (region,)

    if endpoint.region is None:
        return "%s.amazonaws.com" % (endpoint_prefix,)

    return "%s.%s.amazonaws.com" % (endpoint_prefix, endpoint.region)

def resolve_region(resolver, endpoint):
    """
    resolve_region(resolver: HostResolver,
                   endpoint: GlobalEndpoint|RegionalEndpoint) -> str

    Compute the region used in the credential scope. Never fails.
    """
    if endpoint.region is not None:
        return endpoint.region

    if resolver is HostResolver.DIGITAL_OCEAN:
        return DEFAULT_DIGITAL_OCEAN_REGION

    return DEFAULT_GLOBAL_REGION

def _default_timestamp_format(protocol):
    if protocol in (Protocol.JSON, Protocol.REST_JSON):
        return TimestampFormat.UNIX
    return TimestampFormat.ISO8601

class Service:
    # pylint: disable=R0902
    """
    Service(
        endpoint_prefix: str,
        api_version: str,
        protocol: Protocol,
        signer: Signer,
        endpoint: GlobalEndpoint|RegionalEndpoint=GlobalEndpoint(),
        json_version: Optional[str]=None,
        signing_name: Optional[str]=None,
        target_prefix: Optional[str]=None,
        timestamp_format: Optional[TimestampFormat]=None,
        xml_namespace: Optional[str]=None,
        host_resolver: HostResolver=HostResolver.AWS)

    An immutable description of one AWS API.

    endpoint_prefix: The service's endpoint prefix ("dynamodb", "sts").
    api_version: The API version string ("2012-08-10").
    protocol: The wire protocol family.
    signer: The signing scheme.
    endpoint: Global or regional endpoint topology.
    json_version: The x-amz-json version for the JSON protocol ("1.0",
        "1.1"). Defaults to "1.0".
    signing_name: The service name used in the credential scope. Defaults
        to the endpoint prefix.
    target_prefix: Prefix for the x-amz-target header of JSON-protocol
        calls. Defaults to "AWS" + PREFIX + "_" + apiversion, with the
        dashes removed from the API version.
    timestamp_format: How timestamps are serialized in payloads. Defaults
        to UNIX for JSON protocols and ISO8601 otherwise.
    xml_namespace: The XML namespace of REST-XML payloads, if any.
    host_resolver: The host-naming rule.
    """

    def __init__(self, endpoint_prefix, api_version, protocol, signer,
                 endpoint=None, json_version=None, signing_name=None,
                 target_prefix=None, timestamp_format=None,
                 xml_namespace=None, host_resolver=HostResolver.AWS):
        if not isinstance(endpoint_prefix, str):
            raise TypeError("Expected endpoint_prefix to be a string.")

        if not isinstance(api_version, str):
            raise TypeError("Expected api_version to be a string.")

        if not isinstance(protocol, Protocol):
            raise TypeError("Expected protocol to be a Protocol.")

        if not isinstance(signer, Signer):
            raise TypeError("Expected signer to be a Signer.")

        if endpoint is None:
            endpoint = GlobalEndpoint()
        elif not isinstance(endpoint, (GlobalEndpoint, RegionalEndpoint)):
            raise TypeError(
                "Expected endpoint to be a GlobalEndpoint or RegionalEndpoint.")

        for name, value in (("json_version", json_version),
                            ("signing_name", signing_name),
                            ("target_prefix", target_prefix),
                            ("xml_namespace", xml_namespace)):
            if value is not None and not isinstance(value, str):
                raise TypeError("Expected %s to be a string or None." % name)

        if (timestamp_format is not None and
                not isinstance(timestamp_format, TimestampFormat)):
            raise TypeError(
                "Expected timestamp_format to be a TimestampFormat or None.")

        if not isinstance(host_resolver, HostResolver):
            raise TypeError("Expected host_resolver to be a HostResolver.")

        self._endpoint_prefix = endpoint_prefix
        self._api_version = api_version
        self._protocol = protocol
        self._signer = signer
        self._endpoint = endpoint
        self._json_version = json_version
        self._signing_name = signing_name
        self._target_prefix = target_prefix
        self._timestamp_format = timestamp_format
        self._xml_namespace = xml_namespace
        self._host_resolver = host_resolver

    @classmethod
    def define_global(cls, endpoint_prefix, api_version, protocol, signer):
        """
        Create a descriptor for a service with a single global endpoint.
        """
        return cls(endpoint_prefix, api_version, protocol, signer,
                   endpoint=GlobalEndpoint())

    @classmethod
    def define_regional(cls, endpoint_prefix, api_version, protocol, signer,
                        region):
        """
        Create a descriptor for a service with per-region endpoints.
        """
        return cls(endpoint_prefix, api_version, protocol, signer,
                   endpoint=RegionalEndpoint(region))

    @property
    def endpoint_prefix(self):
        return self._endpoint_prefix

    @property
    def api_version(self):
        return self._api_version

    @property
    def protocol(self):
        return self._protocol

    @property
    def signer(self):
        return self._signer

    @property
    def endpoint(self):
        return self._endpoint

    @property
    def host_resolver(self):
        return self._host_resolver

    @property
    def xml_namespace(self):
        return self._xml_namespace

    @property
    def json_version(self):
        """
        The x-amz-json version used by JSON-protocol calls.
        """
        return self._json_version or "1.0"

    @property
    def signing_name(self):
        """
        The service name used in the credential scope and signing key.
        """
        return self._signing_name or self._endpoint_prefix

    @property
    def target_prefix(self):
        """
        The prefix of the x-amz-target header for JSON-protocol calls.
        """
        if self._target_prefix is not None:
            return self._target_prefix

        return "AWS%s_%s" % (self._endpoint_prefix.upper(),
                             self._api_version.replace("-", ""))

    @property
    def timestamp_format(self):
        if self._timestamp_format is not None:
            return self._timestamp_format
        return _default_timestamp_format(self._protocol)

    @property
    def host(self):
        """
        The hostname requests to this service are sent to.
        """
        return resolve_host(
            self._host_resolver, self._endpoint_prefix, self._endpoint)

    @property
    def region(self):
        """
        The region used when signing requests to this service.
        """
        return resolve_region(self._host_resolver, self._endpoint)

    @property
    def json_content_type(self):
        """
        The content type of JSON request bodies for this service.
        """
        if self._protocol is Protocol.JSON:
            return "application/x-amz-json-" + self.json_version
        return "application/json"

    @property
    def accept_type(self):
        """
        The media type this service's responses are expected to carry.
        """
        if self._protocol in (Protocol.JSON, Protocol.REST_JSON):
            return "application/json"
        return "application/xml"

    def _replace(self, **changes):
        kw = dict(
            endpoint=self._endpoint,
            json_version=self._json_version,
            signing_name=self._signing_name,
            target_prefix=self._target_prefix,
            timestamp_format=self._timestamp_format,
            xml_namespace=self._xml_namespace,
            host_resolver=self._host_resolver)
        kw.update(changes)
        return Service(self._endpoint_prefix, self._api_version,
                       self._protocol, self._signer, **kw)

    def with_endpoint(self, endpoint):
        return self._replace(endpoint=endpoint)

    def with_region(self, region):
        return self._replace(endpoint=RegionalEndpoint(region))

    def with_json_version(self, json_version):
        return self._replace(json_version=json_version)

    def with_signing_name(self, signing_name):
        return self._replace(signing_name=signing_name)

    def with_target_prefix(self, target_prefix):
        return self._replace(target_prefix=target_prefix)

    def with_timestamp_format(self, timestamp_format):
        return self._replace(timestamp_format=timestamp_format)

    def with_xml_namespace(self, xml_namespace):
        return self._replace(xml_namespace=xml_namespace)

    def to_digital_ocean_spaces(self):
        """
        Address this service as DigitalOcean Spaces instead of AWS.
        """
        return self._replace(host_resolver=HostResolver.DIGITAL_OCEAN)

    def to_dict(self):
        """
        A plain-data rendering of this descriptor.
        """
        return {
            "endpoint_prefix": self._endpoint_prefix,
            "api_version": self._api_version,
            "protocol": self._protocol.value,
            "signer": self._signer.value,
            "region": self._endpoint.region,
            "json_version": self._json_version,
            "signing_name": self._signing_name,
            "target_prefix": self._target_prefix,
            "timestamp_format": (self._timestamp_format.value
                                 if self._timestamp_format else None),
            "xml_namespace": self._xml_namespace,
            "host_resolver": self._host_resolver.value,
        }

    def __eq__(self, other):
        if not isinstance(other, Service):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash(tuple(sorted(self.to_dict().items())))

    def __repr__(self):
        return "Service(%r, %r, %s, %s, endpoint=%r)" % (
            self._endpoint_prefix, self._api_version, self._protocol.name,
            self._signer.name, self._endpoint)

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
