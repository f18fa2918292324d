#!/usr/bin/env python
"""
AWS request building, SigV4 signing, and dispatch.
"""

from .body import (
    Body, EmptyBody, JsonBody, StringBody, empty_body, json_body, string_body)
from .credentials import Credentials
from .dateutil import TimestampFormat
from .decode import (
    AWSAppError, BodyDecoder, ConstantDecoder, FullDecoder, JsonBodyDecoder,
    JsonFullDecoder, Response, ResponseDecoder, aws_app_error_decoder)
from .dispatch import Dispatcher
from .exc import (
    AWSRequestError, DecodeError, ServiceError, SigningUnsupportedError,
    TransportError)
from .request import Request
from .service import (
    GlobalEndpoint, HostResolver, Protocol, RegionalEndpoint, Service, Signer)
from .sigv4 import AWSSigV4Signer, derive_signing_key

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
