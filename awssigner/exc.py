#!/usr/bin/env python
"""
AWS request signing and dispatch exceptions.
"""

class AWSRequestError(Exception):
    """
    Base class for all errors raised while building, signing, sending, or
    decoding an AWS request.
    """
    pass

class TransportError(AWSRequestError):
    """
    The HTTP call never produced a response.

    kind is one of BAD_URL, TIMEOUT, or NETWORK.
    """
    BAD_URL = "bad_url"
    TIMEOUT = "timeout"
    NETWORK = "network"

    def __init__(self, kind, message):
        super().__init__("%s: %s" % (kind, message))
        self.kind = kind
        self.message = message

class DecodeError(AWSRequestError):
    """
    A well-formed HTTP response was rejected by the response decoder.

    If status_code is set, the response was rejected because of its status
    (bad status) without the body being parsed; otherwise the body itself
    could not be decoded (bad body).
    """
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_bad_status(self):
        """
        Indicates whether this error was caused by a non-2xx status code.
        """
        return self.status_code is not None

    @classmethod
    def bad_status(cls, status_code):
        return cls("Bad status: %d" % status_code, status_code=status_code)

class ServiceError(AWSRequestError):
    """
    The remote API returned an error payload that the request's error
    decoder understood. The decoded value is available as error.
    """
    def __init__(self, error, status_code):
        super().__init__("Service error (status %d): %r" % (status_code, error))
        self.error = error
        self.status_code = status_code

class SigningUnsupportedError(AWSRequestError):
    """
    The service descriptor names a signing scheme that is not implemented.
    Raised before any network call is attempted.
    """
    def __init__(self, signer):
        super().__init__("Signing scheme not implemented: %s" % (signer,))
        self.signer = signer

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
