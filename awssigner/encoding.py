"""
RFC 3986 percent-encoding and canonical query rendering for SigV4.
"""

from string import ascii_letters, digits

# pylint: disable=C0103

# Unreserved bytes from RFC 3986.
_rfc3986_unreserved = frozenset((ascii_letters + digits + "-._~")
                                .encode("utf-8"))

def percent_encode(value):
    """
    percent_encode(value) -> str

    Percent-encode a string according to RFC 3986. Letters, digits, and
    the symbols '-', '_', '.', and '~' are left alone; every other byte of
    the UTF-8 encoding is written as '%XX' with uppercase hex digits.

    Applying this to an already-encoded string encodes the '%' signs again;
    callers must encode exactly once.
    """
    if not isinstance(value, str):
        value = str(value)

    result = []
    for c in value.encode("utf-8"):
        if c in _rfc3986_unreserved:
            result.append(chr(c))
        else:
            result.append("%%%02X" % c)
    return "".join(result)

def encode_query_pairs(pairs):
    """
    encode_query_pairs(pairs: Iterable[Tuple[str, str]]) -> List[Tuple[str, str]]

    Percent-encode the key and value of each query pair, preserving order
    and duplicates.
    """
    return [(percent_encode(key), percent_encode(value))
            for key, value in pairs]

def render_query_string(encoded_pairs, sort=False):
    """
    render_query_string(encoded_pairs, sort=False) -> str

    Join already-encoded (key, value) pairs into a query string of the form
    "k1=v1&k2=v2". No leading '?' is added, and an empty input yields the
    empty string. Nothing is re-encoded.

    If sort is true, the pairs are ordered by key and then by value, as
    required for the SigV4 canonical query string. Otherwise insertion order
    is kept.
    """
    encoded_pairs = list(encoded_pairs)
    if sort:
        encoded_pairs = sorted(encoded_pairs)

    return "&".join(["%s=%s" % (key, value) for key, value in encoded_pairs])

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
