"""
AWS credentials supplied by the caller on each request.
"""

class Credentials:
    """
    Credentials(access_key_id: str, secret_access_key: str,
                session_token: Optional[str]=None)

    An immutable set of AWS credentials. These are never fetched, cached,
    or refreshed here; the caller supplies them on every call.
    """
    __slots__ = ("_access_key_id", "_secret_access_key", "_session_token")

    def __init__(self, access_key_id, secret_access_key, session_token=None):
        if not isinstance(access_key_id, str):
            raise TypeError("Expected access_key_id to be a string.")

        if not isinstance(secret_access_key, str):
            raise TypeError("Expected secret_access_key to be a string.")

        if session_token is not None and not isinstance(session_token, str):
            raise TypeError("Expected session_token to be a string or None.")

        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._session_token = session_token

    @property
    def access_key_id(self):
        return self._access_key_id

    @property
    def secret_access_key(self):
        return self._secret_access_key

    @property
    def session_token(self):
        return self._session_token

    def with_session_token(self, session_token):
        """
        Return a copy of these credentials carrying the given session token.
        """
        return Credentials(
            self._access_key_id, self._secret_access_key, session_token)

    def __eq__(self, other):
        if not isinstance(other, Credentials):
            return NotImplemented
        return (self._access_key_id == other._access_key_id and
                self._secret_access_key == other._secret_access_key and
                self._session_token == other._session_token)

    def __hash__(self):
        return hash((self._access_key_id, self._secret_access_key,
                     self._session_token))

    def __repr__(self):
        # Never render the secret key or token.
        return "Credentials(access_key_id=%r, session_token=%s)" % (
            self._access_key_id,
            "None" if self._session_token is None else "'***'")

# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
