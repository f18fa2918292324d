#!/usr/bin/env python
from unittest import TestCase

from awssigner.credentials import Credentials

class CredentialsTest(TestCase):
    def test_fields(self):
        c = Credentials("AKID", "secret")
        self.assertEqual(c.access_key_id, "AKID")
        self.assertEqual(c.secret_access_key, "secret")
        self.assertIsNone(c.session_token)

        t = c.with_session_token("token")
        self.assertEqual(t.session_token, "token")
        self.assertIsNone(c.session_token)
        self.assertNotEqual(c, t)
        self.assertEqual(t, Credentials("AKID", "secret", "token"))

    def test_immutable(self):
        c = Credentials("AKID", "secret")
        with self.assertRaises(AttributeError):
            c.secret_access_key = "other"

    def test_repr_hides_secrets(self):
        r = repr(Credentials("AKID", "secret", "token"))
        self.assertIn("AKID", r)
        self.assertNotIn("secret", r)
        self.assertNotIn("token'", r)

    def test_type_checks(self):
        with self.assertRaises(TypeError):
            Credentials(None, "secret")

        with self.assertRaises(TypeError):
            Credentials("AKID", b"secret")

        with self.assertRaises(TypeError):
            Credentials("AKID", "secret", 1)
