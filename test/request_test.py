#!/usr/bin/env python
from unittest import TestCase

from awssigner.body import EmptyBody, json_body
from awssigner.decode import ConstantDecoder
from awssigner.request import Request

def make_request(**kw):
    return Request("ListThings", "get", "/things", decoder=ConstantDecoder(None),
                   **kw)

class Requests(TestCase):
    def test_defaults(self):
        r = make_request()
        self.assertEqual(r.name, "ListThings")
        self.assertEqual(r.method, "GET")
        self.assertEqual(r.path, "/things")
        self.assertIsInstance(r.body, EmptyBody)
        self.assertEqual(r.headers, ())
        self.assertEqual(r.query_pairs, ())
        self.assertEqual(r.query_string, "")
        self.assertIsNone(r.error_decoder)

    def test_query_encoded_on_insertion(self):
        r = make_request(query=[("a key", "a/value")])
        self.assertEqual(r.query_pairs, (("a%20key", "a%2Fvalue"),))
        self.assertEqual(r.query_string, "a%20key=a%2Fvalue")
        self.assertTrue(r.has_query_key("a key"))
        self.assertFalse(r.has_query_key("a%20key"))

    def test_append_only(self):
        r = make_request(headers=[("X-A", "1")], query=[("z", "1")])
        r2 = r.add_headers([("X-B", "2"), ("X-A", "3")])
        r3 = r2.add_query([("a", "2"), ("z", "0")])

        self.assertEqual(r3.headers, (("X-A", "1"), ("X-B", "2"), ("X-A", "3")))
        self.assertEqual(r3.query_pairs, (("z", "1"), ("a", "2"), ("z", "0")))
        self.assertEqual(r3.query_string, "z=1&a=2&z=0")

        # Earlier requests are unchanged.
        self.assertEqual(r.headers, (("X-A", "1"),))
        self.assertEqual(r.query_pairs, (("z", "1"),))
        self.assertEqual(r2.query_pairs, (("z", "1"),))

        # Everything else carries over.
        self.assertEqual(r3.name, r.name)
        self.assertIs(r3.decoder, r.decoder)

    def test_has_header(self):
        r = make_request(headers=[("Content-Type", "a/b")])
        self.assertTrue(r.has_header("content-type"))
        self.assertFalse(r.has_header("accept"))

    def test_body(self):
        r = make_request(body=json_body({"a": 1}))
        self.assertEqual(r.body.to_string(), '{"a":1}')

    def test_type_checks(self):
        with self.assertRaises(TypeError):
            Request("X", "GET", "/", decoder=None)

        with self.assertRaises(TypeError):
            make_request(body=b"raw")

        with self.assertRaises(TypeError):
            make_request(headers=[("X-A",)])

        with self.assertRaises(TypeError):
            make_request(query=[("a", 1)])

        with self.assertRaises(TypeError):
            make_request(error_decoder="nope")
