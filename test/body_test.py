#!/usr/bin/env python
from hashlib import sha256
import json
from unittest import TestCase

from awssigner.body import (
    EmptyBody, JsonBody, StringBody, empty_body, json_body, string_body)
from awssigner.service import Protocol, Service, Signer

dynamodb = Service.define_regional(
    "dynamodb", "2012-08-10", Protocol.JSON, Signer.SIGN_V4, "us-east-1")
lambda_ = Service.define_regional(
    "lambda", "2015-03-31", Protocol.REST_JSON, Signer.SIGN_V4, "us-east-1")

class Bodies(TestCase):
    def test_empty(self):
        body = empty_body()
        self.assertIsInstance(body, EmptyBody)
        self.assertEqual(body.to_bytes(), b"")
        self.assertEqual(body.to_string(), "")
        self.assertIsNone(body.content_type(dynamodb))
        self.assertEqual(body.to_transport(dynamodb), (b"", None))
        self.assertEqual(body.payload_hash(), sha256(b"").hexdigest())

    def test_json_compact(self):
        body = json_body({"TableName": "t", "Limit": 1})
        self.assertIsInstance(body, JsonBody)
        self.assertEqual(body.to_string(), '{"TableName":"t","Limit":1}')
        self.assertEqual(body.to_bytes(), b'{"TableName":"t","Limit":1}')

    def test_json_content_type(self):
        body = json_body({})
        self.assertEqual(body.content_type(dynamodb),
                         "application/x-amz-json-1.0")
        self.assertEqual(
            body.content_type(dynamodb.with_json_version("1.1")),
            "application/x-amz-json-1.1")
        self.assertEqual(body.content_type(lambda_), "application/json")

    def test_json_round_trip(self):
        value = {"a": [1, 2.5, None, True], "b": {"c": "é"}}
        self.assertEqual(json.loads(json_body(value).to_string()), value)

    def test_json_unserializable(self):
        with self.assertRaises(TypeError):
            json_body(object())

    def test_string(self):
        body = string_body("text/plain; charset=utf-8", "héllo")
        self.assertIsInstance(body, StringBody)
        self.assertEqual(body.to_bytes(), "héllo".encode("utf-8"))
        self.assertEqual(
            body.to_transport(dynamodb),
            ("héllo".encode("utf-8"), "text/plain; charset=utf-8"))

    def test_string_type_checks(self):
        with self.assertRaises(TypeError):
            string_body(None, "x")

        with self.assertRaises(TypeError):
            string_body("text/plain", b"x")

    def test_equality(self):
        self.assertEqual(empty_body(), empty_body())
        self.assertEqual(json_body([1]), json_body([1]))
        self.assertNotEqual(json_body([1]), string_body("a/b", "[1]"))
