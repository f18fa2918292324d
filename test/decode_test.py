#!/usr/bin/env python
import json
from unittest import TestCase

from awssigner.body import json_body
from awssigner.decode import (
    AWSAppError, BodyDecoder, ConstantDecoder, FullDecoder, JsonBodyDecoder,
    JsonFullDecoder, Response, aws_app_error_decoder)
from awssigner.exc import DecodeError

class Responses(TestCase):
    def test_classification(self):
        self.assertTrue(Response(200).is_good)
        self.assertTrue(Response(204).is_good)
        self.assertTrue(Response(299).is_good)
        self.assertFalse(Response(199).is_good)
        self.assertFalse(Response(300).is_good)
        self.assertFalse(Response(404).is_good)

    def test_headers_lowercased(self):
        r = Response(200, {"X-Amzn-RequestId": "abc"}, b"hi")
        self.assertEqual(r.headers, {"x-amzn-requestid": "abc"})
        self.assertEqual(r.text, "hi")

class Decoders(TestCase):
    def test_full_decoder_sees_everything(self):
        seen = []

        def fn(status, headers, text):
            seen.append((status, headers, text))
            return "ok"

        d = FullDecoder(fn)
        self.assertEqual(d.decode(Response(404, {"A": "b"}, b"body")), "ok")
        self.assertEqual(seen, [(404, {"a": "b"}, "body")])

    def test_full_decoder_bad_body(self):
        def fn(status, headers, text):
            raise ValueError("nope")

        with self.assertRaises(DecodeError) as cm:
            FullDecoder(fn).decode(Response(200, {}, b"x"))
        self.assertFalse(cm.exception.is_bad_status)
        self.assertEqual(cm.exception.message, "nope")

    def test_json_full_decoder(self):
        d = JsonFullDecoder(lambda status, headers, payload: (status, payload))
        self.assertEqual(d.decode(Response(201, {}, b'{"a":1}')),
                         (201, {"a": 1}))
        self.assertEqual(d.decode(Response(204, {}, b"")), (204, None))

        with self.assertRaises(DecodeError):
            d.decode(Response(200, {}, b"{not json"))

    def test_body_decoder_good(self):
        self.assertEqual(BodyDecoder(str.upper).decode(Response(200, {}, b"x")),
                         "X")

    def test_body_decoder_never_sees_bad_status(self):
        calls = []
        d = BodyDecoder(calls.append)

        with self.assertRaises(DecodeError) as cm:
            d.decode(Response(404, {}, b"not found"))
        self.assertTrue(cm.exception.is_bad_status)
        self.assertEqual(cm.exception.status_code, 404)
        self.assertEqual(calls, [])

    def test_json_body_decoder_round_trip(self):
        value = {"Items": [{"id": 1}, {"id": 2}], "Count": 2}
        body = json_body(value)
        response = Response(200, {}, body.to_bytes())
        self.assertEqual(JsonBodyDecoder().decode(response), value)
        self.assertEqual(
            JsonBodyDecoder(lambda p: p["Count"]).decode(response), 2)

    def test_json_body_decoder_missing_key(self):
        with self.assertRaises(DecodeError):
            JsonBodyDecoder(lambda p: p["Missing"]).decode(
                Response(200, {}, b"{}"))

    def test_constant_decoder(self):
        d = ConstantDecoder("done")
        self.assertEqual(d.decode(Response(200, {}, b"ignored")), "done")

        with self.assertRaises(DecodeError) as cm:
            d.decode(Response(500))
        self.assertEqual(cm.exception.status_code, 500)

class AppErrors(TestCase):
    def test_json_error(self):
        body = json.dumps({
            "__type": "com.amazonaws.dynamodb.v20120810#ResourceNotFoundException",
            "message": "Requested resource not found"}).encode("utf-8")
        self.assertEqual(
            aws_app_error_decoder(Response(400, {}, body)),
            AWSAppError("ResourceNotFoundException",
                        "Requested resource not found", 400))

    def test_json_error_capital_message(self):
        body = b'{"__type": "ValidationException", "Message": "bad"}'
        self.assertEqual(
            aws_app_error_decoder(Response(400, {}, body)),
            AWSAppError("ValidationException", "bad", 400))

    def test_xml_error(self):
        body = (b'<ErrorResponse xmlns="https://sts.amazonaws.com/doc/2011-06-15/">'
                b'<Error><Type>Sender</Type><Code>InvalidAction</Code>'
                b'<Message>Could not find operation</Message></Error>'
                b'<RequestId>abc</RequestId></ErrorResponse>')
        self.assertEqual(
            aws_app_error_decoder(Response(400, {}, body)),
            AWSAppError("InvalidAction", "Could not find operation", 400))

    def test_header_error_type(self):
        r = Response(404, {"x-amzn-ErrorType": "ResourceNotFoundException:http://internal"}, b"")
        self.assertEqual(
            aws_app_error_decoder(r),
            AWSAppError("ResourceNotFoundException", None, 404))

    def test_non_string_error_type(self):
        self.assertIsNone(aws_app_error_decoder(
            Response(400, {}, b'{"__type": 123, "message": "x"}')))
        self.assertIsNone(aws_app_error_decoder(
            Response(400, {}, b'{"code": {"nested": true}}')))

    def test_unrecognized(self):
        self.assertIsNone(aws_app_error_decoder(Response(404, {}, b"Not Found")))
        self.assertIsNone(aws_app_error_decoder(Response(500, {}, b"{bad")))
        self.assertIsNone(aws_app_error_decoder(Response(500, {}, b"<bad")))
        self.assertIsNone(aws_app_error_decoder(Response(500, {}, b"[1, 2]")))
        self.assertIsNone(aws_app_error_decoder(Response(200, {}, b'{"__type": "X"}')))
