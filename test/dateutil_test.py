#!/usr/bin/env python
from datetime import datetime, timedelta
from unittest import TestCase

from pytz import UTC, FixedOffset

from awssigner.dateutil import (
    TimestampFormat, format_amz_timestamp, format_timestamp, parse_iso8601,
    parse_rfc2282, parse_timestamp)

when = datetime(2015, 8, 30, 12, 36, 0, tzinfo=UTC)

class Parse(TestCase):
    def test_iso8601(self):
        self.assertEqual(parse_iso8601("20150830T123600Z"), when)
        self.assertEqual(parse_iso8601("2015-08-30T12:36:00Z"), when)
        self.assertEqual(parse_iso8601("2015-08-30T05:36:00-07:00"), when)
        self.assertEqual(parse_iso8601("2015-08-30 123600.123z"), when)

    def test_iso8601_invalid(self):
        self.assertIsNone(parse_iso8601("20151008T999999Z"))
        self.assertIsNone(parse_iso8601("2015-02-31T00:00:00Z"))
        self.assertIsNone(parse_iso8601("yesterday"))

    def test_rfc2282(self):
        self.assertEqual(parse_rfc2282("Sun, 30 Aug 2015 12:36:00 GMT"), when)
        self.assertEqual(parse_rfc2282("30 Aug 2015 14:36:00 +0200"), when)
        self.assertEqual(parse_rfc2282("Sat, 30 Aug 2015 12:36:00 +0000"),
                         when)

    def test_rfc2282_invalid(self):
        self.assertIsNone(parse_rfc2282("2015-08-30T12:36:00Z"))
        self.assertIsNone(parse_rfc2282("31 Feb 2015 12:36:00 GMT"))

class Format(TestCase):
    def test_amz_timestamp(self):
        self.assertEqual(format_amz_timestamp(when), "20150830T123600Z")

    def test_amz_timestamp_converts_to_utc(self):
        local = when.astimezone(FixedOffset(-420))
        self.assertEqual(format_amz_timestamp(local), "20150830T123600Z")

    def test_amz_timestamp_naive_is_utc(self):
        self.assertEqual(
            format_amz_timestamp(datetime(2015, 8, 30, 12, 36)),
            "20150830T123600Z")

    def test_formats(self):
        self.assertEqual(format_timestamp(when, TimestampFormat.ISO8601),
                         "2015-08-30T12:36:00Z")
        self.assertEqual(format_timestamp(when, TimestampFormat.RFC822),
                         "Sun, 30 Aug 2015 12:36:00 GMT")
        self.assertEqual(format_timestamp(when, TimestampFormat.UNIX),
                         "1440938160")

    def test_parse_formats(self):
        for fmt in TimestampFormat:
            self.assertEqual(
                parse_timestamp(format_timestamp(when, fmt), fmt), when)

        self.assertIsNone(parse_timestamp("soon", TimestampFormat.UNIX))

    def test_unix_drops_fraction(self):
        self.assertEqual(
            format_timestamp(when + timedelta(milliseconds=900),
                             TimestampFormat.UNIX),
            "1440938160")

    def test_bad_format(self):
        with self.assertRaises(TypeError):
            format_timestamp(when, "iso8601")
