"""
Tests for the /ws frame codec.
"""

import json

from models.detection import Detection
from models.frame import ImageData, Ping, Unknown
from protocol.codec import decode, encode, encode_pong


class TestDecode:
    def test_ping(self):
        assert decode("ping") == Ping()

    def test_ping_is_case_sensitive(self):
        assert isinstance(decode("PING"), Unknown)
        assert isinstance(decode("ping "), Unknown)

    def test_image_payload_after_first_comma(self):
        assert decode("data:image/png;base64,AAA") == ImageData("AAA")

    def test_image_without_comma_has_empty_payload(self):
        assert decode("data:image") == ImageData("")
        assert decode("data:image/jpeg;base64") == ImageData("")

    def test_image_payload_keeps_later_commas(self):
        assert decode("data:image/png;base64,AA,BB") == ImageData("AA,BB")

    def test_unknown_text(self):
        frame = decode("hello")
        assert isinstance(frame, Unknown)
        assert frame.raw == "hello"

    def test_prefix_must_be_at_start(self):
        assert isinstance(decode(" data:image/png;base64,AAA"), Unknown)

    def test_non_text_is_unknown(self):
        assert isinstance(decode(b"ping"), Unknown)
        assert isinstance(decode(None), Unknown)

    def test_empty_string_is_unknown(self):
        assert isinstance(decode(""), Unknown)

    def test_decode_is_repeatable(self):
        raw = "data:image/png;base64,QUJD"
        assert decode(raw) == decode(raw)


class TestEncode:
    def test_empty(self):
        assert encode([]) == "[]"

    def test_single_detection_exact_text(self):
        assert encode([Detection(label="cat", confidence=0.9)]) == '[{"class":"cat","confidence":0.9}]'

    def test_order_is_preserved(self):
        dets = [
            Detection("zebra", 0.1),
            Detection("ant", 0.99),
            Detection("moose", 0.5),
        ]
        decoded = json.loads(encode(dets))
        assert [d["class"] for d in decoded] == ["zebra", "ant", "moose"]
        assert [d["confidence"] for d in decoded] == [0.1, 0.99, 0.5]

    def test_accepts_tuple(self):
        assert encode((Detection("fish", 1.0),)) == '[{"class":"fish","confidence":1.0}]'

    def test_pong(self):
        assert encode_pong() == "pong"
