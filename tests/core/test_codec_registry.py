"""Codec Registry — tests for media-type selection of encoders and decoders.

Tests cover:
    - Matching decoder returned for a supported media type
    - None for an unsupported or missing media type
    - Last matching registration wins
    - Defaults come from the first registration, None when empty
"""

from reasoner_server.core.codec_registry import CodecRegistry
from tests.fakes import JsonCodec, TextCodec


def _registry():
    json_codec = JsonCodec()
    turtle_codec = TextCodec("text/turtle")
    return CodecRegistry(
        encoders=[json_codec, turtle_codec],
        decoders=[json_codec, turtle_codec],
    ), json_codec, turtle_codec


def test_turtle_request_returns_turtle_decoder():
    registry, _, turtle_codec = _registry()
    assert registry.find_decoder("text/turtle") is turtle_codec


def test_json_request_returns_json_encoder():
    registry, json_codec, _ = _registry()
    assert registry.find_encoder("application/json") is json_codec


def test_unsupported_media_type_returns_none():
    registry, _, _ = _registry()
    assert registry.find_decoder("application/xml") is None
    assert registry.find_encoder("application/xml") is None


def test_missing_media_type_returns_none():
    registry, _, _ = _registry()
    assert registry.find_encoder(None) is None


def test_last_matching_registration_wins():
    first = JsonCodec()
    second = JsonCodec(accepts={"application/json", "application/ld+json"})
    registry = CodecRegistry(encoders=[first, second], decoders=[first, second])
    assert registry.find_encoder("application/json") is second
    assert registry.find_decoder("application/json") is second


def test_later_non_matching_registration_does_not_shadow():
    json_codec = JsonCodec()
    registry = CodecRegistry(encoders=[json_codec, TextCodec()])
    assert registry.find_encoder("application/json") is json_codec


def test_defaults_come_from_first_registration():
    registry = CodecRegistry(
        encoders=[TextCodec("text/turtle"), JsonCodec()],
        decoders=[JsonCodec(), TextCodec("text/turtle")],
    )
    assert registry.default_encoder_media_type == "text/turtle"
    assert registry.default_decoder_media_type == "application/json"


def test_empty_registry_has_no_defaults():
    registry = CodecRegistry()
    assert registry.default_encoder_media_type is None
    assert registry.default_decoder_media_type is None
    assert registry.find_encoder("application/json") is None


def test_registry_keeps_registration_order():
    codecs = [JsonCodec(), TextCodec()]
    registry = CodecRegistry(encoders=iter(codecs))
    assert registry.encoders == tuple(codecs)
    assert registry.decoders == ()
