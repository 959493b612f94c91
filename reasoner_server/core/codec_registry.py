"""Codec Registry — selects encoders and decoders by requested media type.

Invariants:
    - Registration order is preserved and immutable after construction
    - Lookup keeps the LAST registered codec whose supports() accepts the media type
    - Lookup returns None when nothing matches and never raises
    - Defaults come from the FIRST registered encoder/decoder
"""

from typing import Iterable, TypeVar

from reasoner_server.core.reasoner_protocols import Decoder, Encoder

_C = TypeVar("_C", Encoder, Decoder)


def _last_match(codecs: tuple[_C, ...], media_type: str | None) -> _C | None:
    found = None
    if media_type is None:
        return found
    for codec in codecs:
        if codec.supports(media_type):
            found = codec
    return found


class CodecRegistry:
    """Read-only collection of encoders and decoders."""

    def __init__(
        self,
        encoders: Iterable[Encoder] = (),
        decoders: Iterable[Decoder] = (),
    ):
        self._encoders: tuple[Encoder, ...] = tuple(encoders)
        self._decoders: tuple[Decoder, ...] = tuple(decoders)

    @property
    def encoders(self) -> tuple[Encoder, ...]:
        return self._encoders

    @property
    def decoders(self) -> tuple[Decoder, ...]:
        return self._decoders

    def find_encoder(self, media_type: str | None) -> Encoder | None:
        return _last_match(self._encoders, media_type)

    def find_decoder(self, media_type: str | None) -> Decoder | None:
        return _last_match(self._decoders, media_type)

    @property
    def default_encoder_media_type(self) -> str | None:
        """Media type of the first registered encoder, used when Accept is absent."""
        return self._encoders[0].media_type if self._encoders else None

    @property
    def default_decoder_media_type(self) -> str | None:
        """Media type of the first registered decoder, used when Content-Type is absent."""
        return self._decoders[0].media_type if self._decoders else None
