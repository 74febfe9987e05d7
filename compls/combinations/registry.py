"""
Registry of named codecs.

A line string buffer does not record its precision, so a stream can only be
read back by the decoder built for the encoder that wrote it. Each codec
therefore registers its encoder and decoder together under one name.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Type

from ..decoder import LineStringDecoder
from ..encoder import LineStringEncoder
from ..precision import Precision


@dataclass
class CodecEntry:
    """
    Encoder and decoder factories of one codec.

    Attributes:
        name: Name used on the command line.
        encoder_factory: Builds a LineStringEncoder from an encoder config.
        decoder_factory: Builds a LineStringDecoder from a decoder config.
        encoder_config_class: Dataclass accepted by `encoder_factory`.
        decoder_config_class: Dataclass accepted by `decoder_factory`.
        precision: Fixed precision of the codec, or None if it is read from
            the configs.
        description: One line shown in the CLI help.
    """
    name: str
    encoder_factory: Callable[[Any], LineStringEncoder]
    decoder_factory: Callable[[Any], LineStringDecoder]
    encoder_config_class: Type
    decoder_config_class: Type
    precision: Optional[Precision] = None
    description: str = ""

    def build_pair(self, encoder_config: Any, decoder_config: Any) -> Tuple[LineStringEncoder, LineStringDecoder]:
        """
        Build an encoder and the decoder that reads its output.

        Raises:
            ValueError: If the two configs lead to different precisions.
        """
        encoder = self.encoder_factory(encoder_config)
        decoder = self.decoder_factory(decoder_config)
        if encoder.precision != decoder.precision:
            raise ValueError(
                f"{self.name}: encoder precision {encoder.precision.name} "
                f"does not match decoder precision {decoder.precision.name}"
            )
        return encoder, decoder


CODECS: Dict[str, CodecEntry] = {}


def register_codec(entry: CodecEntry) -> CodecEntry:
    """Register a codec under `entry.name`, replacing any previous one."""
    CODECS[entry.name] = entry
    return entry
