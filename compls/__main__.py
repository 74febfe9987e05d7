"""
Command-line interface for compls.

Encodes files of WKT line strings into compressed compact streams and back.

Usage:
    python -m compls encode <codec> input.path=<wkt> output.path=<bin> [overrides]
    python -m compls decode <codec> input.path=<bin> output.path=<wkt> [overrides]

Example:
    python -m compls encode compls7 input.path=routes.wkt output.path=routes.bin
    python -m compls decode compls7 input.path=routes.bin output.path=decoded.wkt output.digits=7

    python -m compls encode compls codec.digits=4 input.path=grid.wkt output.path=grid.bin
    python -m compls decode compls codec.digits=4 input.path=grid.bin output.path=grid.wkt

Hydra options after the codec name:
    --help              Show configuration schema
    --cfg job           Show resolved configuration
"""

import logging
import sys
from dataclasses import dataclass, field, make_dataclass
from operator import attrgetter
from typing import Callable, Iterator, List, NamedTuple, Type

import hydra
from hydra.core.config_store import ConfigStore
from hydra.core.global_hydra import GlobalHydra
from omegaconf import DictConfig

from .combinations import CODECS, CodecEntry
from .io import (
    WktReaderConfig,
    WktWriterConfig,
    BytesReaderConfig,
    BytesWriterConfig,
    build_wkt_reader,
    build_wkt_writer,
    build_bytes_reader,
    build_bytes_writer,
)

logger = logging.getLogger(__name__)


@dataclass
class StreamStats:
    """Running totals of the line strings and bytes that pass through a command."""
    linestrings: int = 0
    points: int = 0
    nbytes: int = 0

    def count_points(self, linestrings: Iterator) -> Iterator:
        for linestring in linestrings:
            logger.info(f"Line string {self.linestrings}: {len(linestring)} points")
            self.linestrings += 1
            self.points += len(linestring)
            yield linestring

    def count_bytes(self, chunks: Iterator[bytes]) -> Iterator[bytes]:
        for chunk in chunks:
            self.nbytes += len(chunk)
            logger.debug(f"Chunk of {len(chunk)} bytes (total: {self.nbytes} bytes)")
            yield chunk

    def summary(self) -> str:
        per_point = self.nbytes / self.points if self.points else 0.0
        return (
            f"{self.linestrings} line strings, {self.points} points, "
            f"{self.nbytes} bytes ({per_point:.2f} bytes/point)"
        )


def do_encode(cfg: DictConfig, codec_name: str) -> None:
    """Encode the WKT file `cfg.input.path` into `cfg.output.path`."""
    encoder = CODECS[codec_name].encoder_factory(cfg.codec)
    reader = build_wkt_reader(cfg.input)
    writer = build_bytes_writer(cfg.output)

    logger.info(f"Encoding {cfg.input.path} -> {cfg.output.path} ({codec_name}, {encoder.precision.name})")
    stats = StreamStats()
    chunks = encoder.encode_stream(stats.count_points(reader.read()))
    writer.write(stats.count_bytes(chunks))
    logger.info(f"Encoded {stats.summary()}")


def do_decode(cfg: DictConfig, codec_name: str) -> None:
    """Decode the stream `cfg.input.path` into the WKT file `cfg.output.path`."""
    decoder = CODECS[codec_name].decoder_factory(cfg.codec)
    reader = build_bytes_reader(cfg.input)
    writer = build_wkt_writer(cfg.output)

    logger.info(f"Decoding {cfg.input.path} -> {cfg.output.path} ({codec_name}, {decoder.precision.name})")
    stats = StreamStats()
    linestrings = decoder.decode_stream(stats.count_bytes(reader.read()))
    writer.write(stats.count_points(linestrings))
    logger.info(f"Decoded {stats.summary()}")


class Command(NamedTuple):
    codec_config: Callable[[CodecEntry], Type]
    input_config: Type
    output_config: Type
    run: Callable[[DictConfig, str], None]


COMMANDS = {
    "encode": Command(attrgetter("encoder_config_class"), WktReaderConfig, BytesWriterConfig, do_encode),
    "decode": Command(attrgetter("decoder_config_class"), BytesReaderConfig, WktWriterConfig, do_decode),
}


def make_config(command: str, codec_name: str) -> Type:
    """Create the config dataclass of `command` for one codec."""
    entry = CODECS[codec_name]
    spec = COMMANDS[command]
    codec_config = spec.codec_config(entry)
    return make_dataclass(
        f"{command.capitalize()}{codec_config.__name__}",
        [
            ("input", spec.input_config, field(default_factory=spec.input_config)),
            ("output", spec.output_config, field(default_factory=spec.output_config)),
            ("codec", codec_config, field(default_factory=codec_config)),
        ],
    )


def run(command: str, codec_name: str, hydra_args: List[str]) -> None:
    """Run `command` under Hydra, with `hydra_args` as overrides."""
    GlobalHydra.instance().clear()
    ConfigStore.instance().store(name="config", node=make_config(command, codec_name))

    @hydra.main(version_base=None, config_path=None, config_name="config")
    def _main(cfg: DictConfig) -> None:
        COMMANDS[command].run(cfg, codec_name)

    sys.argv = [sys.argv[0]] + hydra_args
    _main()


def usage() -> str:
    lines = [
        "Usage: python -m compls <encode|decode> <codec> [overrides]",
        "",
        "Codecs:",
    ]
    for entry in CODECS.values():
        precision = entry.precision.name if entry.precision else "codec.digits"
        lines.append(f"  {entry.name:<10}{precision:<14}{entry.description}")
    lines += ["", "Pass --help after the codec name to list its options."]
    return "\n".join(lines)


def main() -> None:
    """Main entry point for the CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    args = sys.argv[1:]
    if not args or args[0] in ("--help", "-h", "help"):
        print(usage())
        sys.exit(0 if args else 1)

    command = args[0]
    if command not in COMMANDS:
        sys.exit(f"Error: Unknown command '{command}'. Use one of {list(COMMANDS)}.")
    if len(args) < 2 or args[1] not in CODECS:
        sys.exit(f"Error: {command} needs a codec. Available: {list(CODECS)}")

    run(command, args[1], args[2:])


if __name__ == "__main__":
    main()
