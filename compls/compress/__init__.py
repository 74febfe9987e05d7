from .zstd import ZstdSerializer, ZstdDeserializer, dumps, loads

__all__ = ["ZstdSerializer", "ZstdDeserializer", "dumps", "loads"]
