from .codec import CompLs, try_compact, try_compact2, try_compact7
from .errors import (
    CompLsError,
    EmptyLineStringError,
    BrokenLineStringError,
    BrokenEncodingError,
)
from .precision import Precision
from .serde import FieldCodec, compls_p2, compls_p7, compls_field, encode_record, decode_record
from .varint import encode_int, decode_int

__all__ = [
    "CompLs",
    "Precision",
    "try_compact",
    "try_compact2",
    "try_compact7",
    "CompLsError",
    "EmptyLineStringError",
    "BrokenLineStringError",
    "BrokenEncodingError",
    "FieldCodec",
    "compls_p2",
    "compls_p7",
    "compls_field",
    "encode_record",
    "decode_record",
    "encode_int",
    "decode_int",
]
