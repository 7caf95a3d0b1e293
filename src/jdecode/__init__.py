"""jdecode package root."""

from jdecode.decoder import (
    NO_MATCH_MESSAGE,
    Decoder,
    Lazy,
    apply,
    array,
    at,
    bool_,
    curry,
    dict_,
    fail,
    field,
    flat_map,
    float_,
    index,
    int_,
    lazy,
    list_,
    map_,
    maybe,
    null,
    nullable,
    one_of,
    pure,
    string,
)
from jdecode.exceptions import ConfigError, JDecodeError, LazyCycleError, UnwrapError
from jdecode.result import Err, Ok, Result
from jdecode.runner import (
    DecodeError,
    DecodeTypeError,
    ParseError,
    decode_path,
    decode_string,
    decode_unsafe,
    decode_value,
)
from jdecode.validators import iso_date, optional, required

__all__ = [
    "__version__",
    "ConfigError",
    "DecodeError",
    "DecodeTypeError",
    "Decoder",
    "Err",
    "JDecodeError",
    "Lazy",
    "LazyCycleError",
    "NO_MATCH_MESSAGE",
    "Ok",
    "ParseError",
    "Result",
    "UnwrapError",
    "apply",
    "array",
    "at",
    "bool_",
    "curry",
    "decode_path",
    "decode_string",
    "decode_unsafe",
    "decode_value",
    "dict_",
    "fail",
    "field",
    "flat_map",
    "float_",
    "index",
    "int_",
    "iso_date",
    "lazy",
    "list_",
    "map_",
    "maybe",
    "null",
    "nullable",
    "one_of",
    "optional",
    "pure",
    "required",
    "string",
]

__version__ = "0.1.0"
