from flatjson.encode import (
    SHAPES,
    Encoder,
    convert_array,
    convert_map,
    encode_array,
    encode_map,
    render,
    to_array,
    to_map,
)
from flatjson.errors import EncodingError, FlatJsonError, TokenError
from flatjson.flatten import Flattener, flatten, iter_pairs, parse
from flatjson.pair import Pair
from flatjson.tokens import Token, TokenKind, tokenize

__all__ = [
    "SHAPES",
    "EncodingError",
    "Encoder",
    "FlatJsonError",
    "Flattener",
    "Pair",
    "Token",
    "TokenError",
    "TokenKind",
    "convert_array",
    "convert_map",
    "encode_array",
    "encode_map",
    "flatten",
    "iter_pairs",
    "parse",
    "render",
    "to_array",
    "to_map",
    "tokenize",
]
