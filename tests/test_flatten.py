import pytest

from flatjson import Flattener, Pair, TokenError, flatten, iter_pairs, parse
from flatjson.tokens import (
    ARRAY_END,
    ARRAY_START,
    OBJECT_END,
    OBJECT_START,
    key,
    scalar,
)

PERSON = """
{
    "name": "Bob Smith",
    "address": {
        "street": "123 Main Street",
        "city": "Boresville",
        "zipcode": 13943
    },
    "hobbies": ["tennis", "coding", "cooking"]
}
"""


def _pairs(source) -> list[tuple]:
    return [tuple(p) for p in parse(source)]


def _leaf_count(obj, root=True) -> int:
    if isinstance(obj, dict):
        if not obj:
            return 0 if root else 1
        return sum(_leaf_count(v, root=False) for v in obj.values())
    if isinstance(obj, list):
        if not obj:
            return 0 if root else 1
        return sum(_leaf_count(v, root=False) for v in obj)
    return 1


@pytest.mark.parametrize(
    ("document", "expected"),
    [
        ("{}", []),
        ("[]", []),
        ("[true]", [("[0]", True)]),
        ('{"foo": {}}', [("foo", None)]),
        ('{"foo": []}', [("foo", None)]),
        ('{"foo": [1, 2]}', [("foo.[0]", 1), ("foo.[1]", 2)]),
        ('{"foo": {"bar": 1}}', [("foo.bar", 1)]),
        ("[[1], []]", [("[0].[0]", 1), ("[1]", None)]),
        ('[{}, {"a": null}]', [("[0]", None), ("[1].a", None)]),
        (
            '{"a": [{"b": [true, false]}, "x"], "c": "d"}',
            [
                ("a.[0].b.[0]", True),
                ("a.[0].b.[1]", False),
                ("a.[1]", "x"),
                ("c", "d"),
            ],
        ),
    ],
)
def test_parse_scenarios(document: str, expected: list[tuple]):
    assert _pairs(document) == expected


def test_motivating_document_in_order():
    assert _pairs(PERSON) == [
        ("name", "Bob Smith"),
        ("address.street", "123 Main Street"),
        ("address.city", "Boresville"),
        ("address.zipcode", 13943),
        ("hobbies.[0]", "tennis"),
        ("hobbies.[1]", "coding"),
        ("hobbies.[2]", "cooking"),
    ]


@pytest.mark.parametrize(
    ("document", "expected"),
    [
        ('"hello"', [("", "hello")]),
        ("42", [("", 42)]),
        ("null", [("", None)]),
        ("false", [("", False)]),
    ],
)
def test_bare_top_level_scalar_has_empty_key(document: str, expected: list[tuple]):
    assert _pairs(document) == expected


def test_pair_count_matches_leaf_count():
    import json

    doc = {
        "a": [1, [], {}, [2, [3, {}]]],
        "b": {"c": {"d": None}, "e": []},
        "f": "",
    }
    pairs = parse(json.dumps(doc))
    assert len(pairs) == _leaf_count(doc) == 9


def test_index_counts_every_element_type():
    keys = [p.key for p in parse('[1, {"a": 1}, [], "s", null, [0]]')]
    assert keys == ["[0]", "[1].a", "[2]", "[3]", "[4]", "[5].[0]"]


def test_reflattening_flat_map_is_stable():
    import json

    first = parse(PERSON)
    flat = json.dumps({p.key: p.value for p in first})
    assert parse(flat) == first


def test_deep_nesting_grows_path_stack():
    depth = 64
    document = '{"k": ' * depth + "1" + "}" * depth
    pairs = parse(document)
    assert pairs == [Pair(".".join(["k"] * depth), 1)]


def test_deep_nested_arrays():
    depth = 40
    pairs = parse("[" * depth + "]" * depth)
    assert pairs == [Pair(".".join(["[0]"] * (depth - 1)), None)]


@pytest.mark.parametrize(
    "document",
    ['{"a": 1', "[1, 2}", '{"a" 1}', "", "{]", '{"a": [1, 2]', "[1,]"],
)
def test_malformed_input_raises_token_error(document: str):
    with pytest.raises(TokenError):
        parse(document)


def test_malformed_input_returns_no_partial_result():
    result = None
    with pytest.raises(TokenError):
        result = parse('{"a": 1, "b": 2, "c": ')
    assert result is None


def test_flatten_accepts_hand_built_tokens():
    tokens = [
        OBJECT_START,
        key("a"),
        ARRAY_START,
        scalar(1),
        OBJECT_START,
        OBJECT_END,
        ARRAY_END,
        OBJECT_END,
    ]
    assert flatten(tokens) == [Pair("a.[0]", 1), Pair("a.[1]", None)]


@pytest.mark.parametrize(
    "tokens",
    [
        [OBJECT_END],
        [ARRAY_START, OBJECT_END],
        [ARRAY_START, key("a"), ARRAY_END],
        [OBJECT_START, scalar(1), OBJECT_END],
        [OBJECT_START, key("a"), OBJECT_END],
        [OBJECT_START, key("a"), scalar(1)],
        [],
        [scalar(1), scalar(2)],
    ],
)
def test_flatten_rejects_unbalanced_streams(tokens):
    with pytest.raises(TokenError):
        flatten(tokens)


def test_iter_pairs_is_lazy():
    def tokens():
        yield ARRAY_START
        yield scalar("first")
        raise AssertionError("stream read past the first pair")

    assert next(iter_pairs(tokens())) == Pair("[0]", "first")


def test_flattener_feed_reports_completed_pairs():
    flattener = Flattener()
    assert flattener.feed(OBJECT_START) is None
    assert flattener.feed(key("x")) is None
    assert flattener.depth == 1
    assert flattener.feed(ARRAY_START) is None
    assert flattener.feed(ARRAY_END) == Pair("x", None)
    assert flattener.feed(OBJECT_END) is None
    assert flattener.depth == 0
    flattener.close()


def test_independent_flatteners_do_not_share_state():
    one, two = Flattener(), Flattener()
    one.feed(OBJECT_START)
    one.feed(key("a"))
    two.feed(ARRAY_START)
    assert two.feed(scalar(True)) == Pair("[0]", True)
    assert one.feed(scalar(False)) == Pair("a", False)
