"""Tests for structural link discovery in tree-shaped nodes."""

from __future__ import annotations

import copy

import pytest

from dagnorm.config import NormalizeConfig
from dagnorm.errors import TraversalDepthError
from dagnorm.identifiers import DAG_CBOR_CODE
from dagnorm.models import NodeFormat
from dagnorm.normalize import (
    find_and_replace_dag_cbor_links,
    is_link_marker,
    normalize_dag_cbor,
)
from tests.helpers import FakeResolver, make_cid


def test_discovery_is_pre_order(fake_resolver: FakeResolver) -> None:
    """Keys are visited in order, depth first, with slash-joined paths."""
    value = {
        "x": [{"/": "bafy1"}, {"y": {"/": "bafy2"}}],
        "z": {"/": "bafy3"},
        "w": "bafy4",
    }

    links = find_and_replace_dag_cbor_links(value, "bafy10", resolver=fake_resolver)

    assert [(link.path, link.target) for link in links] == [
        ("x/0", "bafy1"),
        ("x/1/y", "bafy2"),
        ("z", "bafy3"),
        ("w", "bafy4"),
    ]
    assert {(link.size, link.index, link.source) for link in links} == {(0, 0, "bafy10")}


def test_top_level_sequence_paths(fake_resolver: FakeResolver) -> None:
    """Elements of a top-level sequence are addressed by bare indices."""
    links = find_and_replace_dag_cbor_links(
        [{"/": "bafy1"}, ("bafy2",)], "bafy10", resolver=fake_resolver
    )

    assert [link.path for link in links] == ["0", "1/0"]


def test_path_prefix_is_honoured(fake_resolver: FakeResolver) -> None:
    """A starting path prefixes every discovered link path."""
    links = find_and_replace_dag_cbor_links(
        {"a": {"/": "bafy1"}}, "bafy10", "root", resolver=fake_resolver
    )

    assert [link.path for link in links] == ["root/a"]


@pytest.mark.parametrize("value", [None, 1, 2.5, True, b"bafy-bytes", "hello", [], {}])
def test_values_without_links(fake_resolver: FakeResolver, value: object) -> None:
    """Scalars, blobs, plain strings and empty containers yield nothing."""
    assert find_and_replace_dag_cbor_links(value, "bafy10", resolver=fake_resolver) == []


def test_malformed_marker_is_ignored(fake_resolver: FakeResolver) -> None:
    """A marker that does not resolve contributes no link and is left alone."""
    value = {"bad": {"/": "not-a-cid"}, "good": {"/": "bafy1"}}

    links = find_and_replace_dag_cbor_links(value, "bafy10", resolver=fake_resolver)

    assert [link.path for link in links] == ["good"]
    assert value["bad"] == {"/": "not-a-cid"}


def test_marker_with_null_value_is_walked_as_object(fake_resolver: FakeResolver) -> None:
    """``{"/": None}`` is not a link marker."""
    assert not is_link_marker({"/": None})
    assert find_and_replace_dag_cbor_links({"/": None}, "bafy10", resolver=fake_resolver) == []


def test_marker_is_rewritten_to_canonical_string() -> None:
    """Markers holding CID objects, bytes or other bases become base32 strings."""
    first = make_cid(b"one", base="base58btc")
    second = make_cid(b"two")
    third = make_cid(b"three")
    value = {
        "str": {"/": str(first)},
        "bytes": {"/": bytes(second)},
        "cid": {"/": third},
    }

    links = find_and_replace_dag_cbor_links(value, "src")

    assert value == {
        "str": {"/": first.encode("base32")},
        "bytes": {"/": str(second)},
        "cid": {"/": str(third)},
    }
    assert [link.target for link in links] == [
        first.encode("base32"),
        str(second),
        str(third),
    ]


def test_bare_cid_objects_are_links_but_not_rewritten() -> None:
    """CID values outside a marker are links in their own right."""
    child = make_cid(b"child")
    value = {"items": [child, "plain text"]}

    links = find_and_replace_dag_cbor_links(value, "src")

    assert [(link.path, link.target) for link in links] == [("items/0", str(child))]
    assert value["items"][0] is child


def test_copy_before_discovery_preserves_original(fake_resolver: FakeResolver) -> None:
    """Callers that need the original marker shape can walk a deep copy."""
    original = {"a": {"/": "bafy1"}}
    working = copy.deepcopy(original)

    find_and_replace_dag_cbor_links(working, "bafy10", resolver=fake_resolver)

    assert original == {"a": {"/": "bafy1"}}


def test_depth_limit_skips_deep_subtrees(
    fake_resolver: FakeResolver, caplog: pytest.LogCaptureFixture
) -> None:
    """Containers nested past max_depth are skipped with a warning."""
    value = {"a": {"b": {"c": {"/": "bafy1"}}}, "d": {"/": "bafy2"}}

    with caplog.at_level("WARNING", logger="dagnorm.normalize.dag_cbor"):
        links = find_and_replace_dag_cbor_links(
            value, "bafy10", resolver=fake_resolver, max_depth=2
        )

    assert [link.path for link in links] == ["d"]
    assert "max_depth=2" in caplog.text


def test_markers_at_the_depth_limit_are_still_links(fake_resolver: FakeResolver) -> None:
    """Markers are leaves and do not count as containers to descend into."""
    value = {"a": {"b": {"/": "bafy1"}}}

    links = find_and_replace_dag_cbor_links(value, "bafy10", resolver=fake_resolver, max_depth=2)

    assert [link.path for link in links] == ["a/b"]


def test_strict_depth_raises(fake_resolver: FakeResolver) -> None:
    """strict_depth turns the depth limit into an error."""
    value = [[[["bafy1"]]]]

    with pytest.raises(TraversalDepthError) as excinfo:
        find_and_replace_dag_cbor_links(
            value, "bafy10", resolver=fake_resolver, max_depth=3, strict_depth=True
        )

    assert excinfo.value.path == "0/0/0"
    assert excinfo.value.max_depth == 3


def test_very_deep_values_do_not_exhaust_the_stack(fake_resolver: FakeResolver) -> None:
    """The walk is iterative, so depth is bounded only by configuration."""
    value: object = {"/": "bafy1"}
    for _ in range(5000):
        value = [value]

    links = find_and_replace_dag_cbor_links(
        value, "bafy10", resolver=fake_resolver, max_depth=10_000
    )

    assert len(links) == 1
    assert links[0].path == "/".join(["0"] * 5000)


def test_normalize_dag_cbor_builds_record(fake_resolver: FakeResolver) -> None:
    """The record keeps the given cid, the codec and the summed link size."""
    value = {"a": {"/": "bafy1"}, "b": [{"/": "bafy2"}]}

    result = normalize_dag_cbor(
        value, "bafy10", DAG_CBOR_CODE, resolver=fake_resolver, config=NormalizeConfig()
    )

    assert result.cid == "bafy10"
    assert result.type == DAG_CBOR_CODE
    assert result.format is NodeFormat.UNKNOWN
    assert result.size == sum(link.size for link in result.links) == 0
    assert len(result.links) == 2
    assert result.data is value


def test_normalize_dag_cbor_does_not_recanonicalize_cid() -> None:
    """The node CID is reported exactly as requested."""
    cid = make_cid(b"node", base="base58btc")

    result = normalize_dag_cbor({}, str(cid), DAG_CBOR_CODE)

    assert result.cid == str(cid)
    assert result.cid != cid.encode("base32")
