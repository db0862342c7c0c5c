"""Tests for dagnorm CLI entrypoints."""

from __future__ import annotations

import io
import json
from pathlib import Path
from types import SimpleNamespace

import dag_cbor
import pytest
from rich.console import Console

import dagnorm.main as main
from dagnorm.cli.links import links_command
from dagnorm.codecs import encode_dag_pb, encode_unixfs
from dagnorm.models import UnixFSType
from tests.helpers import make_cid


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)


def _write_cbor_block(tmp_path: Path) -> tuple[Path, str, str]:
    child = make_cid(b"child")
    raw = dag_cbor.encode({"name": "root", "next": child})
    block = tmp_path / "root.block"
    block.write_bytes(raw)
    return block, str(make_cid(raw)), str(child)


def _write_directory_block(tmp_path: Path) -> tuple[Path, str]:
    raw = encode_dag_pb(
        {
            "Data": encode_unixfs(UnixFSType.DIRECTORY),
            "Links": [
                {"Hash": make_cid(b"a", codec="raw"), "Name": "a.txt", "Tsize": 1},
                {"Hash": make_cid(b"b", codec="raw"), "Name": "b.txt", "Tsize": 2},
            ],
        }
    )
    block = tmp_path / "dir.block"
    block.write_bytes(raw)
    return block, str(make_cid(raw, codec="dag-pb"))


def test_normalize_prints_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Without --output the normalized node is printed as JSON."""
    block, cid, child = _write_cbor_block(tmp_path)

    exit_code = main.main(["normalize", str(block), "--cid", cid])

    assert exit_code == 0
    document = json.loads(capsys.readouterr().out)
    assert document["cid"] == cid
    assert document["format"] == "unknown"
    assert document["data"] == {"name": "root", "next": {"/": child}}
    assert document["links"] == [
        {"path": "next", "source": cid, "target": child, "size": 0, "index": 0}
    ]


def test_normalize_writes_output_file(tmp_path: Path) -> None:
    block, cid = _write_directory_block(tmp_path)
    output = tmp_path / "out" / "node.json"

    exit_code = main.main(["normalize", str(block), "--cid", cid, "-o", str(output)])

    assert exit_code == 0
    document = json.loads(output.read_text(encoding="utf-8"))
    assert document["type"] == "directory"
    assert document["format"] == "unixfs"
    assert [link["path"] for link in document["links"]] == ["a.txt", "b.txt"]


def test_normalize_node_link_export(tmp_path: Path) -> None:
    block, cid = _write_directory_block(tmp_path)
    output = tmp_path / "graph.json"

    exit_code = main.main(
        ["normalize", str(block), "--cid", cid, "-f", "node_link", "-o", str(output)]
    )

    assert exit_code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert len(data["edges"]) == 2


def test_node_link_requires_output(tmp_path: Path) -> None:
    block, cid = _write_directory_block(tmp_path)

    assert main.main(["normalize", str(block), "--cid", cid, "-f", "node_link"]) == 1


def test_normalize_honours_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Inline configuration reaches the normalizer."""
    block, cid = _write_directory_block(tmp_path)

    exit_code = main.main(
        ["normalize", str(block), "--cid", cid, "-c", '{"unixfs_detection": false}']
    )

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["format"] == "non-unixfs"


@pytest.mark.parametrize(
    "cid",
    ["not-a-cid", str(make_cid(b"x", codec="git-raw"))],
)
def test_normalize_reports_failures(tmp_path: Path, cid: str) -> None:
    """Unreadable CIDs and unsupported codecs exit with status 1."""
    block = tmp_path / "x.block"
    block.write_bytes(b"x")

    assert main.main(["normalize", str(block), "--cid", cid]) == 1


def test_missing_block_file(tmp_path: Path) -> None:
    cid = str(make_cid())

    assert main.main(["normalize", str(tmp_path / "missing"), "--cid", cid]) == 1


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main.main([])

    assert exit_code == 1
    assert "dagnorm" in capsys.readouterr().out


def test_links_command_renders_table(tmp_path: Path) -> None:
    """The links table lists every link with its path and target."""
    block, cid = _write_directory_block(tmp_path)
    buffer = io.StringIO()
    console = Console(file=buffer, width=200)

    exit_code = links_command(SimpleNamespace(block=str(block), cid=cid, config=None), console)

    assert exit_code == 0
    rendered = buffer.getvalue()
    assert "a.txt" in rendered
    assert "b.txt" in rendered
    assert str(make_cid(b"a", codec="raw")) in rendered
    assert "Total size: 0" in rendered


def test_links_command_failure(tmp_path: Path) -> None:
    console = Console(file=io.StringIO())
    args = SimpleNamespace(block=str(tmp_path / "missing"), cid="not-a-cid", config=None)

    assert links_command(args, console) == 1


def test_normalize_accepts_inline_toml_table(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """An inline config opening with ``[normalize]`` is parsed as TOML."""
    block, cid = _write_directory_block(tmp_path)

    exit_code = main.main(
        ["normalize", str(block), "--cid", cid, "-c", "[normalize]\nunixfs_detection = false\n"]
    )

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["format"] == "non-unixfs"
