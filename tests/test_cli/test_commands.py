"""Tests for the jsongraph CLI commands."""

from __future__ import annotations

import json
import textwrap

import pytest

typer = pytest.importorskip("typer")
pytest.importorskip("rich")

from typer.testing import CliRunner  # noqa: E402

from jsongraph.cli import create_app  # noqa: E402

runner_cli = CliRunner()

DOC = {"name": "Ada", "hobbies": ["chess", {"kind": "music"}], "meta": {}}


@pytest.fixture
def doc_file(tmp_path):
    path = tmp_path / "doc.json"
    path.write_text(json.dumps(DOC))
    return path


def invoke(*args, input=None):
    return runner_cli.invoke(create_app(), list(args), input=input)


class TestBuild:
    def test_table(self, doc_file):
        result = invoke("build", str(doc_file))
        assert result.exit_code == 0, result.output
        assert "3 nodes | 2 edges" in result.output
        assert "root-0" in result.output
        assert "hobbies[1]" in result.output

    def test_json(self, doc_file):
        result = invoke("build", str(doc_file), "--json")
        assert result.exit_code == 0, result.output
        envelope = json.loads(result.output)
        assert envelope["command"] == "build"
        data = envelope["data"]
        assert [n["id"] for n in data["nodes"]] == ["root-0", "node-1", "node-2"]
        assert data["edges"][0]["sourceHandleIndex"] == 0
        assert data["edges"][1]["label"] == "hobbies[1]"

    def test_recurse_empty_flag(self, doc_file):
        result = invoke("build", str(doc_file), "--json", "--recurse-empty")
        data = json.loads(result.output)["data"]
        assert len(data["nodes"]) == 4
        assert data["edges"][-1]["label"] == "meta"

    def test_max_label_chars(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text('"abcdefgh"')
        result = invoke("build", str(path), "--json", "--max-label-chars", "3")
        data = json.loads(result.output)["data"]
        assert data["nodes"][0]["label"]["text"] == '"ab...'

    def test_stdin(self):
        result = invoke("build", "-", "--json", input="[1, 2]")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert [n["id"] for n in data["nodes"]] == ["root-0", "root-1"]
        assert data["edges"] == []

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"a": }')
        result = invoke("build", str(path))
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_deep_document_reports_depth_limit(self, tmp_path):
        path = tmp_path / "deep.json"
        path.write_text('{"a":' * 5000 + "1" + "}" * 5000)
        result = invoke("build", str(path))
        assert result.exit_code == 1
        assert "depth limit" in result.output
        assert "Invalid JSON" not in result.output

    def test_blank_file_is_empty_graph(self, tmp_path):
        path = tmp_path / "blank.json"
        path.write_text("  \n")
        result = invoke("build", str(path), "--json")
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"] == {"nodes": [], "edges": []}

    def test_missing_file(self, tmp_path):
        result = invoke("build", str(tmp_path / "nope.json"))
        assert result.exit_code == 1
        assert "is not a file" in result.output

    def test_config_defaults(self, tmp_path, monkeypatch):
        (tmp_path / "pyproject.toml").write_text(
            textwrap.dedent(
                """
                [tool.jsongraph.build]
                recurse_empty_containers = true
                """
            )
        )
        (tmp_path / "doc.json").write_text('{"e": {}}')
        monkeypatch.chdir(tmp_path)
        result = invoke("build", "doc.json", "--json")
        assert len(json.loads(result.output)["data"]["nodes"]) == 2
        # Flag overrides the project default
        result = invoke("build", "doc.json", "--json", "--inline-empty")
        assert len(json.loads(result.output)["data"]["nodes"]) == 1


class TestLayout:
    def test_positions(self, doc_file):
        result = invoke("layout", str(doc_file))
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        nodes = {n["id"]: n for n in data["nodes"]}
        assert nodes["root-0"]["x"] == 0
        assert nodes["node-1"]["x"] > nodes["root-0"]["x"] + nodes["root-0"]["width"]
        assert data["width"] >= nodes["node-1"]["x"] + nodes["node-1"]["width"]

    def test_output_file(self, doc_file, tmp_path):
        out = tmp_path / "layout.json"
        result = invoke("layout", str(doc_file), "--output", str(out))
        assert result.exit_code == 0, result.output
        assert "Wrote layout output" in result.output
        envelope = json.loads(out.read_text())
        assert envelope["command"] == "layout"
        assert len(envelope["data"]["nodes"]) == 3


class TestInspect:
    def test_tree(self, doc_file):
        result = invoke("inspect", str(doc_file))
        assert result.exit_code == 0, result.output
        assert "3 nodes, 2 edges, 1 roots" in result.output
        assert "hobbies[0]" in result.output
        assert "node-2" in result.output

    def test_max_depth(self, tmp_path):
        path = tmp_path / "deep.json"
        path.write_text(json.dumps({"a": {"b": {"c": {"d": 1}}}}))
        result = invoke("inspect", str(path), "--max-depth", "1")
        assert result.exit_code == 0, result.output
        assert "1 more" in result.output
        assert "node-3" not in result.output

    def test_empty_graph(self):
        result = invoke("inspect", "-", input="[]")
        assert result.exit_code == 0
        assert "(empty graph)" in result.output


class TestApp:
    def test_help(self):
        result = invoke("--help")
        assert result.exit_code == 0
        for command in ("build", "layout", "inspect"):
            assert command in result.output
