from __future__ import annotations

import json

from pathlib import Path

import yaml

from intellicompiler.cli import main


def test_cli_compile_demo_node_text(capsys):
    exit_code = main(["compile", "--language", "go"])
    assert exit_code == 0
    out = capsys.readouterr().out
    assert out.startswith("=== Intelligent Compiler ===")
    assert "Version: 1.21" in out
    assert "Meaning: identifier 'x'" in out
    assert "Base Code:\nvar x any" in out


def test_cli_compile_node_file_json(tmp_path: Path, capsys):
    node_file = tmp_path / "node.yaml"
    node_file.write_text(
        yaml.safe_dump(
            {
                "kind": "function",
                "name": "add",
                "parameters": ["a", "b"],
                "metadata": {"concepts": "true", "overflow_risk": "true"},
                "body": [
                    {
                        "kind": "binary_op",
                        "operator": "+",
                        "left": {"kind": "identifier", "name": "a"},
                        "right": {"kind": "identifier", "name": "b"},
                    }
                ],
            }
        )
    )
    exit_code = main(
        ["--llm-provider", "echo", "compile", "--node", str(node_file), "-l", "cpp", "--format", "json"]
    )
    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["version"] == "20"
    assert data["meaning"] == "function 'add'"
    assert data["base_code"] == "auto add(a, b) {\nauto a; + auto b;\n}"
    assert data["security_findings"][0] == "INTEGER_OVERFLOW"


def test_cli_reports_bad_input(tmp_path: Path, capsys):
    assert main(["compile", "--language", "go", "--node", str(tmp_path / "nope.yaml")]) == 1
    bad = tmp_path / "bad.yaml"
    bad.write_text("kind: identifier\n")
    assert main(["compile", "--language", "go", "--node", str(bad)]) == 1
    assert main(["--config", str(tmp_path / "missing.yaml"), "compile", "-l", "go"]) == 1
    assert "error:" in capsys.readouterr().err


def test_cli_transpile_dir(tmp_path: Path, capsys):
    src = tmp_path / "src"
    (src / ".git").mkdir(parents=True)
    (src / "a.rs").write_text("fn main() {}\n")
    (src / ".git" / "ignored.rs").write_text("fn hidden() {}\n")
    (src / "notes.md").write_text("notes\n")
    out = tmp_path / "dest"
    summary_file = tmp_path / "reports" / "summary.json"

    exit_code = main(
        [
            "transpile-dir",
            str(src),
            str(out),
            "--language",
            "go",
            "--workers",
            "2",
            "--summary",
            str(summary_file),
        ]
    )

    assert exit_code == 0
    assert sorted(p.name for p in out.iterdir()) == ["a.rs.go"]
    assert (out / "a.rs.go").read_text().startswith("LLM_OUTPUT(Transpile this file")
    summary = json.loads(summary_file.read_text())
    assert summary["converted"] == [
        {"source": str(src / "a.rs"), "output": str(out / "a.rs.go")}
    ]
    assert json.loads(capsys.readouterr().out) == summary


def test_cli_transpile_dir_failures(tmp_path: Path, capsys):
    assert main(["transpile-dir", str(tmp_path / "missing"), str(tmp_path / "o"), "-l", "go"]) == 1
    src = tmp_path / "src"
    src.mkdir()
    (src / "bad.rs").write_bytes(b"\xff\xfe")
    assert main(["transpile-dir", str(src), str(tmp_path / "o"), "-l", "go"]) == 2
