from __future__ import annotations

import json

from unicode_typography import __main__
from unicode_typography.cli import main
from unicode_typography.constants import ELLIPSIS, EMDASH


def test_cli_without_command_prints_help(capsys):
    assert main([]) == 1
    assert "unicode-typography" in capsys.readouterr().err


def test_module_entry_point_uses_cli_main():
    assert __main__.main is main


def test_check_reports_findings(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "App.jsx").write_text("const a = 1;\n<p>wait...</p>;\n", encoding="utf-8")

    assert main(["check", "App.jsx"]) == 1

    out = capsys.readouterr().out
    assert "App.jsx:2:8 [preferEllipsis]" in out


def test_check_clean_tree(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "clean.js").write_text('const a = "wait...";\n', encoding="utf-8")

    assert main(["check", "."]) == 0
    assert "No replacements needed." in capsys.readouterr().out


def test_fix_rewrites_sources(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    src = tmp_path / "src"
    src.mkdir()
    target = src / "App.jsx"
    target.write_text("<div>a--b...</div>;\n", encoding="utf-8")
    vendored = src / "node_modules" / "lib.js"
    vendored.parent.mkdir()
    vendored.write_text("<div>a--b</div>;\n", encoding="utf-8")

    assert main(["fix", "src"]) == 0
    out = capsys.readouterr().out
    assert "2 replacement(s)" in out
    assert "1 file(s) updated." in out
    assert target.read_text(encoding="utf-8") == f"<div>a{EMDASH}b{ELLIPSIS}</div>;\n"
    assert vendored.read_text(encoding="utf-8") == "<div>a--b</div>;\n"

    assert main(["check", "src"]) == 0
    assert "No replacements needed." in capsys.readouterr().out

    assert main(["fix", "src"]) == 0
    assert "files were already compliant" in capsys.readouterr().out


def test_config_file_enables_string_literals(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "app.js").write_text('const a = "wait...";\n', encoding="utf-8")
    config = tmp_path / "typography.json"
    config.write_text(
        json.dumps({"unicode-typography": {"check_string_literals": True}}),
        encoding="utf-8",
    )

    assert main(["fix", "app.js", "--config", str(config)]) == 0
    assert (tmp_path / "app.js").read_text(encoding="utf-8") == (
        f'const a = "wait{ELLIPSIS}";\n'
    )
    capsys.readouterr()


def test_invalid_config_is_reported(tmp_path, capsys):
    source = tmp_path / "app.js"
    source.write_text("const a = 1;\n", encoding="utf-8")
    config = tmp_path / "bad.json"
    config.write_text(json.dumps({"check_children": "yes"}), encoding="utf-8")

    assert main(["check", str(source), "--config", str(config)]) == 1
    assert "Invalid configuration" in capsys.readouterr().err


def test_missing_config_and_paths(tmp_path, capsys):
    assert main(["check", str(tmp_path / "absent.js")]) == 1
    assert "Path not found" in capsys.readouterr().err

    assert main(["check", str(tmp_path), "--config", str(tmp_path / "none.json")]) == 1
    assert "Configuration not found" in capsys.readouterr().err


def test_parse_errors_fail_the_run(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "broken.js").write_text("const = ;\n", encoding="utf-8")

    assert main(["check", "broken.js"]) == 1
    assert "broken.js:1" in capsys.readouterr().err
    assert main(["fix", "broken.js"]) == 1
    assert "parse error" in capsys.readouterr().err


def test_undecodable_file_does_not_stop_the_run(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.js").write_bytes(b"// caf\xe9\n")
    (tmp_path / "b.jsx").write_text("<p>wait...</p>;\n", encoding="utf-8")

    assert main(["check", "."]) == 1
    captured = capsys.readouterr()
    assert "a.js: read error" in captured.err
    assert "b.jsx:1:8 [preferEllipsis]" in captured.out

    assert main(["fix", "."]) == 1
    captured = capsys.readouterr()
    assert "a.js: read error" in captured.err
    assert "Fixed: b.jsx (1 replacement(s))" in captured.out
    assert (tmp_path / "b.jsx").read_text(encoding="utf-8") == f"<p>wait{ELLIPSIS}</p>;\n"


def test_deeply_nested_file_is_checked_with_its_siblings(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.js").write_text(
        "x = " + " + ".join(['"a"'] * 800) + ";\n", encoding="utf-8"
    )
    (tmp_path / "b.jsx").write_text("<p>wait...</p>;\n", encoding="utf-8")

    assert main(["check", "."]) == 1
    captured = capsys.readouterr()
    assert "b.jsx:1:8 [preferEllipsis]" in captured.out
    assert "a.js" not in captured.out
    assert captured.err == ""


def test_help_mentions_unsupported_syntax(capsys):
    assert main([]) == 1
    assert "TypeScript" in capsys.readouterr().err
