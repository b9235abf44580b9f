from __future__ import annotations

from pathlib import Path

import pytest

from intellicompiler.configuration import (
    CompilerSettings,
    TraversalSettings,
    VersionOverride,
    build_compiler_settings,
)
from intellicompiler.exceptions import CompilerConfigError
from intellicompiler.orchestrator import DEFAULT_CONFIG_PATH, load_config


def test_empty_config_uses_builtin_defaults(tmp_path: Path):
    settings = build_compiler_settings({}, config_root=tmp_path)
    assert settings == CompilerSettings()
    assert settings.versions.table["go"] == ("1.18", "1.20", "1.21", "1.22")
    assert settings.versions.overrides[0] == VersionOverride(
        "go", "uses_generics", "1.21"
    )
    assert [rule.name for rule in settings.security.flag_rules] == [
        "POINTER_ARITH",
        "INTEGER_OVERFLOW",
    ]
    assert ".git" in settings.traversal.skip_dirs
    assert settings.llm.timeout_s == 60


def test_packaged_config_matches_defaults():
    config = load_config(DEFAULT_CONFIG_PATH)
    settings = build_compiler_settings(config, config_root=DEFAULT_CONFIG_PATH.parent)
    defaults = CompilerSettings()
    assert settings.versions == defaults.versions
    assert settings.security == defaults.security
    assert settings.traversal.skip_dirs == defaults.traversal.skip_dirs
    assert settings.llm.raw["provider"] == "echo"


def test_overrides_are_normalized(tmp_path: Path):
    prompts = tmp_path / "prompts"
    config = {
        "compiler": {
            "versions": {
                "table": {"Zig": ["0.11", 0.12]},
                "overrides": [{"language": "ZIG", "flag": "async", "version": 0.11}],
            },
            "security": {"rules": [{"name": "UNSAFE", "flag": "unsafe_block"}]},
            "traversal": {
                "extensions": [".RS", "go"],
                "extension_map": {"Zig": ".zig"},
                "skip_dirs": ["generated"],
                "workers": 0,
            },
            "llm": {"provider": "openai", "timeout_s": "15", "prompt_dir": "prompts"},
        }
    }
    settings = build_compiler_settings(config, config_root=tmp_path)
    assert settings.versions.table == {"zig": ("0.11", "0.12")}
    assert settings.versions.overrides == (VersionOverride("zig", "async", "0.11"),)
    assert settings.security.flag_rules[0].flag == "unsafe_block"
    assert settings.traversal.extensions == frozenset({"rs", "go"})
    assert settings.traversal.output_extension("ZIG") == "zig"
    assert settings.traversal.skip_dirs == frozenset({"generated"})
    assert settings.traversal.workers == 1
    assert settings.llm.timeout_s == 15
    assert "prompt_dir" not in settings.llm.raw
    assert settings.llm.prompt_overrides == (prompts.resolve(),)


@pytest.mark.parametrize(
    "compiler_cfg",
    [
        {"versions": {"table": ["go"]}},
        {"versions": {"table": {"go": []}}},
        {"versions": {"overrides": [{"language": "go"}]}},
        {"security": {"rules": [{"name": "X"}]}},
    ],
)
def test_invalid_sections_raise(tmp_path: Path, compiler_cfg):
    with pytest.raises(CompilerConfigError):
        build_compiler_settings({"compiler": compiler_cfg}, config_root=tmp_path)


def test_traversal_extension_checks():
    settings = TraversalSettings()
    assert settings.is_convertible(Path("a.rs"))
    assert settings.is_convertible(Path("B.RS"))
    assert not settings.is_convertible(Path("notes.md"))
    assert not settings.is_convertible(Path("Makefile"))
    assert settings.output_extension("go") == "go"
    assert settings.output_extension("Brainfuck") == "txt"


def test_load_config_errors(tmp_path: Path):
    with pytest.raises(CompilerConfigError):
        load_config(tmp_path / "missing.yaml")
    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n")
    with pytest.raises(CompilerConfigError):
        load_config(bad)
