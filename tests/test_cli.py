"""
CLI 測試：export / validate / name 子命令與結束碼。
"""
import argparse
import json
from unittest.mock import MagicMock, patch

import pytest

from conftest import BRAND, TOKENS, UIKIT

from recursica_forge import __version__
from recursica_forge.cli import _debounce_seconds, _watch_dirs, main
from recursica_forge.config import DEFAULT_DEBOUNCE


@pytest.fixture
def input_files(tmp_path):
    paths = {}
    for key, doc in (("tokens", TOKENS), ("brand", BRAND), ("uikit", UIKIT)):
        p = tmp_path / f"{key}.json"
        p.write_text(json.dumps(doc), encoding="utf-8")
        paths[key] = str(p)
    return paths


def run(tmp_path, *argv) -> int:
    return main(["--config", str(tmp_path / "no-config.json"), *argv])


class TestExportCommand:
    def test_export_writes_all_files(self, tmp_path, input_files, capsys):
        out = tmp_path / "export"
        code = run(tmp_path, "export",
                   "--tokens", input_files["tokens"],
                   "--brand", input_files["brand"],
                   "--uikit", input_files["uikit"],
                   "--output", str(out))
        assert code == 0
        assert sorted(p.name for p in out.iterdir()) == [
            "recursica_brand.json",
            "recursica_tokens.json",
            "recursica_ui-kit.json",
            "recursica_variables_scoped.css",
            "recursica_variables_specific.css",
        ]
        assert "✅" in capsys.readouterr().out

    def test_export_format_subset(self, tmp_path, input_files):
        out = tmp_path / "export"
        code = run(tmp_path, "export", "--tokens", input_files["tokens"],
                   "--format", "specific", "--output", str(out))
        assert code == 0
        assert [p.name for p in out.iterdir()] == ["recursica_variables_specific.css"]

    def test_export_uses_config_input(self, tmp_path, input_files):
        out = tmp_path / "from-config"
        cfg = tmp_path / "recursica.config.json"
        cfg.write_text(json.dumps({
            "input": {"tokens": input_files["tokens"]},
            "export": {"outputDir": str(out), "formats": ["json"]},
        }), encoding="utf-8")
        assert main(["--config", str(cfg), "export"]) == 0
        assert (out / "recursica_tokens.json").exists()

    def test_validation_failure_writes_nothing(self, tmp_path, capsys):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"tokens": {"a": {"$value": "{tokens.missing}"}}}), encoding="utf-8")
        out = tmp_path / "export"
        code = run(tmp_path, "export", "--tokens", str(bad), "--output", str(out))
        assert code == 1
        assert not out.exists()
        output = capsys.readouterr().out
        assert "❌" in output
        assert "tokens.a" in output

    def test_no_input(self, tmp_path, capsys):
        assert run(tmp_path, "export") == 1
        assert "❌" in capsys.readouterr().out

    def test_missing_input_file(self, tmp_path, capsys):
        assert run(tmp_path, "export", "--tokens", str(tmp_path / "nope.json")) == 1
        assert "❌" in capsys.readouterr().out


class TestValidateCommand:
    def test_valid(self, tmp_path, input_files, capsys):
        code = run(tmp_path, "validate",
                   "--tokens", input_files["tokens"],
                   "--brand", input_files["brand"],
                   "--uikit", input_files["uikit"])
        assert code == 0
        assert "✅ OK" in capsys.readouterr().out
        assert not (tmp_path / "recursica-export").exists()

    def test_missing_layers(self, tmp_path, input_files, capsys):
        uikit = json.loads(json.dumps(UIKIT))
        del uikit["ui-kit"]["components"]["button"]["colors"]["layer-3"]
        p = tmp_path / "uikit-bad.json"
        p.write_text(json.dumps(uikit), encoding="utf-8")
        code = run(tmp_path, "validate",
                   "--tokens", input_files["tokens"],
                   "--brand", input_files["brand"],
                   "--uikit", str(p))
        assert code == 1
        out = capsys.readouterr().out
        assert "ui-kit.components.button.colors.background" in out
        assert "missing in layer(s) 3" in out


class TestNameCommand:
    def test_path_to_name(self, tmp_path, capsys):
        assert run(tmp_path, "name", "tokens.colors.scale-02.500") == 0
        assert "--recursica_tokens_colors_scale-02_500" in capsys.readouterr().out

    def test_exported_name_to_path(self, tmp_path, capsys):
        assert run(tmp_path, "name", "--", "--recursica_brand_my__palette_tone") == 0
        assert "path:     brand.my_palette.tone" in capsys.readouterr().out

    def test_internal_name(self, tmp_path, capsys):
        assert run(tmp_path, "name", "--", "--recursica-tokens-colors-scale-02-500") == 0
        out = capsys.readouterr().out
        assert "exported: --recursica_tokens_colors_scale-02_500" in out

    def test_unknown_var(self, tmp_path, capsys):
        assert run(tmp_path, "name", "--", "--other-var") == 1


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "recursica-forge" in capsys.readouterr().out


def test_watch_dirs_skip_urls(tmp_path):
    local = tmp_path / "json" / "tokens.json"
    dirs = _watch_dirs({"tokens": str(local), "brand": "https://example.com/brand.json", "uikit": None})
    assert dirs == [str(tmp_path / "json")]


# ─── watch ───────────────────────────────────────────────────────────────────

class TestDebounceSeconds:
    def test_cli_flag_wins(self):
        args = argparse.Namespace(debounce=0.2)
        assert _debounce_seconds(args, {"watch": {"debounce": 5}}) == 0.2

    def test_config_number(self):
        args = argparse.Namespace(debounce=None)
        assert _debounce_seconds(args, {"watch": {"debounce": 3}}) == 3.0

    def test_non_numeric_config_uses_default(self):
        args = argparse.Namespace(debounce=None)
        assert _debounce_seconds(args, {"watch": {"debounce": "fast"}}) == DEFAULT_DEBOUNCE
        assert _debounce_seconds(args, {"watch": {"debounce": True}}) == DEFAULT_DEBOUNCE
        assert _debounce_seconds(args, {"watch": "fast"}) == DEFAULT_DEBOUNCE
        assert _debounce_seconds(args, {}) == DEFAULT_DEBOUNCE


class TestWatchCommand:
    def test_string_debounce_in_config(self, tmp_path, input_files, capsys):
        cfg = tmp_path / "recursica.config.json"
        cfg.write_text(json.dumps({"watch": {"debounce": "fast"}}), encoding="utf-8")
        out = tmp_path / "out"
        with patch("recursica_forge.cli.Observer") as observer_cls, \
                patch("recursica_forge.cli.time.sleep", side_effect=KeyboardInterrupt):
            code = main(["--config", str(cfg), "watch",
                         "--tokens", input_files["tokens"],
                         "--brand", input_files["brand"],
                         "--uikit", input_files["uikit"],
                         "--output", str(out)])
        assert code == 0
        observer = observer_cls.return_value
        handler = observer.schedule.call_args[0][0]
        assert handler.debounce_seconds == DEFAULT_DEBOUNCE
        observer.start.assert_called_once()
        observer.stop.assert_called_once()
        observer.join.assert_called_once()
        # 啟動時先匯出一次
        assert (out / "recursica_variables_scoped.css").exists()
        output = capsys.readouterr().out
        assert "watch.debounce" in output
        assert "👋 Stopping watch..." in output

    def test_handler_reexports(self, tmp_path, input_files):
        out = tmp_path / "out"
        with patch("recursica_forge.cli.Observer") as observer_cls, \
                patch("recursica_forge.cli.time.sleep", side_effect=KeyboardInterrupt), \
                patch("recursica_forge.cli.perform_export") as export:
            run(tmp_path, "watch", "--tokens", input_files["tokens"],
                "--output", str(out), "--debounce", "0")
            handler = observer_cls.return_value.schedule.call_args[0][0]
            event = MagicMock(is_directory=False, src_path=input_files["tokens"])
            handler.on_modified(event)
        assert export.call_count == 2

    def test_url_only_input(self, tmp_path, capsys):
        assert run(tmp_path, "watch", "--tokens", "https://example.com/tokens.json") == 1
        assert "❌" in capsys.readouterr().out


def test_config_formats_string(tmp_path, input_files):
    out = tmp_path / "from-config"
    cfg = tmp_path / "recursica.config.json"
    cfg.write_text(json.dumps({
        "input": {"tokens": input_files["tokens"]},
        "export": {"outputDir": str(out), "formats": "json"},
    }), encoding="utf-8")
    assert main(["--config", str(cfg), "export"]) == 0
    assert sorted(p.name for p in out.iterdir()) == [
        "recursica_brand.json",
        "recursica_tokens.json",
        "recursica_ui-kit.json",
    ]
