#!/usr/bin/env python3
"""
recursica-forge CLI — Recursica JSON → CSS 變數

  recursica-forge export [--tokens P] [--brand P] [--uikit P] [--output DIR]
  recursica-forge validate                # 只驗證，不寫檔
  recursica-forge watch                   # JSON 變更時自動重新匯出
  recursica-forge name <name-or-path>     # 路徑 / 匯出名稱 / 內部名稱互轉
"""

import argparse
import os
import sys
import time
from typing import Optional

import requests
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from . import __version__
from .config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_DEBOUNCE,
    DEFAULT_OUTPUT_DIR,
    load_config,
    transform_options_from_config,
)
from .css_lint import validate_exported_css
from .errors import TransformValidationError
from .exporter import EXPORT_FORMATS, build_export, load_input, write_export
from .names import (
    INTERNAL_PREFIX,
    PREFIX,
    exported_name_to_path,
    internal_name_to_path,
    internal_to_exported_name,
    path_to_var_name,
)


def _input_sources(args, config: dict) -> dict:
    """CLI 參數優先，其次 config 的 input 區塊。"""
    input_cfg = config.get("input", {}) if isinstance(config.get("input"), dict) else {}
    return {
        "tokens": getattr(args, "tokens", None) or input_cfg.get("tokens"),
        "brand": getattr(args, "brand", None) or input_cfg.get("brand"),
        "uikit": getattr(args, "uikit", None) or input_cfg.get("uikit"),
    }


def _export_settings(args, config: dict) -> tuple:
    export_cfg = config.get("export", {}) if isinstance(config.get("export"), dict) else {}
    output_dir = getattr(args, "output", None) or export_cfg.get("outputDir") or DEFAULT_OUTPUT_DIR
    formats = getattr(args, "format", None) or export_cfg.get("formats") or list(EXPORT_FORMATS)
    return output_dir, formats


def _print_validation_errors(e: TransformValidationError) -> None:
    print(f"   ❌ {len(e.errors)} validation error(s):")
    for err in e.errors:
        print(f"      - {err.path}: {err.message}")


def _build(args, config: dict, formats) -> Optional[list]:
    """讀取 + transform；失敗時印出原因並回傳 None。"""
    sources = _input_sources(args, config)
    if not any(sources.values()):
        print("   ❌ 沒有任何輸入，請使用 --tokens / --brand / --uikit 或在 config 的 input 區塊設定。")
        return None
    options = transform_options_from_config(config, strict_refs=getattr(args, "strict_refs", False))
    try:
        data = load_input(**sources)
        return build_export(data, options, formats)
    except TransformValidationError as e:
        _print_validation_errors(e)
    except requests.RequestException as e:
        print(f"   ❌ 無法取得輸入文件：{e}")
    except (OSError, ValueError) as e:
        print(f"   ❌ {e}")
    return None


def perform_export(args, config: dict) -> bool:
    """Core export logic, shared by export and watch commands."""
    output_dir, formats = _export_settings(args, config)
    print(f"📦 Exporting Recursica variables → {output_dir}")

    files = _build(args, config, formats)
    if files is None:
        return False

    for issue in validate_exported_css(files):
        print(f"   ⚠️  {issue}")

    try:
        written = write_export(files, output_dir)
    except OSError as e:
        print(f"   ❌ 寫檔失敗：{e}")
        return False
    for path in written:
        print(f"   ✅ {path}")
    return True


def cmd_export(args, config: dict) -> int:
    return 0 if perform_export(args, config) else 1


def cmd_validate(args, config: dict) -> int:
    """Validate: 跑兩個 transform 與 CSS 語法檢查，不寫檔."""
    print("🔍 Validating Recursica JSON...")
    files = _build(args, config, ["specific", "scoped"])
    if files is None:
        return 1
    issues = validate_exported_css(files)
    if issues:
        print(f"   ❌ {len(issues)} CSS issue(s):")
        for issue in issues:
            print(f"      - {issue}")
        return 1
    print(f"   ✅ OK ({', '.join(f.filename for f in files)})")
    return 0


_WATCHED_EXTENSIONS = (".json",)


class ChangeHandler(FileSystemEventHandler):
    """檔案變更事件處理器，帶 debounce 防抖。callback 在 watchdog 的執行緒中同步執行。"""

    def __init__(self, callback, debounce: float = DEFAULT_DEBOUNCE):
        self.callback = callback
        self.last_trigger = 0.0
        self.debounce_seconds = debounce

    def on_modified(self, event):
        if event.is_directory:
            return
        if not event.src_path.endswith(_WATCHED_EXTENSIONS):
            return
        current_time = time.time()
        if current_time - self.last_trigger < self.debounce_seconds:
            return
        self.last_trigger = current_time
        print(f"\n🔄 File changed: {event.src_path}")
        self.callback()


def _watch_dirs(sources: dict) -> list:
    """本機輸入檔所在的目錄（URL 不監聽）。"""
    dirs = []
    for source in sources.values():
        if not source or source.startswith(("http://", "https://")):
            continue
        d = os.path.dirname(os.path.abspath(source))
        if d not in dirs:
            dirs.append(d)
    return dirs


def _debounce_seconds(args, config: dict) -> float:
    """--debounce 優先；config 的 watch.debounce 不是數字時（validate_config 已警告）用預設值。"""
    if getattr(args, "debounce", None) is not None:
        return args.debounce
    watch_cfg = config.get("watch", {}) if isinstance(config.get("watch"), dict) else {}
    value = watch_cfg.get("debounce")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_DEBOUNCE
    return float(value)


def cmd_watch(args, config: dict) -> int:
    """Watch: 監聽 JSON 變更並自動重新匯出."""
    watch_dirs = _watch_dirs(_input_sources(args, config))
    if not watch_dirs:
        print("❌ 沒有可監聽的本機輸入檔（URL 輸入無法 watch）。")
        return 1

    debounce = _debounce_seconds(args, config)
    print(f"👀 Watching for changes in: {', '.join(watch_dirs)}")
    print("   Press Ctrl+C to stop.")

    def export_task():
        perform_export(args, config)

    # 初始執行一次 export
    export_task()

    event_handler = ChangeHandler(export_task, debounce=debounce)
    observer = Observer()
    for d in watch_dirs:
        observer.schedule(event_handler, path=d, recursive=False)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\n👋 Stopping watch...")
    finally:
        observer.stop()
        observer.join()
    return 0


def cmd_name(args, config: dict) -> int:
    """Name: JSON 路徑、匯出名稱、內部名稱互轉."""
    value = args.value.strip()
    if value.startswith(PREFIX):
        segments = exported_name_to_path(value)
        print(f"path:     {'.'.join(segments)}")
        print(f"exported: {value}")
        return 0
    if value.startswith(INTERNAL_PREFIX):
        exported = internal_to_exported_name(value)
        if exported is None:
            print(f"❌ 無法辨識的內部變數名稱：{value}")
            return 1
        print(f"path:     {'.'.join(internal_name_to_path(value))}")
        print(f"exported: {exported}")
        return 0
    if value.startswith("--"):
        print(f"❌ 不是 Recursica 變數名稱：{value}")
        return 1
    print(f"path:     {value}")
    print(f"exported: {path_to_var_name(value)}")
    return 0


def _add_input_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--tokens", help="tokens JSON (path or URL)")
    p.add_argument("--brand", help="brand JSON (path or URL)")
    p.add_argument("--uikit", help="ui-kit JSON (path or URL)")
    p.add_argument("--strict-refs", action="store_true", help="Treat known bad refs as errors instead of correcting them")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recursica-forge",
        description="recursica-forge: Recursica JSON → CSS variables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    export_p = sub.add_parser("export", help="Write JSON + CSS export files",
        epilog="Examples:\n  recursica-forge export --tokens recursica_tokens.json --brand recursica_brand.json --uikit recursica_ui-kit.json\n  recursica-forge export --format scoped --output ./dist",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_input_args(export_p)
    export_p.add_argument("--output", "-o", help=f"Output directory (default {DEFAULT_OUTPUT_DIR})")
    export_p.add_argument("--format", action="append", choices=list(EXPORT_FORMATS),
                          help="Restrict output (repeatable)")

    validate_p = sub.add_parser("validate", help="Run transforms and CSS checks without writing")
    _add_input_args(validate_p)

    watch_p = sub.add_parser("watch", help="Re-export when input JSON changes",
        epilog="Examples:\n  recursica-forge watch --tokens json/recursica_tokens.json --brand json/recursica_brand.json",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_input_args(watch_p)
    watch_p.add_argument("--output", "-o", help=f"Output directory (default {DEFAULT_OUTPUT_DIR})")
    watch_p.add_argument("--format", action="append", choices=list(EXPORT_FORMATS),
                         help="Restrict output (repeatable)")
    watch_p.add_argument("--debounce", type=float, help="Seconds between re-exports (default 1.0)")

    name_p = sub.add_parser("name", help="Convert between JSON path and CSS variable names",
        epilog="Examples:\n  recursica-forge name tokens.colors.scale-02.500\n  recursica-forge name -- --recursica_tokens_colors_scale-02_500\n  recursica-forge name -- --recursica-tokens-colors-scale-02-500",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    name_p.add_argument("value", help="JSON path, exported var name or internal var name")

    return parser


def main(argv: Optional[list] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    config = load_config(args.config)
    commands = {
        "export": cmd_export,
        "validate": cmd_validate,
        "watch": cmd_watch,
        "name": cmd_name,
    }
    return commands[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
