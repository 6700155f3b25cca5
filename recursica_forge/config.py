"""設定檔載入與基本驗證."""

import json
from pathlib import Path
from typing import Any

from .models import TransformOptions

DEFAULT_CONFIG_PATH = "recursica.config.json"
DEFAULT_OUTPUT_DIR = "./recursica-export"
DEFAULT_DEBOUNCE = 1.0

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"input", "export", "transform", "watch"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "input": {"tokens", "brand", "uikit"},
    "export": {"outputDir", "formats"},
    "transform": {"strictRefs", "onTonePalette"},
    "watch": {"debounce"},
}

_VALID_FORMATS = {"json", "specific", "scoped"}


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    # 頂層未知欄位
    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    # 各區塊欄位
    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"'{section}' 應為物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    # export.formats 值驗證
    formats = _section(cfg, "export").get("formats")
    if isinstance(formats, str):
        formats = [formats]
    if formats is not None:
        if not isinstance(formats, list):
            _warn(f"export.formats 應為陣列，目前是 {type(formats).__name__}")
        else:
            for fmt in formats:
                if fmt not in _VALID_FORMATS:
                    valid = ", ".join(sorted(_VALID_FORMATS))
                    _warn(f"export.formats '{fmt}' 不在已知值中（{valid}）")

    strict = _section(cfg, "transform").get("strictRefs")
    if strict is not None and not isinstance(strict, bool):
        _warn(f"transform.strictRefs 應為 true/false，目前是 {type(strict).__name__}")

    palette = _section(cfg, "transform").get("onTonePalette")
    if palette is not None and not isinstance(palette, str):
        _warn(f"transform.onTonePalette 應為字串，目前是 {type(palette).__name__}")

    debounce = _section(cfg, "watch").get("debounce")
    if debounce is not None and (isinstance(debounce, bool) or not isinstance(debounce, (int, float))):
        _warn(f"watch.debounce 應為數字（秒），目前是 {type(debounce).__name__}")

    # 本機輸入檔存在性提示（URL 不檢查）
    for key, source in _section(cfg, "input").items():
        if isinstance(source, str) and not source.startswith(("http://", "https://")):
            if not Path(source).exists():
                _warn(f"input.{key} '{source}' 檔案不存在")


def _section(cfg: dict, name: str) -> dict:
    section = cfg.get(name, {})
    return section if isinstance(section, dict) else {}


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        _warn(f"'{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def transform_options_from_config(cfg: dict, strict_refs: bool = False) -> TransformOptions:
    """strict_refs=True（CLI --strict-refs）會覆寫 config。"""
    transform = _section(cfg, "transform")
    strict = transform.get("strictRefs")
    palette = transform.get("onTonePalette")
    return TransformOptions(
        strict_refs=strict_refs or strict is True,
        on_tone_palette=palette if isinstance(palette, str) and palette else "palette-1",
    )
