"""
JSON 樹攤平 — tokens / brand / ui-kit → [FlatEntry(path, value, type)]

$value 包裝：內容是一般物件（非 {value, unit}）時展開成多個子項，
例如 typography 樣式的 fontFamily / fontSize；否則整個內容就是葉值。
"$" 開頭的 metadata 鍵一律略過。
"""

from dataclasses import dataclass
from typing import Any, Optional

from .models import RecursicaInput, TransformOptions
from .names import path_to_var_name
from .scope import LAYERS
from .values import Literal, TokenValue, parse_value


@dataclass(frozen=True)
class FlatEntry:
    path: str
    value: Optional[TokenValue]
    type: Optional[str] = None


def _join(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def _is_dimension_shape(obj: Any) -> bool:
    return isinstance(obj, dict) and "value" in obj and "unit" in obj


def collect_vars(node: Any, prefix: str, out: list) -> None:
    if node is None:
        return
    if isinstance(node, (str, int, float)) and not isinstance(node, bool):
        out.append(FlatEntry(prefix, parse_value(node)))
        return
    if not isinstance(node, dict):
        return
    if _is_dimension_shape(node):
        out.append(FlatEntry(prefix, parse_value(node)))
        return

    if "$value" in node:
        inner = node["$value"]
        if isinstance(inner, dict) and not _is_dimension_shape(inner):
            for key, child in inner.items():
                if not key.startswith("$"):
                    collect_vars(child, _join(prefix, key), out)
            return
        token_type = node.get("$type") if isinstance(node.get("$type"), str) else None
        out.append(FlatEntry(prefix, parse_value(inner), token_type))
        return

    for key, child in node.items():
        if not key.startswith("$"):
            collect_vars(child, _join(prefix, key), out)


def _unwrap(doc: Optional[dict], key: str) -> Optional[dict]:
    """接受 {"tokens": {...}} 這種外包一層的匯出格式。"""
    if isinstance(doc, dict) and doc.get(key) is not None:
        return doc[key]
    return doc


def flatten_input(data: RecursicaInput, options: Optional[TransformOptions] = None) -> list:
    options = options or TransformOptions()
    out: list[FlatEntry] = []
    tokens = _unwrap(data.tokens, "tokens")
    brand = _unwrap(data.brand, "brand")
    uikit = _unwrap(data.uikit, "ui-kit")

    if tokens is not None:
        collect_vars(tokens, "tokens", out)
    if brand is not None:
        collect_vars(brand, "brand", out)
    if uikit is not None:
        collect_vars(uikit, "ui-kit", out)

    if isinstance(brand, dict):
        inject_elevation_composites(brand, out)
    inject_dark_layer_interactive_aliases(out, options.on_tone_palette)
    return out


def inject_elevation_composites(brand: dict, out: list) -> None:
    """每個 elevation 另外產生一個組好的 box-shadow 變數，個別部位仍可覆寫。"""
    themes = brand.get("themes")
    if not isinstance(themes, dict):
        return
    for theme, theme_data in themes.items():
        elevations = theme_data.get("elevations") if isinstance(theme_data, dict) else None
        if not isinstance(elevations, dict):
            continue
        for name, elevation in elevations.items():
            parts = elevation.get("$value") if isinstance(elevation, dict) else None
            if not isinstance(parts, dict):
                continue
            base = f"brand.themes.{theme}.elevations.{name}"
            composite = " ".join(
                f"var({path_to_var_name(f'{base}.{part}')})"
                for part in ("x", "y", "blur", "spread", "color")
            )
            out.append(FlatEntry(base, Literal(composite)))


def inject_dark_layer_interactive_aliases(out: list, on_tone_palette: str = "palette-1") -> None:
    """
    dark theme 的 layer 互動元素寫的是 color / hover-color，
    ui-kit 則使用 light 的語意名稱 tone / on-tone / tone-hover / on-tone-hover。
    語意名稱不存在時補上指向原值的參照。
    """
    paths = {entry.path for entry in out}
    for layer in LAYERS:
        base = f"brand.themes.dark.layers.layer-{layer}.elements.interactive"
        has_color = f"{base}.color" in paths
        has_hover = f"{base}.hover-color" in paths
        if f"{base}.tone" in paths or not (has_color or has_hover):
            continue
        if has_color:
            out.append(FlatEntry(f"{base}.tone", parse_value(f"{{{base}.color}}")))
        if has_hover:
            out.append(FlatEntry(f"{base}.tone-hover", parse_value(f"{{{base}.hover-color}}")))
        out.append(FlatEntry(
            f"{base}.on-tone",
            parse_value(f"{{brand.palettes.{on_tone_palette}.default.color.on-tone}}"),
        ))
        out.append(FlatEntry(
            f"{base}.on-tone-hover",
            parse_value(f"{{brand.palettes.{on_tone_palette}.600.color.on-tone}}"),
        ))
