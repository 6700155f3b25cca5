"""
Scoped CSS — :root 放實體值，theme / layer 區塊只放別名

  :root                              所有變數，完整路徑名稱（參照都在 root 解析）
  [data-recursica-theme="X"]         通用名稱 → var(root 名稱)，並併入該 theme 的 layer-0
  [data-recursica-theme="X"][data-recursica-layer="N"],
  [data-recursica-theme="X"] [data-recursica-layer="N"]
                                     該 theme + layer 的通用名稱 → var(root 名稱)
  .recursica_brand_typography_<type> 每個 brand.typography 樣式一個 helper class

含 layer 片段的 ui-kit 變數在 root 上每個 (theme, layer) 各有一個實體值；
JSON 必須為 layer 0~3 全部提供值，缺漏視為驗證錯誤。
"""

import re
from typing import Optional

from .errors import ErrorCollector
from .flattener import flatten_input
from .formatter import ValueFormatter
from .models import ExportFile, RecursicaInput, TransformOptions
from .names import PREFIX, path_to_var_name
from .resolver import ReferenceResolver
from .scope import (
    LAYERS,
    THEMES,
    Scope,
    get_canonical_uikit_path,
    get_layer_from_uikit_path,
    get_scope,
    is_layer_specific_uikit_path,
    layer_specific_root_name,
    path_to_scoped_var_name,
    root_name_from_canonical,
    root_name_to_canonical,
)
from .specific import TRANSFORM_VERSION

FILENAME = "recursica_variables_scoped.css"

# brand.typography 的 $value 鍵（camelCase）→ CSS 屬性
TYPOGRAPHY_JSON_TO_CSS_PROP = {
    "fontFamily": "font-family",
    "fontSize": "font-size",
    "fontWeight": "font-weight",
    "fontStyle": "font-style",
    "letterSpacing": "letter-spacing",
    "lineHeight": "line-height",
    "textCase": "text-transform",
    "textDecoration": "text-decoration",
}
BRAND_TYPOGRAPHY_VAR_PREFIX = PREFIX + "brand_typography_"
TYPOGRAPHY_CLASS_PREFIX = "recursica_brand_typography_"

HEADER = f"""/*
 * Recursica CSS Variables - Scoped
 * Transform version: {TRANSFORM_VERSION}
 *
 * --- How to integrate this file ---
 * 1. Set data-recursica-theme="light" or "dark" on <html>. With only a theme set,
 *    layer 0 applies.
 * 2. Set data-recursica-layer="N" (0-3) on a wrapper to switch its descendants to
 *    that layer. A nested wrapper with another layer applies to its own subtree.
 * 3. Component CSS uses only generic names (no theme or layer in the name), e.g.
 *      var(--recursica_ui-kit_components_button_properties_colors_background)
 *      var(--recursica_brand_layer_0_properties_surface)
 *    never the specific ones (--recursica_ui-kit_themes_light_layer_0_...,
 *    --recursica_brand_themes_light_...).
 * 4. Do not match on data-recursica-theme / data-recursica-layer in component selectors.
 * 5. Typography helper classes (.recursica_brand_typography_<type>) apply a full
 *    type style from brand.typography.
 *
 * --- Structure ---
 * :root declares every variable under its specific (full-path) name. Theme and
 * theme+layer blocks only alias generic names to those root variables.
 *
 * WARNING: generated file. Do not edit it or override its variables; change the
 * Recursica JSON and re-export.
 */
"""


def transform_scoped(data: RecursicaInput, options: Optional[TransformOptions] = None) -> list:
    options = options or TransformOptions()
    entries = flatten_input(data, options)
    errors = ErrorCollector()

    # 1. root 上會存在的所有名稱（參照驗證用）
    root_names: set[str] = set()
    for entry in entries:
        if is_layer_specific_uikit_path(entry.path):
            root_names.update(layer_specific_root_name(entry.path, theme) for theme in THEMES)
        else:
            root_names.add(path_to_var_name(entry.path))

    # 2. root 實體值，參照一律使用完整名稱
    formatter = ValueFormatter(ReferenceResolver(root_names, strict=options.strict_refs), errors)
    root_vars: dict[str, str] = {}
    for entry in entries:
        if is_layer_specific_uikit_path(entry.path):
            for theme in THEMES:
                formatted = formatter.format(
                    entry.value, entry.path,
                    expand_context=f"brand.themes.{theme}.layers.layer-0",
                )
                if formatted is None:
                    formatted = fallback_for_null_by_type(entry.type)
                root_vars[layer_specific_root_name(entry.path, theme)] = formatted
            continue
        formatted = formatter.format(entry.value, entry.path)
        if formatted is not None:
            root_vars[path_to_var_name(entry.path)] = formatted

    validate_layer_coverage(entries, errors)
    errors.raise_if_any()
    fill_missing_layer_root_vars(root_vars)

    # 3. theme / theme+layer 別名
    theme_aliases, layer_aliases = build_aliases(entries, root_vars)
    return [ExportFile(FILENAME, format_scoped_css(root_vars, theme_aliases, layer_aliases))]


def build_aliases(entries: list, root_vars: dict) -> tuple:
    """回傳 ({theme: {generic: root}}, {Scope: {generic: root}})，只指向 root 上存在的名稱。"""
    theme_aliases: dict[str, dict] = {}
    layer_aliases: dict[Scope, dict] = {}
    for entry in entries:
        path = entry.path
        if is_layer_specific_uikit_path(path):
            layer = get_layer_from_uikit_path(path)
            generic = path_to_var_name(get_canonical_uikit_path(path))
            for theme in THEMES:
                block = layer_aliases.setdefault(Scope(theme, layer), {})
                block[generic] = layer_specific_root_name(path, theme)
            continue

        scope = get_scope(path)
        root_name = path_to_var_name(path)
        if scope.is_root or root_name not in root_vars:
            continue
        generic = path_to_scoped_var_name(path, scope)
        if scope.layer is not None:
            layer_aliases.setdefault(scope, {})[generic] = root_name
        else:
            theme_aliases.setdefault(scope.theme, {})[generic] = root_name

    # 只設 theme 沒設 layer 時等同 layer-0
    for theme in THEMES:
        merged = dict(theme_aliases.get(theme, {}))
        merged.update(layer_aliases.get(Scope(theme, "0"), {}))
        theme_aliases[theme] = merged
    return theme_aliases, layer_aliases


# ════════════════════════════════════════════════════════════
# Layer coverage
# ════════════════════════════════════════════════════════════

def validate_layer_coverage(entries: list, errors: ErrorCollector) -> None:
    """每個 layer-specific ui-kit 變數都要在 layer 0~3 定義值。"""
    layers_by_canonical: dict[str, set] = {}
    for entry in entries:
        if not is_layer_specific_uikit_path(entry.path):
            continue
        canonical = get_canonical_uikit_path(entry.path)
        layers_by_canonical.setdefault(canonical, set()).add(get_layer_from_uikit_path(entry.path))

    for canonical, layers in layers_by_canonical.items():
        missing = [layer for layer in LAYERS if layer not in layers]
        if not missing:
            continue
        defined = ", ".join(sorted(layers, key=int))
        errors.add(
            canonical,
            f"Layer-specific ui-kit var is defined only in layer(s) {defined}; "
            f"missing in layer(s) {', '.join(missing)}. Add explicit values in the ui-kit JSON for every layer.",
        )


def fill_missing_layer_root_vars(root_vars: dict) -> None:
    """補齊每個 canonical 變數的 2 theme × 4 layer root 值，型別依既有值推斷。"""
    examples: dict[str, str] = {}
    for name, value in root_vars.items():
        canonical = root_name_to_canonical(name)
        if canonical is not None:
            examples.setdefault(canonical, value)

    for canonical, example in examples.items():
        fallback = fallback_for_missing_layer_var(example)
        for theme in THEMES:
            for layer in LAYERS:
                root_vars.setdefault(root_name_from_canonical(canonical, theme, layer), fallback)


def fallback_for_null_by_type(token_type: Optional[str]) -> str:
    if not token_type:
        return "transparent"
    t = token_type.lower()
    if t in ("dimension", "length", "number"):
        return "0"
    if t == "elevation":
        return "none"
    if t in ("string", "fontfamily", "font-family"):
        return '""'
    return "transparent"


_COLOR_VALUE_RE = re.compile(r"#[0-9a-fA-F]{3,8}|transparent|(?:rgb|hsl)a?\(.*")
_NUMERIC_VALUE_RE = re.compile(r"-?\d+(?:\.\d+)?(?:px|rem|em|%|ex|ch)?")
_STRING_VALUE_RE = re.compile(r'"[^"]*"')


def fallback_for_missing_layer_var(example_value: str) -> str:
    v = example_value.strip()
    if _COLOR_VALUE_RE.fullmatch(v) or v.startswith("var("):
        return "transparent"
    if _NUMERIC_VALUE_RE.fullmatch(v):
        return "0"
    if v in ("none", "normal"):
        return v
    if _STRING_VALUE_RE.fullmatch(v):
        return '""'
    return "transparent"


# ════════════════════════════════════════════════════════════
# Output
# ════════════════════════════════════════════════════════════

def collect_typography_helpers(root_vars: dict) -> dict:
    """--recursica_brand_typography_<type>_<prop> 依 type 分組 → {type: [(css_prop, var_name)]}"""
    by_type: dict[str, list] = {}
    for var_name in root_vars:
        if not var_name.startswith(BRAND_TYPOGRAPHY_VAR_PREFIX):
            continue
        segments = var_name[len(BRAND_TYPOGRAPHY_VAR_PREFIX):].split("_")
        if len(segments) < 2:
            continue
        css_prop = TYPOGRAPHY_JSON_TO_CSS_PROP.get(segments[-1])
        if not css_prop:
            continue
        by_type.setdefault("_".join(segments[:-1]), []).append((css_prop, var_name))
    return by_type


def _alias_block(selector: str, aliases: dict) -> list:
    lines = [f"{selector} {{"]
    for generic in sorted(aliases):
        lines.append(f"  {generic}: var({aliases[generic]});")
    lines.extend(["}", ""])
    return lines


def format_scoped_css(root_vars: dict, theme_aliases: dict, layer_aliases: dict) -> str:
    lines = [HEADER, ":root {"]
    for name in sorted(root_vars):
        lines.append(f"  {name}: {root_vars[name]};")
    lines.extend(["}", ""])

    for theme in THEMES:
        aliases = theme_aliases.get(theme)
        if aliases:
            lines.extend(_alias_block(f'[data-recursica-theme="{theme}"]', aliases))

    ordered = sorted(layer_aliases, key=lambda s: (int(s.layer), THEMES.index(s.theme)))
    for scope in ordered:
        aliases = layer_aliases[scope]
        if not aliases:
            continue
        selector = (
            f'[data-recursica-theme="{scope.theme}"][data-recursica-layer="{scope.layer}"],\n'
            f'[data-recursica-theme="{scope.theme}"] [data-recursica-layer="{scope.layer}"]'
        )
        lines.extend(_alias_block(selector, aliases))

    helpers = collect_typography_helpers(root_vars)
    if helpers:
        lines.extend([
            "/* --- Typography helper classes ---",
            " * One class per type in brand.typography; class names follow the path:",
            " * brand.typography.<typeName> → .recursica_brand_typography_<typeName>",
            " */",
            "",
        ])
        for type_name in sorted(helpers):
            lines.append(f"/* Typography style \"{type_name}\" (brand.typography.{type_name}) */")
            lines.append(f".{TYPOGRAPHY_CLASS_PREFIX}{type_name} {{")
            for css_prop, var_name in sorted(helpers[type_name]):
                lines.append(f"  {css_prop}: var({var_name});")
            lines.extend(["}", ""])

    return "\n".join(lines)
