"""
Specific CSS — 所有變數以完整路徑名稱放在單一 :root

  tokens / brand / ui-kit JSON → recursica_variables_specific.css
參照一律輸出完整名稱，例如 var(--recursica_brand_themes_light_palettes_neutral_100_color_tone)。
"""

from typing import Optional

from .errors import ErrorCollector
from .flattener import flatten_input
from .formatter import ValueFormatter
from .models import ExportFile, RecursicaInput, TransformOptions
from .names import path_to_var_name
from .resolver import ReferenceResolver

FILENAME = "recursica_variables_specific.css"
TRANSFORM_VERSION = "1.1.0"

HEADER = f"""/*
 * Recursica CSS Variables - Specific
 * Transform version: {TRANSFORM_VERSION}
 *
 * Recursica manages variables across three layers:
 * - Tokens: primitive values (colors, sizes, typography).
 * - Brand: applies tokens to themes (light/dark), palettes, and elevation layers (0-3).
 * - UI-kit: component-level variables that reference brand.
 *
 * Format: every variable is declared on :root with its full JSON path as name.
 * Reference ui-kit variables (--recursica_ui-kit_*) in component styles; avoid
 * referencing brand layer variables (--recursica_brand_themes_*_layers_*) directly.
 *
 * WARNING: generated from the Recursica JSON files (tokens, brand, ui-kit).
 * Do not edit this file or override its variables; change the JSON and re-export.
 */
"""


def transform_specific(data: RecursicaInput, options: Optional[TransformOptions] = None) -> list:
    """驗證失敗時拋出 TransformValidationError（列出所有錯誤）。"""
    options = options or TransformOptions()
    entries = flatten_input(data, options)
    known_names = {path_to_var_name(entry.path) for entry in entries}
    errors = ErrorCollector()
    formatter = ValueFormatter(ReferenceResolver(known_names, strict=options.strict_refs), errors)

    declarations: dict[str, str] = {}
    for entry in entries:
        formatted = formatter.format(entry.value, entry.path)
        if formatted is not None:
            declarations[path_to_var_name(entry.path)] = formatted

    errors.raise_if_any()
    return [ExportFile(FILENAME, format_css(declarations))]


def format_css(declarations: dict) -> str:
    lines = [HEADER, ":root {"]
    for name in sorted(declarations):
        lines.append(f"  {name}: {declarations[name]};")
    lines.append("}")
    return "\n".join(lines) + "\n"
