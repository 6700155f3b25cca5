"""
Scope 判斷 — 變數屬於 :root、theme 區塊，或 theme+layer 區塊

  tokens.* / brand.typography.* / brand.dimensions.* / ui-kit.*  → root
  brand.themes.X.layers.layer-N.*                                → theme X + layer N
  brand.themes.X.*                                               → theme X

含 .layer-N. 片段的 ui-kit 路徑另外處理：去掉 layer 片段得到 canonical 名稱，
再展開到兩個 theme × 各 layer。
"""

import re
from dataclasses import dataclass
from typing import Optional

from .names import PREFIX, path_to_var_name

THEMES = ("light", "dark")
LAYERS = ("0", "1", "2", "3")

_ROOT_PREFIXES = ("tokens.", "brand.typography.", "brand.dimensions.", "ui-kit.")
_THEME_LAYER_RE = re.compile(r"^brand\.themes\.(light|dark)\.layers\.layer-(\d+)\.")
_THEME_RE = re.compile(r"^brand\.themes\.(light|dark)\.")
_LAYER_SEGMENT_RE = re.compile(r"^layers\.layer-\d+\.")
_UIKIT_LAYER_RE = re.compile(r"\.layer-(\d+)\.")
_LAYER_SPECIFIC_ROOT_RE = re.compile(r"^--recursica_ui-kit_themes_(light|dark)_layer_(\d+)_(.+)$")
_UIKIT_VAR_PREFIX = PREFIX + "ui-kit_"


@dataclass(frozen=True)
class Scope:
    theme: Optional[str] = None
    layer: Optional[str] = None

    @property
    def is_root(self) -> bool:
        return self.theme is None


ROOT = Scope()


def get_scope(path: str) -> Scope:
    if path.startswith(_ROOT_PREFIXES):
        return ROOT
    m = _THEME_LAYER_RE.match(path)
    if m:
        return Scope(theme=m.group(1), layer=m.group(2))
    m = _THEME_RE.match(path)
    if m:
        return Scope(theme=m.group(1))
    return ROOT


def _escape_path(path: str) -> str:
    return "_".join(seg.replace("_", "__") for seg in path.split("."))


def path_to_scoped_var_name(path: str, scope: Scope) -> str:
    """theme / layer 由 selector 提供，因此區塊內的名稱不含 theme 與 layer。"""
    if scope.is_root:
        return path_to_var_name(path)
    if scope.layer is not None:
        prefix = f"brand.themes.{scope.theme}.layers.layer-{scope.layer}."
        if path.startswith(prefix):
            return f"{PREFIX}brand_layer_{scope.layer}_{_escape_path(path[len(prefix):])}"
        return path_to_var_name(path)
    prefix = f"brand.themes.{scope.theme}."
    if path.startswith(prefix):
        rest = path[len(prefix):]
        if _LAYER_SEGMENT_RE.match(rest):
            return path_to_var_name(path)
        return f"{PREFIX}brand_{_escape_path(rest)}"
    return path_to_var_name(path)


# ─── layer-specific ui-kit ───────────────────────────────────────────────────

def is_layer_specific_uikit_path(path: str) -> bool:
    return path.startswith("ui-kit.") and _UIKIT_LAYER_RE.search(path) is not None


def get_canonical_uikit_path(path: str) -> str:
    """ui-kit.components.Modal.colors.layer-1.background → ui-kit.components.Modal.colors.background"""
    return _UIKIT_LAYER_RE.sub(".", path, count=1)


def get_layer_from_uikit_path(path: str) -> Optional[str]:
    m = _UIKIT_LAYER_RE.search(path)
    return m.group(1) if m else None


def root_name_from_canonical(canonical_var_name: str, theme: str, layer: str) -> str:
    rest = canonical_var_name[len(_UIKIT_VAR_PREFIX):]
    return f"{_UIKIT_VAR_PREFIX}themes_{theme}_layer_{layer}_{rest}"


def root_name_to_canonical(root_name: str) -> Optional[str]:
    m = _LAYER_SPECIFIC_ROOT_RE.match(root_name)
    if not m:
        return None
    return _UIKIT_VAR_PREFIX + m.group(3)


def layer_specific_root_name(path: str, theme: str) -> str:
    """
    :root 上每個 (theme, layer) 各一個實體變數，例如
    ui-kit.components.Modal.colors.layer-0.background（dark）
      → --recursica_ui-kit_themes_dark_layer_0_components_Modal_colors_background
    """
    layer = get_layer_from_uikit_path(path)
    if layer is None:
        return path_to_var_name(path)
    canonical = path_to_var_name(get_canonical_uikit_path(path))
    return root_name_from_canonical(canonical, theme, layer)
