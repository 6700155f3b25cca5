"""
參照解析 — "{brand.palettes.neutral.100}" → 實際存在的變數路徑

步驟：
  1. 依目前路徑推斷 theme（brand.themes.X.* → X；ui-kit.* → light）
  2. 展開省略 theme 的 brand 參照（palettes / elevations / layers / states / text-emphasis）
  3. 依序嘗試 ALIAS_RULES 產生的候選路徑，第一個存在的勝出
  4. 都不存在時才套用 REF_CORRECTIONS（會印出警告；strict 模式停用）

候選順序會影響輸出，新增規則請加在清單尾端。
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from .names import path_to_var_name
from .values import Reference

THEME_SCOPED_KEYS = ("palettes", "elevations", "layers", "states", "text-emphasis")

# {brand.palettes.<palette>.default} 各 theme 對應的 level
DEFAULT_LEVELS = {
    "light": {"neutral": "200", "palette-1": "400", "palette-2": "400"},
    "dark": {"neutral": "800", "palette-1": "600", "palette-2": "600"},
}

_THEME_CONTEXT_RE = re.compile(r"^brand\.themes\.(light|dark)\.")
_PALETTE_DEFAULT_RE = re.compile(r"^palettes\.(neutral|palette-1|palette-2)\.default(\..*)?$")


def _warn(msg: str) -> None:
    print(f"   ⚠️  [transform] {msg}")


def infer_theme(current_path: str) -> Optional[str]:
    m = _THEME_CONTEXT_RE.match(current_path)
    if m:
        return m.group(1)
    # ui-kit 在 JSON 層級不分 theme，一律以 light 為基準解析
    if current_path.startswith("ui-kit."):
        return "light"
    return None


def expand_ref_path(ref_path: str, current_path: str) -> str:
    """brand.palettes.neutral.100 在 dark 內 → brand.themes.dark.palettes.neutral.100"""
    theme = infer_theme(current_path)
    if not theme or not ref_path.startswith("brand."):
        return ref_path

    after_brand = ref_path[len("brand."):]
    for key in THEME_SCOPED_KEYS:
        if after_brand != key and not after_brand.startswith(key + "."):
            continue
        if after_brand in ("palettes.black", "palettes.white"):
            color = after_brand[len("palettes."):]
            return f"brand.themes.{theme}.palettes.core-colors.{color}.tone"
        m = _PALETTE_DEFAULT_RE.match(after_brand)
        if m:
            palette, rest = m.group(1), m.group(2) or ""
            level = DEFAULT_LEVELS.get(theme, {}).get(palette, "500")
            return f"brand.themes.{theme}.palettes.{palette}.{level}{rest}"
        return f"brand.themes.{theme}.{after_brand}"
    return ref_path


# ════════════════════════════════════════════════════════════
# Alias rules
# ════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AliasRule:
    """pattern 命中時以 rewrite(match) 產生一個候選路徑。"""
    name: str
    pattern: "re.Pattern"
    rewrite: Callable[["re.Match"], str]

    def apply(self, path: str) -> Optional[str]:
        m = self.pattern.search(path)
        if not m:
            return None
        return self.rewrite(m)


def _rename_prefix(name: str, old: str, new: str) -> AliasRule:
    return AliasRule(name, re.compile("^" + re.escape(old)), lambda m: new + m.string[m.end():])


def _append(name: str, pattern: str, suffix: str) -> AliasRule:
    return AliasRule(name, re.compile(pattern), lambda m: m.string + suffix)


def _replace_with(name: str, pattern: str, target: str) -> AliasRule:
    return AliasRule(name, re.compile(pattern), lambda m: target)


TYPOGRAPHY_KEBAB_TO_CAMEL = {
    "font-family": "fontFamily",
    "font-size": "fontSize",
    "font-weight": "fontWeight",
    "letter-spacing": "letterSpacing",
    "line-height": "lineHeight",
    "font-style": "fontStyle",
    "text-transform": "textCase",
    "text-case": "textCase",
    "text-decoration": "textDecoration",
}

ALIAS_RULES = [
    _rename_prefix("tokens-size-plural", "tokens.size.", "tokens.sizes."),
    _rename_prefix("tokens-opacity-plural", "tokens.opacity.", "tokens.opacities."),
    _rename_prefix("font-letter-spacing-plural", "tokens.font.letter-spacing.", "tokens.font.letter-spacings."),
    _rename_prefix("font-line-height-plural", "tokens.font.line-height.", "tokens.font.line-heights."),
    _rename_prefix("font-size-plural", "tokens.font.size.", "tokens.font.sizes."),
    _rename_prefix("font-weight-plural", "tokens.font.weight.", "tokens.font.weights."),
    AliasRule(
        "font-size-me-typo",
        re.compile(r"^tokens\.font\.sizes\.(?:.*\.)?me$"),
        lambda m: m.string[:-len("me")] + "md",
    ),
    AliasRule(
        "palette-black-white",
        re.compile(r"^brand\.themes\.(light|dark)\.palettes\.(black|white)$"),
        lambda m: f"brand.themes.{m.group(1)}.palettes.core-colors.{m.group(2)}.tone",
    ),
    _append("core-black-white-tone", r"^brand\.themes\.(light|dark)\.palettes\.core-colors\.(black|white)$", ".tone"),
    _append("core-status-tone", r"^brand\.themes\.(light|dark)\.palettes\.core-colors\.(warning|success|alert)$", ".tone"),
    AliasRule(
        "typography-kebab-to-camel",
        re.compile(r"^brand\.typography\.[^.]+\.(" + "|".join(map(re.escape, TYPOGRAPHY_KEBAB_TO_CAMEL)) + r")$"),
        lambda m: m.string[:m.start(1)] + TYPOGRAPHY_KEBAB_TO_CAMEL[m.group(1)],
    ),
    _append("palette-level-tone", r"^brand\.themes\.(light|dark)\.palettes\.([^.]+)\.(\d{3,4}|default|primary)$", ".color.tone"),
    AliasRule(
        "layer-interactive-color-to-tone",
        re.compile(r"^brand\.themes\.(light|dark)\.layers\.(layer-\d+)\.elements\.interactive\.color$"),
        lambda m: f"brand.themes.{m.group(1)}.layers.{m.group(2)}.elements.interactive.tone",
    ),
    _replace_with("border-radii-md", r"^brand\.dimensions\.border-radii\.md$", "brand.dimensions.border-radii.default"),
    _replace_with("general-xs", r"^brand\.dimensions\.general\.xs$", "brand.dimensions.general.sm"),
]


def resolve_path_alias(path: str, rules: Optional[list] = None) -> list:
    """回傳候選路徑：原路徑在前，之後依規則順序。"""
    candidates = [path]
    for rule in ALIAS_RULES if rules is None else rules:
        candidate = rule.apply(path)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


# ════════════════════════════════════════════════════════════
# Known data corrections
# ════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RefCorrection:
    pattern: "re.Pattern"
    replacement: str
    comment: str


# 既有 JSON 資料中的錯誤參照；JSON 修正後即可移除對應項目
REF_CORRECTIONS = [
    RefCorrection(
        pattern=re.compile(r"^brand\.themes\.(light|dark)\.palettes\.core-(black|white)$"),
        replacement=r"brand.themes.\1.palettes.core-colors.\2.tone",
        comment="Use core-colors.black.tone / core-colors.white.tone instead of core-black / core-white.",
    ),
]


def apply_ref_correction(expanded_path: str, raw_ref: str, current_path: str) -> Optional[str]:
    for correction in REF_CORRECTIONS:
        if correction.pattern.match(expanded_path):
            corrected = correction.pattern.sub(correction.replacement, expanded_path)
            _warn(
                f"Correcting invalid ref \"{raw_ref}\" at {current_path} → {corrected} "
                f"({correction.comment})"
            )
            return corrected
    return None


@dataclass(frozen=True)
class Resolution:
    expanded: str
    resolved: Optional[str]

    @property
    def target(self) -> str:
        """找不到時仍回傳展開後的路徑，讓輸出的 var() 能追到斷掉的參照。"""
        return self.resolved or self.expanded


class ReferenceResolver:
    """對一組已知變數名稱解析參照；每次 transform 建一個。"""

    def __init__(self, known_names: set, strict: bool = False):
        self.known_names = known_names
        self.strict = strict

    def resolve(
        self,
        ref: Reference,
        current_path: str,
        expand_context: Optional[str] = None,
    ) -> Resolution:
        expanded = expand_ref_path(ref.path, expand_context or current_path)
        for candidate in resolve_path_alias(expanded):
            if path_to_var_name(candidate) in self.known_names:
                return Resolution(expanded, candidate)
        if not self.strict:
            corrected = apply_ref_correction(expanded, ref.raw, current_path)
            if corrected and path_to_var_name(corrected) in self.known_names:
                return Resolution(expanded, corrected)
        return Resolution(expanded, None)
