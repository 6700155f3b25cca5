"""
CSS 變數命名 — JSON path ↔ --recursica_ 名稱

匯出命名：路徑片段以單一底線串接，片段內的底線跳脫成 __。
編輯器內部命名（--recursica- + 連字號）與匯出命名是兩套規則，
internal_name_to_path 是兩者之間唯一的轉換層。
"""

import re
from typing import Optional

PREFIX = "--recursica_"
INTERNAL_PREFIX = "--recursica-"


def _escape(segment: str) -> str:
    return segment.replace("_", "__")


def path_to_exported_name(segments: list) -> str:
    """['tokens', 'colors', 'scale-02', '500'] → --recursica_tokens_colors_scale-02_500"""
    return PREFIX + "_".join(_escape(seg) for seg in segments)


def path_to_var_name(path: str) -> str:
    """點分隔路徑轉 CSS 變數名稱；空路徑只回傳前綴。"""
    return path_to_exported_name([seg for seg in path.split(".") if seg])


def exported_name_to_path(name: str) -> list:
    """
    path_to_exported_name 的反函式。非 --recursica_ 名稱回傳 []。

    切 _ 後連續的空字串代表跳脫的底線，要併回目前的片段，
    所以以 __ 結尾的片段（--recursica_a____b → ['a__b']）也能還原。
    """
    if not name.startswith(PREFIX):
        return []
    parts = name[len(PREFIX):].split("_")
    segments = []
    i = 0
    while i < len(parts):
        seg = parts[i]
        i += 1
        while i < len(parts) and parts[i] == "":
            seg += "_" + (parts[i + 1] if i + 1 < len(parts) else "")
            i += 2
        segments.append(seg)
    return segments


# ─── 內部命名（--recursica-tokens-colors-scale-02-500）───────────────────────

_UIKIT_PATH_ENDINGS = ("variants-sizes", "variants-styles", "properties", "colors", "size")
_HYPHENATED_FONT_KINDS = (("line", "heights"), ("letter", "spacings"))
_LEVEL_RE = re.compile(r"^\d{3,4}$")


def internal_name_to_path(internal_name: str) -> list:
    """編輯器內部變數名稱轉路徑陣列；無法辨識回傳 []。"""
    if not internal_name.startswith(INTERNAL_PREFIX):
        return []
    body = internal_name[len(INTERNAL_PREFIX):]
    if body.startswith("tokens-"):
        return _tokens_internal_to_path(body[len("tokens-"):])
    if body.startswith("brand-"):
        return ["brand", *body[len("brand-"):].split("-")]
    if body.startswith("ui-kit-"):
        return _uikit_internal_to_path(body[len("ui-kit-"):])
    return []


def _tokens_internal_to_path(rest: str) -> list:
    parts = rest.split("-")
    kind = parts[0]
    if kind == "colors" and len(parts) >= 3:
        # scale 名稱本身可能含連字號（scale-02），以第一個 3~4 位數 level 為界
        for i in range(1, len(parts) - 1):
            if _LEVEL_RE.match(parts[i + 1]):
                return ["tokens", "colors", "-".join(parts[1:i + 1]), parts[i + 1]]
        return ["tokens", "colors", parts[1], "-".join(parts[2:])]
    if kind == "sizes" and len(parts) >= 2:
        return ["tokens", "sizes", "-".join(parts[1:])]
    if kind in ("opacities", "opacity") and len(parts) >= 2:
        return ["tokens", kind, "-".join(parts[1:])]
    if kind == "font" and len(parts) >= 3:
        for a, b in _HYPHENATED_FONT_KINDS:
            if parts[1] == a and parts[2] == b and len(parts) >= 4:
                return ["tokens", "font", f"{a}-{b}", "-".join(parts[3:])]
        return ["tokens", "font", parts[1], "-".join(parts[2:])]
    return ["tokens", *parts]


def _uikit_internal_to_path(rest: str) -> list:
    best_idx = -1
    best_ending = ""
    for ending in _UIKIT_PATH_ENDINGS:
        needle = f"-{ending}-"
        idx = rest.rfind(needle)
        if idx != -1 and idx + len(needle) < len(rest) and idx > best_idx:
            best_idx = idx
            best_ending = ending
    if best_idx == -1:
        return ["ui-kit", *rest.split("-")]
    before = rest[:best_idx]
    key = rest[best_idx + len(best_ending) + 2:]
    return ["ui-kit", *[s for s in before.split("-") if s], best_ending, key]


def internal_to_exported_name(internal_name: str) -> Optional[str]:
    """--recursica-tokens-colors-scale-02-500 → --recursica_tokens_colors_scale-02_500"""
    path = internal_name_to_path(internal_name)
    if not path:
        return None
    return path_to_exported_name(path)
