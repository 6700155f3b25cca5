"""Token 值 → CSS 值字串."""

import json
import math
import re
from decimal import Decimal
from typing import Callable, Optional

from .errors import ErrorCollector
from .names import path_to_var_name
from .resolver import ReferenceResolver
from .values import Dimension, Literal, Reference, TokenValue

_HEX_RE = re.compile(r"#[0-9a-fA-F]{3,8}")
_CSS_KEYWORDS = {"none", "normal", "italic", "uppercase", "lowercase"}


def format_number(n) -> str:
    """
    與 JSON 來源一致的數字字串：1.0 → "1"，0.00001 → "0.00001"，1e-07 → "1e-7"，
    非有限值 → NaN / Infinity。指數只用在 < 1e-6 或 >= 1e21。
    """
    if not isinstance(n, float):
        return repr(n)
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "Infinity" if n > 0 else "-Infinity"
    if n.is_integer() and abs(n) < 1e21:
        return str(int(n))
    mantissa, sep, exp = repr(n).partition("e")
    if not sep:
        return mantissa
    e = int(exp)
    if -7 < e < 21:
        return format(Decimal(repr(n)), "f")
    return f"{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"


def _is_number(v) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _json_type_name(v) -> str:
    if v is None:
        return "null"
    if isinstance(v, str):
        return "string"
    if isinstance(v, bool):
        return "boolean"
    if isinstance(v, dict):
        return "object"
    return type(v).__name__


def _stringify(v) -> str:
    if v is None:
        return "null"
    if isinstance(v, bool):
        return "true" if v else "false"
    if _is_number(v):
        return format_number(v)
    if isinstance(v, (dict, list)):
        return json.dumps(v, ensure_ascii=False)
    return str(v)


class ValueFormatter:
    """
    將攤平後的值轉成 CSS 值；問題寫進 errors，不中斷流程。

    ref_namer 決定參照輸出成哪個變數名稱（預設為完整路徑名稱）。
    """

    def __init__(
        self,
        resolver: ReferenceResolver,
        errors: ErrorCollector,
        ref_namer: Callable[[str], str] = path_to_var_name,
    ):
        self.resolver = resolver
        self.errors = errors
        self.ref_namer = ref_namer

    def format(
        self,
        value: Optional[TokenValue],
        current_path: str,
        expand_context: Optional[str] = None,
    ) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, Reference):
            return self._format_reference(value, current_path, expand_context)
        if isinstance(value, Dimension):
            return self._format_dimension(value, current_path, expand_context)
        return self._format_literal(value, current_path)

    def _format_reference(self, ref: Reference, current_path: str, expand_context: Optional[str]) -> str:
        resolution = self.resolver.resolve(ref, current_path, expand_context)
        if resolution.resolved is None:
            self.errors.add(
                current_path,
                f"Reference '{ref.raw}' targets non-existent var {path_to_var_name(resolution.expanded)}",
            )
        return f"var({self.ref_namer(resolution.target)})"

    def _format_dimension(self, dim: Dimension, current_path: str, expand_context: Optional[str]) -> str:
        if isinstance(dim.value, Reference):
            # 被參照的變數已帶單位，unit 忽略
            return self._format_reference(dim.value, current_path, expand_context)
        if _is_number(dim.value):
            unit = dim.unit or "px"
            if unit == "percentage":
                unit = "%"
            if not math.isfinite(dim.value):
                self.errors.add(current_path, f"Invalid dimension value: {format_number(dim.value)}")
            return f"{format_number(dim.value)}{unit}"
        self.errors.add(current_path, f"Unsupported dimension value type: {_json_type_name(dim.value)}")
        return _stringify({"value": dim.value, "unit": dim.unit})

    def _format_literal(self, literal: Literal, current_path: str) -> str:
        val = literal.value
        if isinstance(val, str):
            if _HEX_RE.fullmatch(val) or val in _CSS_KEYWORDS or "var(" in val:
                return val
            escaped = val.replace('"', '\\"')
            return f'"{escaped}"'
        if _is_number(val):
            if not math.isfinite(val):
                self.errors.add(current_path, f"Invalid number: {format_number(val)}")
            return format_number(val)
        if isinstance(val, list):
            return ", ".join(f'"{v}"' if isinstance(v, str) else _stringify(v) for v in val)
        self.errors.add(current_path, f"Unsupported value type: {_json_type_name(val)}")
        return _stringify(val)
