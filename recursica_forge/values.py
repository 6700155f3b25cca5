"""
Token 值模型：Literal | Reference | Dimension

JSON 中的 "{path.to.value}" 參照在攤平時解析一次，
之後格式化只依型別分派，不再重複用字串判斷。
"""

import re
from dataclasses import dataclass
from typing import Any, Optional, Union

_REF_RE = re.compile(r"\{[^}]+\}")


@dataclass(frozen=True)
class Literal:
    value: Any


@dataclass(frozen=True)
class Reference:
    path: str
    raw: str


@dataclass(frozen=True)
class Dimension:
    """{value, unit} 物件；value 可能是數字、Reference 或其他無法處理的值。"""
    value: Any
    unit: Optional[str] = None


TokenValue = Union[Literal, Reference, Dimension]


def is_ref(val: Any) -> bool:
    return isinstance(val, str) and _REF_RE.fullmatch(val.strip()) is not None


def extract_ref_path(ref: str) -> str:
    """"{brand.palettes.neutral.100}" → "brand.palettes.neutral.100"."""
    return ref.strip()[1:-1].strip()


def parse_value(raw: Any) -> Optional[TokenValue]:
    if raw is None:
        return None
    if is_ref(raw):
        return Reference(path=extract_ref_path(raw), raw=raw)
    if isinstance(raw, dict) and "value" in raw:
        inner = raw["value"]
        if is_ref(inner):
            inner = Reference(path=extract_ref_path(inner), raw=inner)
        return Dimension(value=inner, unit=raw.get("unit"))
    return Literal(raw)
