"""Transform 輸入 / 輸出 / 選項."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RecursicaInput:
    """tokens / brand / ui-kit 三份 JSON 的快照；transform 只讀不改。"""
    tokens: dict = field(default_factory=dict)
    brand: dict = field(default_factory=dict)
    uikit: dict = field(default_factory=dict)


@dataclass(frozen=True)
class TransformOptions:
    # True：不套用 REF_CORRECTIONS，錯誤參照直接視為驗證錯誤
    strict_refs: bool = False
    # dark layer 互動元素 on-tone / on-tone-hover 所參照的 palette
    on_tone_palette: str = "palette-1"


@dataclass(frozen=True)
class ExportFile:
    filename: str
    contents: str
