"""Transform 驗證錯誤：整個流程收集完才一次拋出."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TransformError:
    """path 是發現問題的 JSON 路徑。"""
    path: str
    message: str


class TransformValidationError(ValueError):
    def __init__(self, errors: list):
        self.errors = list(errors)
        count = len(self.errors)
        lines = [f"Transform validation failed ({count} error{'' if count == 1 else 's'}):"]
        lines.extend(f"  {e.path}: {e.message}" for e in self.errors)
        super().__init__("\n".join(lines))


class ErrorCollector:
    def __init__(self):
        self.errors: list[TransformError] = []

    def add(self, path: str, message: str) -> None:
        self.errors.append(TransformError(path=path, message=message))

    def __len__(self) -> int:
        return len(self.errors)

    def raise_if_any(self) -> None:
        if self.errors:
            raise TransformValidationError(self.errors)
