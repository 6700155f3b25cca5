"""
匯出前的 CSS 基本語法檢查

只做輕量檢查，不是完整 CSS parser：
  - 大括號是否成對
  - 宣告行是否缺分號
  - 自訂屬性名稱與 var() 內的名稱是否合法
"""

import re
from dataclasses import dataclass
from typing import Optional

_VALID_VAR_NAME_RE = re.compile(r"^--[a-zA-Z][a-zA-Z0-9_-]*$")
_DECLARATION_NAME_RE = re.compile(r"^\s*(--[^:\s]+)\s*:")
_VAR_CALL_RE = re.compile(r"var\(\s*(--[^,)\s]+)")


@dataclass(frozen=True)
class CssIssue:
    file: str
    message: str
    line: Optional[int] = None

    def __str__(self) -> str:
        where = f"{self.file}:{self.line}" if self.line is not None else self.file
        return f"{where}: {self.message}"


def _strip_comments(line: str, in_comment: bool) -> tuple:
    """回傳 (去掉註解後的內容, 行尾是否仍在註解中)"""
    out = []
    i = 0
    while i < len(line):
        if in_comment:
            end = line.find("*/", i)
            if end == -1:
                return "".join(out), True
            i = end + 2
            in_comment = False
        else:
            start = line.find("/*", i)
            if start == -1:
                out.append(line[i:])
                break
            out.append(line[i:start])
            i = start + 2
            in_comment = True
    return "".join(out), in_comment


def validate_css_syntax(css: str, filename: str) -> list:
    issues: list[CssIssue] = []
    depth = 0
    in_comment = False

    for lineno, raw in enumerate(css.split("\n"), start=1):
        line, in_comment = _strip_comments(raw, in_comment)
        trimmed = line.strip()
        if not trimmed:
            continue

        for ch in trimmed:
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth < 0:
                    issues.append(CssIssue(filename, "Unexpected closing brace", lineno))
                    depth = 0

        if (
            ":" in trimmed
            and not trimmed.startswith("*")
            and not trimmed.endswith(("{", "}", ",", "\\"))
            and ";" not in trimmed
        ):
            issues.append(CssIssue(filename, "Missing semicolon or incomplete declaration", lineno))

        m = _DECLARATION_NAME_RE.match(trimmed)
        if m and not _VALID_VAR_NAME_RE.match(m.group(1)):
            issues.append(CssIssue(filename, f"Invalid CSS custom property name: {m.group(1)}", lineno))

        for name in _VAR_CALL_RE.findall(trimmed):
            if not _VALID_VAR_NAME_RE.match(name):
                issues.append(CssIssue(filename, f"Invalid var() reference: {name}", lineno))

    if depth > 0:
        issues.append(CssIssue(filename, f"Unclosed braces: {depth} block(s) not closed"))
    return issues


def validate_exported_css(files: list) -> list:
    """檢查所有 .css 匯出檔，回傳合併後的問題清單。"""
    issues: list[CssIssue] = []
    for export_file in files:
        if export_file.filename.endswith(".css"):
            issues.extend(validate_css_syntax(export_file.contents, export_file.filename))
    return issues
