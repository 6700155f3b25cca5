"""
匯出 — 讀取 Recursica JSON，產生並寫出整組匯出檔

  recursica_tokens.json / recursica_brand.json / recursica_ui-kit.json
  recursica_variables_specific.css / recursica_variables_scoped.css

兩個 transform 都成功後才會寫檔；任何驗證錯誤都不會留下部分輸出。
"""

import json
import os
from pathlib import Path
from typing import Iterable, Optional

import requests

from .models import ExportFile, RecursicaInput, TransformOptions
from .scoped import transform_scoped
from .specific import transform_specific

EXPORT_FILENAME_TOKENS = "recursica_tokens.json"
EXPORT_FILENAME_BRAND = "recursica_brand.json"
EXPORT_FILENAME_UIKIT = "recursica_ui-kit.json"
EXPORT_FILENAME_CSS_SPECIFIC = "recursica_variables_specific.css"
EXPORT_FILENAME_CSS_SCOPED = "recursica_variables_scoped.css"

EXPORT_FORMATS = ("json", "specific", "scoped")
REQUEST_TIMEOUT = 10

__all__ = [
    "RecursicaInput",
    "TransformOptions",
    "ExportFile",
    "EXPORT_FILENAME_TOKENS",
    "EXPORT_FILENAME_BRAND",
    "EXPORT_FILENAME_UIKIT",
    "EXPORT_FILENAME_CSS_SPECIFIC",
    "EXPORT_FILENAME_CSS_SCOPED",
    "EXPORT_FORMATS",
    "load_document",
    "load_input",
    "build_export",
    "write_export",
]


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_document(source: str, session: Optional[requests.Session] = None) -> dict:
    """本機路徑或 http(s) URL → JSON 物件。

    URL 以 requests 取得（timeout 10 秒，非 2xx 拋 requests.HTTPError）；
    內容不是 JSON 物件時拋 ValueError。
    """
    if _is_url(source):
        http = session or requests.Session()
        resp = http.get(source, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        doc = resp.json()
    else:
        with open(source, "r", encoding="utf-8") as f:
            doc = json.load(f)
    if not isinstance(doc, dict):
        raise ValueError(f"'{source}' is not a JSON object (got {type(doc).__name__})")
    return doc


def load_input(
    tokens: Optional[str] = None,
    brand: Optional[str] = None,
    uikit: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> RecursicaInput:
    """未指定的文件以空物件代替。"""
    return RecursicaInput(
        tokens=load_document(tokens, session) if tokens else {},
        brand=load_document(brand, session) if brand else {},
        uikit=load_document(uikit, session) if uikit else {},
    )


def _dump_json(doc: dict) -> str:
    return json.dumps(doc, indent=2, ensure_ascii=False)


def build_export(
    data: RecursicaInput,
    options: Optional[TransformOptions] = None,
    formats: Optional[Iterable[str]] = None,
) -> list:
    """依固定順序組出匯出檔：tokens, brand, ui-kit, specific, scoped。

    驗證失敗時拋 TransformValidationError，不回傳任何檔案。
    """
    if isinstance(formats, str):
        formats = [formats]
    selected = set(EXPORT_FORMATS if formats is None else formats)
    unknown = selected - set(EXPORT_FORMATS)
    if unknown:
        raise ValueError(
            f"Unknown export format(s): {', '.join(sorted(unknown))} "
            f"(expected: {', '.join(EXPORT_FORMATS)})"
        )

    files: list[ExportFile] = []
    if "json" in selected:
        files.append(ExportFile(EXPORT_FILENAME_TOKENS, _dump_json(data.tokens)))
        files.append(ExportFile(EXPORT_FILENAME_BRAND, _dump_json(data.brand)))
        files.append(ExportFile(EXPORT_FILENAME_UIKIT, _dump_json(data.uikit)))
    if "specific" in selected:
        files.extend(transform_specific(data, options))
    if "scoped" in selected:
        files.extend(transform_scoped(data, options))
    return files


def write_export(files: list, output_dir: str) -> list:
    """寫出所有檔案，回傳寫出的路徑清單。"""
    os.makedirs(output_dir, exist_ok=True)
    written = []
    for export_file in files:
        path = Path(output_dir) / export_file.filename
        with open(path, "w", encoding="utf-8") as f:
            f.write(export_file.contents)
        written.append(str(path))
    return written
