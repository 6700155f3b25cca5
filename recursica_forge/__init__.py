"""
recursica-forge — Recursica JSON（tokens / brand / ui-kit）→ CSS 變數

兩種輸出：
  specific  所有變數以完整路徑名稱放在單一 :root
  scoped    :root 放實體值，theme / layer 屬性選擇器內只放通用名稱別名
"""

__version__ = "1.1.0"

from .models import RecursicaInput, TransformOptions, ExportFile
from .errors import TransformError, TransformValidationError
from .names import (
    path_to_var_name,
    path_to_exported_name,
    exported_name_to_path,
    internal_name_to_path,
    internal_to_exported_name,
)
from .specific import transform_specific
from .scoped import transform_scoped
from .css_lint import CssIssue, validate_css_syntax
from .exporter import load_document, load_input, build_export, write_export
from .config import load_config, validate_config

__all__ = [
    "__version__",
    "RecursicaInput",
    "TransformOptions",
    "ExportFile",
    "TransformError",
    "TransformValidationError",
    "path_to_var_name",
    "path_to_exported_name",
    "exported_name_to_path",
    "internal_name_to_path",
    "internal_to_exported_name",
    "transform_specific",
    "transform_scoped",
    "CssIssue",
    "validate_css_syntax",
    "load_document",
    "load_input",
    "build_export",
    "write_export",
    "load_config",
    "validate_config",
]
