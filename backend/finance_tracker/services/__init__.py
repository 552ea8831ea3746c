from .ledger_service import LedgerService, TransactionFilters, ExportRow
from .report_service import ReportService, months_ago, month_bounds
from .category_service import CategoryService, DEFAULT_CATEGORIES
from .auth_service import AuthService, create_access_token, decode_access_token
from .report_document import ReportDocument, ReportRow
from .export_service import encode_csv, build_report_document, encode_report_document
from .pdf_renderer import render_pdf

__all__ = [
    "LedgerService",
    "TransactionFilters",
    "ExportRow",
    "ReportService",
    "months_ago",
    "month_bounds",
    "CategoryService",
    "DEFAULT_CATEGORIES",
    "AuthService",
    "create_access_token",
    "decode_access_token",
    "ReportDocument",
    "ReportRow",
    "encode_csv",
    "build_report_document",
    "encode_report_document",
    "render_pdf",
]
