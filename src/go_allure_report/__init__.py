# Lightweight package init: avoid eager imports that can fail at console start.
__all__ = ["Report", "Package", "Test", "Result", "allure_report_xml", "ReportEncodingError"]

def __getattr__(name):
    if name in ("Report", "Package", "Test", "Result"):
        from . import models
        return getattr(models, name)
    if name == "allure_report_xml":
        from .reporters.allure import allure_report_xml as _allure_report_xml
        return _allure_report_xml
    if name == "ReportEncodingError":
        from .errors import ReportEncodingError as _ReportEncodingError
        return _ReportEncodingError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
