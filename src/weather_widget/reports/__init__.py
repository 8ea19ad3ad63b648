"""Weather report dispatch."""

from .base import ReportBackend
from .dispatcher import SUCCESS_MESSAGE, ReportDispatcher
from .http import HttpReportBackend

__all__ = ["SUCCESS_MESSAGE", "HttpReportBackend", "ReportBackend", "ReportDispatcher"]
