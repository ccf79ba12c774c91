"""
Reports package for the tennis tracker.
"""

from .report_generator import ReportGenerator

__all__ = ['ReportGenerator']
