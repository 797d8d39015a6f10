"""
Data module for Super Bowl analysis.
"""

from .loader import DataLoader
from .preprocessor import build_analysis_table

__all__ = ['DataLoader', 'build_analysis_table']
