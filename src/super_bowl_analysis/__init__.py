"""
Super Bowl Offense Analysis Package
Tests whether offensive performance in championship games predicts scoring or winning.
"""

__version__ = "1.0.0"
__author__ = "NFL Analytics Team"

# Import main classes for easy access
from .config import config
from .data.loader import DataLoader
from .data.preprocessor import build_analysis_table

__all__ = [
    'config',
    'DataLoader',
    'build_analysis_table'
]
