"""
Utility functions package for the tennis tracker.
"""

from .score_utils import ScoreUtils, InvalidScoreError
from .text_utils import TextUtils
from .name_utils import NameUtils

__all__ = ['ScoreUtils', 'InvalidScoreError', 'TextUtils', 'NameUtils']
