"""
Malware indicator analysis.
"""

from .malware_indicators import MalwareIndicatorAnalyzer

__all__ = ['MalwareIndicatorAnalyzer']
