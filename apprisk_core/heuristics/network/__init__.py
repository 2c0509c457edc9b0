"""
Network exfiltration risk analysis.
"""

from .network_risk import NetworkRiskAnalyzer

__all__ = ['NetworkRiskAnalyzer']
