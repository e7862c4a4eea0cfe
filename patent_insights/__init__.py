"""
Patent Insights - patent portfolio search and analytics service.
"""

__version__ = "1.0.0"
