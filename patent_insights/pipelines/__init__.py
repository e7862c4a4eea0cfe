"""
Search pipeline for the Patent Insights service.
"""
