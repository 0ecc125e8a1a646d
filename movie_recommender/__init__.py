"""
Movie Recommender backend.

Turns free-text movie preferences into structured recommendations using
Google Gemini, caching results in Supabase keyed by the exact query text.
"""

__version__ = "0.1.0"
