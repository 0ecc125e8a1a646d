"""
Pydantic schemas for the recommendation domain and the HTTP API.
"""
