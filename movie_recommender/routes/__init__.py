"""
FastAPI routers for all API endpoints.

Routes only parse requests, call the service layer and shape responses.
Error translation to HTTP status codes lives in movie_recommender.main.
"""
