"""
LLM-facing building blocks for the Movie Recommender backend.

Each agent package holds the prompt templates for one model task together
with the parser that turns the model's raw text into typed data.
"""
