"""
quizzical: quiz content backend.

Categories and questions (with their choices) stored through an async
SQLAlchemy repository layer and served over FastAPI.
"""
