"""Starlette/FastAPI response adapter."""
