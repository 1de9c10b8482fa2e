"""pydantic schemas for rendered responses."""
