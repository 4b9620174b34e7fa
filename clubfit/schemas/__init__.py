"""
Pydantic schemas for API request and response validation.

All FastAPI endpoints use strict Pydantic models with explicit types.
JSON uses camelCase aliases to match the browser UI.
"""
