"""
Entry point for the PolicyScan insurance portfolio service.
Run with: uvicorn main:app --reload
"""
from policyscan.main import app

__all__ = ["app"]
