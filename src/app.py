"""Storefront FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from storefront.domain import storefront
from storefront.http import create_app

# Initialized at module level so uvicorn workers share the registry
storefront.init()

app = create_app()
