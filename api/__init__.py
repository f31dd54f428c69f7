"""
Firstmakers API package.

Provides the FastAPI application; the instance for uvicorn is ``api.app:app``.
"""
