"""
FastAPI application, routes and schemas.
"""
