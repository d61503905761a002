"""
API Gateway Module

This module provides a centralized gateway layer for the API that handles:
- Middleware management
- Error handling (business errors become user notices)
- Router registration
- Health checks

The gateway acts as the single entry point for all API requests.
"""
from .gateway import APIGateway

__all__ = ["APIGateway"]
