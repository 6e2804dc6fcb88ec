"""
HTTP服务模块
HTTP Server Module
"""
from .api_server import create_app

__all__ = ['create_app']
