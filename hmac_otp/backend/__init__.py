"""
Backend package: Flask API around the hmac_otp token core.
"""

from .app import app

__all__ = ['app']
