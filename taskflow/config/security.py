# taskflow/config/security.py
# Security configuration for authentication and HTTP responses

import os
from typing import Dict, List

from dotenv import load_dotenv

load_dotenv()


class SecurityConfig:
    """Security configuration for the application"""

    # Bearer token settings
    TOKEN = {
        'secret_key': os.getenv('SECRET_KEY', 'change-me-in-production'),
        'algorithm': os.getenv('ALGORITHM', 'HS256'),
        'expire_minutes': int(os.getenv('ACCESS_TOKEN_EXPIRE_MINUTES', 60 * 24)),
    }

    # Password rules
    PASSWORD = {
        'min_length': int(os.getenv('PASSWORD_MIN_LENGTH', 8)),
        'schemes': ['pbkdf2_sha256'],
    }

    # Security headers
    SECURITY_HEADERS = {
        'X-Content-Type-Options': 'nosniff',
        'X-Frame-Options': 'DENY',
        'X-XSS-Protection': '1; mode=block',
        'Referrer-Policy': 'strict-origin-when-cross-origin',
        'Permissions-Policy': 'geolocation=(), microphone=(), camera=()',
        'Content-Security-Policy': "default-src 'self'; script-src 'self'; style-src 'self' 'unsafe-inline'",
    }

    # HSTS only makes sense behind TLS
    ENABLE_HSTS = os.getenv('ENABLE_HSTS', 'false').lower() == 'true'
    HSTS_HEADER = 'max-age=31536000; includeSubDomains'

    @classmethod
    def get_cors_origins(cls) -> List[str]:
        """Get allowed CORS origins from a comma separated env var"""
        raw = os.getenv('CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173')
        return [origin.strip() for origin in raw.split(',') if origin.strip()]

    @classmethod
    def get_response_headers(cls) -> Dict[str, str]:
        """Headers appended to every response"""
        headers = dict(cls.SECURITY_HEADERS)
        if cls.ENABLE_HSTS:
            headers['Strict-Transport-Security'] = cls.HSTS_HEADER
        return headers
