"""
Admin authentication and public endpoint rate limiting
"""

import secrets
import time
from collections import defaultdict

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from placement_attendance.core.config import settings
from placement_attendance.utils.responses import rate_limit_error, unauthorized_error

# Simple in-memory rate limiter: client ip -> request timestamps
rate_limiter = defaultdict(list)

security = HTTPBearer()

def verify_admin_token(credentials: HTTPAuthorizationCredentials = Depends(security)):
    """Verify admin authentication token"""
    if not secrets.compare_digest(credentials.credentials, settings.ADMIN_TOKEN):
        unauthorized_error("Invalid admin token")
    return credentials.credentials

def rate_limit_check(client_ip: str, limit: int = None) -> bool:
    """Sliding one-minute window per IP address"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE

    current_time = time.time()
    minute_ago = current_time - 60

    rate_limiter[client_ip] = [
        req_time for req_time in rate_limiter[client_ip]
        if req_time > minute_ago
    ]

    if len(rate_limiter[client_ip]) >= limit:
        return False

    rate_limiter[client_ip].append(current_time)
    return True

def get_client_ip(request: Request) -> str:
    """Extract client IP from request, honouring reverse proxy headers"""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"

def enforce_rate_limit(request: Request):
    """Dependency for public endpoints"""
    if not rate_limit_check(get_client_ip(request)):
        rate_limit_error()
