from .dto import RateLimitPolicy
from .limiter import RateLimitCounter, RateLimiter

__all__ = ["RateLimitCounter", "RateLimitPolicy", "RateLimiter"]
