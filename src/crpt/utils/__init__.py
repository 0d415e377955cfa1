"""
Rate limiting, configuration and logging utilities.
"""

from crpt.utils.cancellation import CancellationToken
from crpt.utils.clock import Clock, ManualClock, MonotonicClock
from crpt.utils.config import ClientConfig
from crpt.utils.logger import LoggerFactory, setup_logger
from crpt.utils.rate_limiter import SlidingWindowLimiter

__all__ = [
    'CancellationToken',
    'Clock',
    'ManualClock',
    'MonotonicClock',
    'ClientConfig',
    'LoggerFactory',
    'setup_logger',
    'SlidingWindowLimiter',
]
