"""
Stock Monitoring Module

Availability probing, the fixed backoff countdown and the watch loop.
"""

from .availability import AvailabilityProber, AvailabilityState, ProbeResult
from .countdown import Countdown
from .stock_monitor import StockMonitor, AcquisitionSucceeded, LoopState, RETRY_TIMEOUT_SECONDS

__all__ = [
    'AvailabilityProber', 'AvailabilityState', 'ProbeResult', 'Countdown',
    'StockMonitor', 'AcquisitionSucceeded', 'LoopState', 'RETRY_TIMEOUT_SECONDS'
]
