"""Utility modules."""

from job_tracker.utils.gate import GateState, SingleFlightGate
from job_tracker.utils.logger import setup_logger

__all__ = ["GateState", "SingleFlightGate", "setup_logger"]
