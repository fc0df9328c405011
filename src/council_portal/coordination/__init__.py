"""Priority-lease edit coordination."""

from council_portal.coordination.coordinator import EditCoordinator, LeaseResult
from council_portal.coordination.sweeper import LeaseSweeper

__all__ = ["EditCoordinator", "LeaseResult", "LeaseSweeper"]
