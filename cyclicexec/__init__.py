"""Clock-driven cyclic executive with sample schedules and real-time priority, affinity and busy-wait helpers."""

__version__ = "0.1.0"
__all__ = ["affinity", "applications", "busywait", "executive", "priority"]