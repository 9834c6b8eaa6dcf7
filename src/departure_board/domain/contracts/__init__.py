"""Contracts shared between application services and adapters."""

from departure_board.domain.contracts.time_source import SystemTimeSource, TimeSourceProtocol

__all__ = ["SystemTimeSource", "TimeSourceProtocol"]
