"""Pure domain helpers for the ledger kernel (no DB access)."""

from ledger_kernel.domain.clock import Clock, DeterministicClock, SystemClock

__all__ = ["Clock", "DeterministicClock", "SystemClock"]
