"""Application use cases package."""

from .compute_rollup import ComputeRollupUseCase
from .refresh_calculation_totals import RefreshCalculationTotalsUseCase

__all__ = [
    "ComputeRollupUseCase",
    "RefreshCalculationTotalsUseCase",
]
