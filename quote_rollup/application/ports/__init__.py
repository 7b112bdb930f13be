"""Application ports package."""

from .database import DatabaseEnginePort
from .margin_lookup import CategoryMarginLookupPort, GlobalMarginLookupPort
from .margin_tiers_repository import MarginTiersRepositoryPort

__all__ = [
    "DatabaseEnginePort",
    "CategoryMarginLookupPort",
    "GlobalMarginLookupPort",
    "MarginTiersRepositoryPort",
]
