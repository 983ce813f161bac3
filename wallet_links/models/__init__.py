"""Database models package."""

from wallet_links.models.base import Base
from wallet_links.models.coinstats import CoinstatsAccount, CoinstatsItem

__all__ = [
    # Base
    "Base",
    # Models
    "CoinstatsItem",
    "CoinstatsAccount",
]
