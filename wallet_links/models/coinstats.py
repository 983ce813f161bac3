"""CoinStats item and linked account models."""

from typing import Any

from sqlalchemy import JSON, ForeignKey, Index, String, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wallet_links.constants import (
    COINSTATS_ACCOUNTS_TABLE,
    COINSTATS_ITEMS_TABLE,
    WALLET_INDEX,
    WALLET_INDEX_COLUMNS,
)
from wallet_links.migration.wallet_columns import WALLET_INDEX_PREDICATE
from wallet_links.models.base import Base, TimestampMixin, UUIDMixin


class CoinstatsItem(Base, UUIDMixin, TimestampMixin):
    """A CoinStats connection owning one or more linked accounts."""

    __tablename__ = COINSTATS_ITEMS_TABLE

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    accounts: Mapped[list["CoinstatsAccount"]] = relationship(
        back_populates="item", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<CoinstatsItem {self.name}>"


class CoinstatsAccount(Base, UUIDMixin, TimestampMixin):
    """An externally sourced account linked through a CoinStats item."""

    __tablename__ = COINSTATS_ACCOUNTS_TABLE

    coinstats_item_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey(f"{COINSTATS_ITEMS_TABLE}.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Token/account identifier from CoinStats
    account_id: Mapped[str | None] = mapped_column(String, nullable=True)
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    currency: Mapped[str | None] = mapped_column(String(10), nullable=True)

    # Wallet the token lives in
    address: Mapped[str | None] = mapped_column(String, nullable=True)
    blockchain: Mapped[str | None] = mapped_column(String, nullable=True)

    # Source-of-truth payload as received from CoinStats
    raw_payload: Mapped[dict[str, Any] | None] = mapped_column(
        JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql"),
        nullable=True,
    )

    item: Mapped[CoinstatsItem] = relationship(back_populates="accounts")

    __table_args__ = (
        Index(
            WALLET_INDEX,
            *WALLET_INDEX_COLUMNS,
            unique=True,
            **WALLET_INDEX_PREDICATE.dialect_kwargs(),
        ),
    )

    @property
    def is_wallet_linked(self) -> bool:
        """Whether the row is covered by the wallet uniqueness index."""
        return WALLET_INDEX_PREDICATE.matches(
            {
                "account_id": self.account_id,
                "address": self.address,
                "blockchain": self.blockchain,
            }
        )

    def __repr__(self) -> str:
        return f"<CoinstatsAccount {self.account_id} {self.blockchain}:{self.address}>"
