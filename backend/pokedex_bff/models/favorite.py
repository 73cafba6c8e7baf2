from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from pokedex_bff.db.base import Base
from pokedex_bff.db.types import JSONList


class Favorite(Base):
    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "pokemon_id", name="uq_favorite"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    pokemon_id: Mapped[int] = mapped_column(Integer, nullable=False)
    pokemon_name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    pokemon_sprite: Mapped[str | None] = mapped_column(String(512))
    pokemon_types: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
