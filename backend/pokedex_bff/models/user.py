from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from pokedex_bff.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, default="", server_default="")

    # bcrypt hash; empty for accounts that only sign in through Google.
    password: Mapped[str] = mapped_column(String(128), nullable=False, default="", server_default="")

    # Short shareable code other users add you by.
    code: Mapped[str] = mapped_column(String(16), nullable=False, unique=True, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
