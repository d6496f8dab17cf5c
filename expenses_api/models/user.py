# expenses_api/models/user.py
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from expenses_api.core.database import Base
from .base import EntityMixin


class User(EntityMixin, Base):
    __tablename__ = "users"

    # Stored lower-cased so the unique index is case-insensitive
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)

    transactions = relationship(
        "Transaction",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<User id={self.id} email={self.email}>"
