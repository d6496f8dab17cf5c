# expenses_api/models/transaction.py
from sqlalchemy import Column, String, Integer, ForeignKey, Float
from sqlalchemy.orm import relationship

from expenses_api.core.database import Base
from .base import EntityMixin


class Transaction(EntityMixin, Base):
    __tablename__ = "transactions"

    # Open tag; the API only accepts "Income" or "Expense"
    type = Column(String(50), nullable=False)
    amount = Column(Float, nullable=False)
    category = Column(String(100), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    user = relationship("User", back_populates="transactions")

    def __repr__(self):
        return f"<Transaction type={self.type} amount={self.amount} user_id={self.user_id}>"
