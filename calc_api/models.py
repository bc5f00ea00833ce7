# calc_api/models.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.sql import func

from .database import Base

ALLOWED_OS = ("ios", "android")


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("os IN ('ios', 'android')", name="ck_users_os"),
    )

    id = Column(Integer, primary_key=True)
    uuid = Column(Uuid, unique=True, nullable=False)
    os = Column(String(10), nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True)
    calculation = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
