from sqlalchemy import Column, Integer, String
from .base import Base, AuditColumns


class AccountEntity(Base, AuditColumns):
    __tablename__ = "account"

    id = Column(Integer, primary_key=True, autoincrement=True)
    uid = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    display_name = Column(String, nullable=True)
