from sqlalchemy import BigInteger, Column, DateTime, Integer, String, func
from sqlalchemy.dialects import mysql

from .database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    # set on delete; rows with a value here are hidden from lookups
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    code = Column(String(255), nullable=False, default="")
    price = Column(BigInteger().with_variant(mysql.BIGINT(unsigned=True), "mysql"), nullable=False, default=0)

    def __repr__(self) -> str:
        return f"Product(id={self.id!r}, code={self.code!r}, price={self.price!r}, deleted_at={self.deleted_at!r})"
