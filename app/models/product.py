from sqlalchemy import Column, String, Integer, Numeric, Boolean, Text, JSON, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from app.database.connection import Base
from app.models.user import User

class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        CheckConstraint("weight IS NULL OR weight >= 0", name="ck_products_weight_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    sku = Column(String(100), unique=True, index=True, nullable=False)
    category = Column(String(100), nullable=False, index=True)

    stock = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    weight = Column(Numeric(8, 2, asdecimal=False), nullable=True)

    # plain dict / list values, serialized as JSON at the column boundary
    dimensions = Column(JSON, nullable=True)
    tags = Column(JSON, nullable=False, default=list)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    creator = relationship(User, foreign_keys=[created_by])
    updater = relationship(User, foreign_keys=[updated_by])
