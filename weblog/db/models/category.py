from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from weblog.db.base import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)

    posts = relationship("Post", back_populates="category")
