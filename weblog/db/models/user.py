from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
from sqlalchemy.orm import relationship
from weblog.db.base import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(30), unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    profile_picture = Column(String, nullable=True)
    profile_public_id = Column(String, nullable=True)
    bio = Column(String(200), nullable=False, default="")
    twitter = Column(String, nullable=False, default="")
    instagram = Column(String, nullable=False, default="")
    tiktok = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow)

    posts = relationship("Post", back_populates="user")
    comments = relationship("Comment", back_populates="user")
    notifications = relationship(
        "Notification",
        back_populates="recipient",
        foreign_keys="Notification.recipient_id",
    )

    @property
    def socials(self):
        return {"twitter": self.twitter or "", "instagram": self.instagram or "", "tiktok": self.tiktok or ""}
