from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from database import Base


class Habit(Base):
    __tablename__ = "habits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    color = Column(String(50), nullable=True)  # usually a hex color, e.g. "#d6b4fc"

    activity_logs = relationship(
        "ActivityLog",
        back_populates="habit",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ActivityLog.log_date",
    )
