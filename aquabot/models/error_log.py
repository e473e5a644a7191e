from sqlalchemy import JSON, BigInteger, Column, DateTime, Integer, Text
from sqlalchemy.sql import func

from aquabot.database import Base


class ErrorLog(Base):
    __tablename__ = "error_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    error_message = Column(Text, nullable=False)
    user_id = Column(BigInteger)
    command = Column(Text)
    additional_data = Column(JSON)  # component, date, session, category
