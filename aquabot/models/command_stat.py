from sqlalchemy import Column, DateTime, Integer, Text
from sqlalchemy.sql import func

from aquabot.database import Base


class CommandStat(Base):
    __tablename__ = "command_stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    command_name = Column(Text, nullable=False, unique=True)
    usage_count = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
