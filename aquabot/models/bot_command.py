from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, Text
from sqlalchemy.sql import func

from aquabot.database import Base


class BotCommand(Base):
    """Command definition edited from the admin panel; the bot only reads it."""

    __tablename__ = "bot_commands"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    triggers = Column(JSON, nullable=False, default=list)
    response = Column(Text, nullable=False)
    keyboard_json = Column(Text)
    command_type = Column(Text, nullable=False, default="text")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
