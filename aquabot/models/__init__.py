from aquabot.models.bot_command import BotCommand
from aquabot.models.command_stat import CommandStat
from aquabot.models.error_log import ErrorLog

__all__ = [
    "BotCommand",
    "CommandStat",
    "ErrorLog",
]
