from aquabot.schemas.ticketing import ParkLoad, SessionSlot, Tariff
from aquabot.schemas.vk import ButtonClicked, MessageReceived, NormalizedEvent, OutboundReply, PermissionGranted

__all__ = [
    "ButtonClicked",
    "MessageReceived",
    "NormalizedEvent",
    "OutboundReply",
    "ParkLoad",
    "PermissionGranted",
    "SessionSlot",
    "Tariff",
]
