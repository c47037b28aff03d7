"""Repair of highlighted sprite pixels from duplicate captures."""

from .repairer import (
    DonorMismatchError,
    EmptyGroupError,
    RepairError,
    RepairedSprite,
    SpriteRepairer,
)

__all__ = [
    "DonorMismatchError",
    "EmptyGroupError",
    "RepairError",
    "RepairedSprite",
    "SpriteRepairer",
]
