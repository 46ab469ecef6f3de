"""Steering behaviours, dungeon generation and portal pathfinding for a top-down simulation."""

__version__ = "0.1.0"
__all__ = ["vecmath", "dungeon", "pathfinder", "objects", "steering", "game", "cli"]