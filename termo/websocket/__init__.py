"""
WebSocket Package

Real-time event handlers for the game.
"""

from .handlers import register_websocket_handlers

__all__ = ['register_websocket_handlers']
