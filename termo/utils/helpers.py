"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional


def get_user_identity(request_obj=None) -> Dict[str, Optional[str]]:
    """Extract player identity information from an HTTP or WebSocket request."""
    if request_obj is None:
        from flask import request, has_request_context
        if not has_request_context():
            return {'user_ip': 'system', 'session_id': None}
        request_obj = request

    return {
        'user_ip': getattr(request_obj, 'remote_addr', None) or 'unknown',
        'session_id': getattr(request_obj, 'sid', None)  # set for WebSocket events
    }
