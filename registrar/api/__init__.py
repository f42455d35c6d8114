"""
API module for the REST host adapter.
"""

from .rest_api import RegistrarRestAPI

__all__ = [
    "RegistrarRestAPI",
]
