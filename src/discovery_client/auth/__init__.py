"""Authentication strategies for the Discovery service."""
from .base import AuthStrategy, NoAuth
from .basic import ApiKeyAuth, BasicAuth
from .bearer import BearerTokenAuth

__all__ = ["AuthStrategy", "NoAuth", "BasicAuth", "ApiKeyAuth", "BearerTokenAuth"]
