"""Resource-specific convenience wrappers."""
from .collections import CollectionsResource
from .configurations import ConfigurationsResource
from .credentials import CredentialsResource
from .documents import DocumentsResource
from .environments import EnvironmentsResource
from .events import EventsResource
from .gateways import GatewaysResource
from .metrics import MetricsResource
from .queries import QueriesResource
from .training import TrainingResource
from .user_data import UserDataResource

__all__ = [
    "EnvironmentsResource",
    "ConfigurationsResource",
    "CollectionsResource",
    "DocumentsResource",
    "QueriesResource",
    "TrainingResource",
    "CredentialsResource",
    "GatewaysResource",
    "UserDataResource",
    "EventsResource",
    "MetricsResource",
]
