"""High-level Discovery REST client."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from .auth.base import AuthStrategy
from .config import DEFAULT_SERVICE_URL, DEFAULT_VERSION, ClientConfig
from .exceptions import TransportError, ValidationError
from .http import JSON, DetailedResponse, ResultShape
from .http import send as http_send
from .request_builder import RequestBuilder, has_bad_first_or_last_char
from .resources import (
    CollectionsResource,
    ConfigurationsResource,
    CredentialsResource,
    DocumentsResource,
    EnvironmentsResource,
    EventsResource,
    GatewaysResource,
    MetricsResource,
    QueriesResource,
    TrainingResource,
    UserDataResource,
)


logger = logging.getLogger(__name__)


class DiscoveryClient:
    """Wrap Discovery V1 endpoints with helper methods."""

    def __init__(
        self,
        *,
        auth_strategy: AuthStrategy,
        version: str = DEFAULT_VERSION,
        base_url: str = DEFAULT_SERVICE_URL,
        verify_ssl: bool | str = True,
        timeout: float = 30.0,
        default_headers: Mapping[str, str] | None = None,
        query_defaults: Mapping[str, str] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if not version:
            raise ValidationError("version must be provided")
        if has_bad_first_or_last_char(base_url):
            raise ValidationError(
                "The URL shouldn't start or end with curly brackets or quotes. "
                'Be sure to remove any {} and " characters surrounding your URL'
            )
        self.config = ClientConfig(
            base_url=base_url.rstrip("/"),
            version=version,
            verify_ssl=verify_ssl,
            timeout=timeout,
            default_headers=default_headers,
            query_defaults=query_defaults,
        )
        self._suppress_insecure_warning_if_needed()
        self._session = session or requests.Session()
        self._auth = auth_strategy
        self.environments = EnvironmentsResource(self)
        self.configurations = ConfigurationsResource(self)
        self.collections = CollectionsResource(self)
        self.documents = DocumentsResource(self)
        self.queries = QueriesResource(self)
        self.training = TrainingResource(self)
        self.credentials = CredentialsResource(self)
        self.gateways = GatewaysResource(self)
        self.user_data = UserDataResource(self)
        self.events = EventsResource(self)
        self.metrics = MetricsResource(self)

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> DiscoveryClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - passthrough
        self.close()

    # Public API --------------------------------------------------------------
    def set_service_url(self, base_url: str) -> None:
        if has_bad_first_or_last_char(base_url):
            raise ValidationError(
                "The URL shouldn't start or end with curly brackets or quotes. "
                'Be sure to remove any {} and " characters surrounding your URL'
            )
        self.config.base_url = base_url.rstrip("/")

    def set_auth_strategy(self, auth_strategy: AuthStrategy) -> None:
        self._auth = auth_strategy

    def send(self, builder: RequestBuilder, shape: ResultShape = JSON) -> DetailedResponse:
        """Build, authenticate and send a request, returning the decoded envelope."""

        try:
            prepared = builder.build()
        finally:
            builder.release()
        self._auth.apply(prepared.headers)
        self._log_request(prepared.method or builder.method, prepared.url or "")
        response = self._perform_request(prepared, shape)
        logger.debug(
            "Discovery response %s for %s %s",
            response.status_code,
            prepared.method,
            prepared.url,
        )
        return response

    def close(self) -> None:
        self._session.close()

    # Internal helpers -------------------------------------------------------
    def _perform_request(
        self,
        prepared: requests.PreparedRequest,
        shape: ResultShape,
    ) -> DetailedResponse:
        try:
            return http_send(
                self._session,
                prepared,
                shape=shape,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            reason = str(exc).strip() or exc.__class__.__name__
            raise TransportError(
                f"Failed to communicate with Discovery API: {reason}", details=reason
            ) from exc

    def _log_request(self, method: str, url: str) -> None:
        logger.info(
            "Discovery request %s %s (version=%s)",
            method.upper(),
            url,
            self.config.version,
        )

    def _suppress_insecure_warning_if_needed(self) -> None:
        if isinstance(self.config.verify_ssl, bool) and not self.config.verify_ssl:
            urllib3.disable_warnings(InsecureRequestWarning)
