"""Headers that identify this SDK to the service."""

from __future__ import annotations

import platform

from .config import SERVICE_NAME, SERVICE_VERSION

SDK_NAME = "discovery-client-python"
SDK_VERSION = "0.4.0"

HEADER_SDK_ANALYTICS = "X-IBMCloud-SDK-Analytics"
HEADER_USER_AGENT = "User-Agent"

_USER_AGENT = (
    f"{SDK_NAME}-{SDK_VERSION} "
    f"(arch={platform.machine()}; os={platform.system()}; "
    f"python.version={platform.python_version()})"
)


def get_sdk_headers(
    operation_id: str,
    *,
    service_name: str = SERVICE_NAME,
    service_version: str = SERVICE_VERSION,
) -> dict[str, str]:
    """Return the analytics and user-agent headers for one operation."""

    return {
        HEADER_SDK_ANALYTICS: (
            f"service_name={service_name};"
            f"service_version={service_version};"
            f"operation_id={operation_id}"
        ),
        HEADER_USER_AGENT: _USER_AGENT,
    }
