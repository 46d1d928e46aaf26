"""
Service API — Version and Health Payload
=========================================

What:  Resolves the service version and builds the static health payload.
How:   Reads the installed distribution's metadata; falls back to
       "no version" when the package is not installed (e.g. run from a
       source checkout without `pip install -e .`).
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from service_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "service-api"
NO_VERSION = "no version"
STATUS_OK = "OK"


def get_version(distribution: str = DISTRIBUTION_NAME) -> str:
    try:
        return version(distribution)
    except PackageNotFoundError:
        logger.warning("Distribution %s is not installed; reporting '%s'", distribution, NO_VERSION)
        return NO_VERSION


def build_health_status(service_name: str, service_version: str | None = None) -> HealthResponse:
    """Computed once at app creation; every probe returns this same object."""
    return HealthResponse(
        name=service_name,
        version=service_version if service_version is not None else get_version(),
        status=STATUS_OK,
    )
