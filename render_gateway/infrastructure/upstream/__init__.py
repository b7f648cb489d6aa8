# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import UpstreamError
from .models import (
    DeployHandle,
    EnvVar,
    EnvVarEntry,
    EnvVarInput,
    Event,
    EventEntry,
    ServiceSummary,
)
from .render_client import RenderApiClient

__all__ = [
    "DeployHandle",
    "EnvVar",
    "EnvVarEntry",
    "EnvVarInput",
    "Event",
    "EventEntry",
    "RenderApiClient",
    "ServiceSummary",
    "UpstreamError",
]
