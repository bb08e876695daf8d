"""
FormPilot Submission Gateway

Builds the comparison request from a completed form and posts it to the
core API.

Usage:
    from formpilot.gateway import ComparisonGateway, GatewayConfig

    with ComparisonGateway(GatewayConfig.from_env()) as gateway:
        result = gateway.submit_form(definition, values)
"""
from __future__ import annotations

from .client import CALCULATE_PATH, ComparisonGateway
from .config import GatewayConfig
from .request import build_request, collect_form_data

__all__ = [
    "CALCULATE_PATH",
    "ComparisonGateway",
    "GatewayConfig",
    "build_request",
    "collect_form_data",
]
