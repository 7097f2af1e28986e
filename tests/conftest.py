"""
Shared fixtures for GDS air service tests
"""

import pytest
from datetime import date, timedelta
from unittest.mock import AsyncMock

from gds_air_service.config import WorkflowConfig
from gds_air_service.interfaces import GDSAPIInterface, TerminalInterface
from gds_air_service.services import AirService
from gds_air_service.utils.formatters import format_gds_date


@pytest.fixture
def gds():
    """GDS API client double"""
    return AsyncMock(spec=GDSAPIInterface)


@pytest.fixture
def terminal():
    """Terminal session double, shared by every session the service opens"""
    return AsyncMock(spec=TerminalInterface)


@pytest.fixture
def service(gds, terminal):
    return AirService(gds, lambda: terminal, WorkflowConfig())


@pytest.fixture
def segment_date_code():
    return format_gds_date(date.today() + timedelta(days=42))


@pytest.fixture
def segment_result(segment_date_code):
    return f"1. OK OPEN Y  {segment_date_code} DOHODM NO1"
