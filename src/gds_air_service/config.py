"""
Configuration management for the GDS air service
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerConfig(BaseSettings):
    """Server configuration"""
    port: int = 8000
    host: str = "0.0.0.0"
    environment: str = "development"
    debug: bool = False

    model_config = SettingsConfigDict(env_prefix="SERVER_")


class GDSAPIConfig(BaseSettings):
    """GDS API configuration"""
    base_url: str = "https://gds.example.com/api"
    username: Optional[str] = None
    password: Optional[str] = None
    target_branch: Optional[str] = None
    timeout: float = 30.0

    model_config = SettingsConfigDict(env_prefix="GDS_API_")


class TerminalConfig(BaseSettings):
    """Terminal emulation channel configuration"""
    base_url: str = "https://gds.example.com/api"
    timeout: float = 30.0

    model_config = SettingsConfigDict(env_prefix="GDS_TERMINAL_")


class WorkflowConfig(BaseSettings):
    """Constants used by the booking workflows"""
    # Placeholder passive segment used to make an unticketed PNR importable
    dummy_segment_airline: str = "OK"
    dummy_segment_class: str = "Y"
    dummy_segment_from: str = "DOH"
    dummy_segment_to: str = "ODM"
    dummy_segment_comment: str = "NO1"
    dummy_segment_days_ahead: int = 42
    ticketing_limit_days_ahead: int = 10

    booking_ticket_date_hours_ahead: int = 3
    booking_action_status_type: str = "TAU"
    docs_expiry_months_ahead: int = 12

    model_config = SettingsConfigDict(env_prefix="WORKFLOW_")


class LoggingConfig(BaseSettings):
    """Logging configuration"""
    level: str = "INFO"
    log_format: str = "json"  # json or text

    model_config = SettingsConfigDict(env_prefix="LOGGING_")


class Config:
    """Main configuration class"""

    def __init__(self):
        self.server = ServerConfig()
        self.gds_api = GDSAPIConfig()
        self.terminal = TerminalConfig()
        self.workflow = WorkflowConfig()
        self.logging = LoggingConfig()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.server.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.server.environment.lower() == "production"


# Global configuration instance
config = Config()
