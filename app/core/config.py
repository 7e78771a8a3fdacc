"""Directory sync configuration settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ErrorReportingSettings(BaseSettings):
    """Enhanced error reporting settings.

    Environment Variables:
        LOG_SUGGESTIONS: Log troubleshooting suggestions after each API error
        ERROR_LOG_LEVEL: Minimum log level at which enhanced errors are reported
    """

    LOG_SUGGESTIONS: bool = Field(default=False, alias="LOG_SUGGESTIONS")
    ERROR_LOG_LEVEL: str = Field(default="ERROR", alias="ERROR_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class AwsSettings(BaseSettings):
    """AWS configuration settings.

    Environment Variables:
        AWS_REGION: Region the identity store lives in
        IDENTITY_STORE_ID: ID of the target identity store
        SCIM_ENDPOINT: AWS SSO SCIM endpoint URL
        SCIM_ACCESS_TOKEN: Bearer token for the SCIM endpoint
        DRY_RUN: Log mutations instead of applying them
    """

    AWS_REGION: str = Field(default="us-east-1", alias="AWS_REGION")
    IDENTITY_STORE_ID: str = Field(default="", alias="IDENTITY_STORE_ID")
    SCIM_ENDPOINT: str = Field(default="", alias="SCIM_ENDPOINT")
    SCIM_ACCESS_TOKEN: str = Field(default="", alias="SCIM_ACCESS_TOKEN")
    DRY_RUN: bool = Field(default=False, alias="DRY_RUN")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class GoogleWorkspaceSettings(BaseSettings):
    """Google Workspace configuration settings.

    Environment Variables:
        GOOGLE_ADMIN_EMAIL: Admin user impersonated through domain-wide delegation
        GOOGLE_CREDENTIALS: Service account key (JSON string)
        GOOGLE_CUSTOMER_ID: Workspace customer ID
    """

    GOOGLE_ADMIN_EMAIL: str = Field(default="", alias="GOOGLE_ADMIN_EMAIL")
    GOOGLE_CREDENTIALS: str = Field(default="", alias="GOOGLE_CREDENTIALS")
    GOOGLE_CUSTOMER_ID: str = Field(default="my_customer", alias="GOOGLE_CUSTOMER_ID")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Directory sync configuration settings."""

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    errors: ErrorReportingSettings
    aws: AwsSettings
    google_workspace: GoogleWorkspaceSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production."""
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        settings_map = {
            "errors": ErrorReportingSettings,
            "aws": AwsSettings,
            "google_workspace": GoogleWorkspaceSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the settings instance
settings = Settings()
