"""Application settings and configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Optional, List


def _split_list(value: str) -> List[str]:
    """Comma separated setting to list; a lone ``*`` stays a wildcard."""
    if value.strip() == "*":
        return ["*"]
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Application settings with environment variable loading."""

    # API settings
    PROJECT_NAME: str = "SI-KERTAS API"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    API_V1_STR: str = "/api/v1"

    # CORS
    CORS_ORIGINS: str = "*"
    CORS_HEADERS: str = "*"
    CORS_METHODS: str = "*"

    # Spreadsheet data source (CSV export)
    SPREADSHEET_BASE_URL: str = "https://docs.google.com/spreadsheets/d"
    SPREADSHEET_PEGAWAI_ID: str = "1iB7Tdda08wD1u5IwiKUEjkfI2JFzw4wjTI_bGRhivVc"
    SPREADSHEET_JADWAL_ID: str = "1efjMOHknnC4RaYf9qTxPXGoLHSv5HelSMPYBqDi_y6s"
    SHEET_PEGAWAI: str = "DATA_PEGAWAI"
    SHEET_JADWAL: str = "Jadwal Tugas"
    SHEET_DISIPLIN: str = "DISIPLIN_PEGAWAI"
    SHEET_LAPORAN: str = "LAPORAN_TUGAS"
    SCHEDULE_LAYOUT: str = "compact"  # Options: compact, jadwal_tugas
    FETCH_TIMEOUT_SECONDS: float = 15.0
    REFRESH_ON_STARTUP: bool = True

    # Script host (mutation boundary). Empty means demo mode.
    SCRIPT_HOST_URL: Optional[str] = None
    SCRIPT_HOST_TIMEOUT_SECONDS: float = 20.0

    # Business rules
    TIMEZONE: str = "Asia/Jayapura"
    MIN_DOCUMENTATION_PHOTOS: int = 3
    SUPER_ADMIN_USERNAME: str = "Admin"
    ADMIN_TIM_NIPS: str = ""

    # Logging
    LOG_DIRECTORY: str = "logs"
    LOG_MAX_BYTES: int = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT: int = 5
    SERVICE_NAME: str = "sikertas"

    @field_validator("API_V1_STR")
    def ensure_api_prefix_has_slash(cls, v: str) -> str:
        """Ensure API prefix starts with a slash."""
        if not v.startswith("/"):
            return f"/{v}"
        return v

    @field_validator("SCHEDULE_LAYOUT")
    def validate_schedule_layout(cls, v: str) -> str:
        """Only known schedule sheet layouts are accepted."""
        v = v.strip().lower()
        if v not in ("compact", "jadwal_tugas"):
            raise ValueError("SCHEDULE_LAYOUT must be 'compact' or 'jadwal_tugas'")
        return v

    @field_validator("SCRIPT_HOST_URL", mode="before")
    def empty_script_host_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty script host URL as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def CORS_ORIGINS_LIST(self) -> List[str]:
        return _split_list(self.CORS_ORIGINS)

    @property
    def CORS_METHODS_LIST(self) -> List[str]:
        return _split_list(self.CORS_METHODS)

    @property
    def CORS_HEADERS_LIST(self) -> List[str]:
        return _split_list(self.CORS_HEADERS)

    @property
    def ADMIN_TIM_NIPS_LIST(self) -> List[str]:
        """NIPs granted the team-admin role."""
        return _split_list(self.ADMIN_TIM_NIPS)

    @property
    def IS_DEMO_MODE(self) -> bool:
        """Mutations are applied locally when no script host is configured."""
        return not self.SCRIPT_HOST_URL

    def spreadsheet_export_url(self, spreadsheet_id: str) -> str:
        """CSV export endpoint of a spreadsheet; the sheet is picked by query param."""
        return f"{self.SPREADSHEET_BASE_URL}/{spreadsheet_id}/gviz/tq"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )


# Create global settings instance
settings = Settings()
