"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables (prefixed with
``ALUMNI_BALLOT_``) or an optional ``.env`` file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_POSITIONS = (
    "Chairman,Vice-Chairman,Social Director 1,Social Director 2,"
    "Welfare Director 1,Welfare Director 2,PRO 1,PRO 2,Secretary 1,Secretary 2"
)


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ALUMNI_BALLOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend
    backend_url: str = Field(
        default="http://localhost:5000",
        description="Origin of the election backend service",
    )
    api_prefix: str = Field(
        default="/api",
        description="Path prefix joined before every endpoint path (may be empty)",
    )
    request_timeout: float = Field(
        default=10.0,
        description="HTTP request timeout in seconds",
        gt=0,
    )

    @field_validator("backend_url")
    @classmethod
    def validate_backend_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            msg = "backend_url must use http or https"
            raise ValueError(msg)
        return v.rstrip("/")

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        v = v.strip().strip("/")
        return f"/{v}" if v else ""

    # Endpoint paths
    candidates_path: str = Field(default="/candidates", description="Public candidate list")
    committee_candidates_path: str = Field(
        default="/committee/candidates",
        description="Authenticated candidate list with vote counts",
    )
    signup_path: str = Field(default="/committee/signup", description="Committee account bootstrap")
    login_path: str = Field(default="/committee/login", description="Committee session token issuance")
    register_path: str = Field(default="/candidates/register", description="Candidate registration")
    vote_path: str = Field(default="/votes", description="Single vote submission")
    bulk_vote_path: str = Field(default="/votes/bulk", description="Full ballot submission")

    # Session
    token_file: str = Field(
        default="~/.alumni-ballot/session.json",
        description="Client-local file holding the committee session token",
    )

    # Election
    registration_open: bool = Field(
        default=False,
        description="Show the candidate registration form instead of the closed notice",
    )
    positions: str = Field(
        default=DEFAULT_POSITIONS,
        description="Comma-separated, ordered list of contested committee positions",
    )
    duplicate_vote_marker: str = Field(
        default="already voted",
        min_length=1,
        description="Substring of a backend rejection that identifies a duplicate vote",
    )

    @property
    def position_list(self) -> list[str]:
        """Parse the positions string into an ordered list of position names."""
        if not self.positions.strip():
            return []
        return [p.strip() for p in self.positions.split(",") if p.strip()]

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )
    log_json: bool = Field(
        default=False,
        description="Write console log records as JSON lines",
    )

    def endpoint(self, path: str) -> str:
        """Join the API prefix and an endpoint path into a request path."""
        return f"{self.api_prefix}/{path.lstrip('/')}"


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
