"""Configuration management for Issue Mirror."""

import os

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings are resolved once per invocation and handed to the service
    explicitly; nothing reads them from module scope.
    """

    # Repositories (organization falls back to the event payload when empty)
    organization: str = ""
    private_repo: str = ""
    public_repo: str = ""

    # Bot identity
    bot_username: str = ""
    bot_access_token: str = ""
    public_assignee: str = ""

    # Mirroring behaviour
    public_label: str = "public"
    closing_comment: str = "Closing – look for this in the next release! 😃"

    # GitHub API
    github_api_url: str = "https://api.github.com"
    request_timeout_seconds: float = 30.0

    # Server (only used by the webhook receiver)
    github_webhook_secret: str = ""
    host: str = "0.0.0.0"
    port: int = 8000

    log_level: str = "INFO"

    model_config = {"env_prefix": "ISSUE_MIRROR_"}

    @classmethod
    def from_workflow_inputs(cls) -> "Settings":
        """Load settings, letting workflow step inputs (INPUT_<NAME>) take precedence."""
        inputs = {}
        for name in cls.model_fields:
            value = os.environ.get(f"INPUT_{name.upper()}")
            if value:
                inputs[name] = value
        return cls(**inputs)

    def missing_fields(self) -> list[str]:
        """Names of required settings that are still empty."""
        required = (
            "private_repo",
            "public_repo",
            "bot_username",
            "bot_access_token",
            "public_assignee",
        )
        return [name for name in required if not getattr(self, name)]
