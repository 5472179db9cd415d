"""Configuration for the CLI tool."""

from pydantic import BaseModel, Field

DEFAULT_API_PATH = "/api/v1/chat"


class CLIConfig(BaseModel):
    """CLI connection settings."""

    host: str = Field(default="localhost", description="Server host")
    port: int = Field(default=8080, description="Server port")
    api_path: str = Field(
        default=DEFAULT_API_PATH, description="API path for the chat endpoint"
    )
    timeout: float = Field(default=120.0, description="Request timeout in seconds")

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def chat_url(self) -> str:
        return f"{self.base_url}{self.api_path}"
