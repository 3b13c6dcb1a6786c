"""Application settings using Pydantic BaseSettings."""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Queries:
#   calcs       data type to query; only a single calc can be parsed
#   format      "indexed" gives zero-indexed total returns to date,
#               "real" gives equivalent reinvested shares from creation
#   securities  the ticker to query; only a single security can be parsed
#   maxPoints   indirectly sets the start date, the last point is always today
DEFAULT_URL_TEMPLATE = (
    "https://ycharts.com/charts/fund_data.json"
    "?calcs=id:total_return_forward_adjusted_price,include:true,,"
    "&format=indexed"
    "&securities=id:{0},include:true,,"
    "&splitType=single"
    "&maxPoints=34000000"
)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Downloader settings loaded from environment variables."""

    url_template: str = DEFAULT_URL_TEMPLATE
    session_cookie_name: str = "ycsessionid"
    session_cookie_domain: str = "ycharts.com"
    http_user_agent: str = DEFAULT_USER_AGENT
    http_content_type: str = "application/json"
    request_timeout: float = 20.0

    output_delimiter: str = ","
    output_date_format: str = "%Y-%m-%d"
    output_line_terminator: str = "\r\n"
    output_prefix: str = "ycharts"

    min_delay_millis: int = 2000
    max_delay_millis: int = 5000

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="YCHARTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra fields in .env file
    )

    @model_validator(mode="after")
    def _check_delay_window(self) -> "Settings":
        if self.min_delay_millis < 0 or self.max_delay_millis < 0:
            raise ValueError("throttle delays must not be negative")
        if self.min_delay_millis > self.max_delay_millis:
            raise ValueError(
                f"min_delay_millis ({self.min_delay_millis}) exceeds "
                f"max_delay_millis ({self.max_delay_millis})"
            )
        return self

    @field_validator("output_delimiter")
    @classmethod
    def _single_char_delimiter(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("output_delimiter must be a single character")
        return v
