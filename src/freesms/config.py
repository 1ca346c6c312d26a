"""
Configuration management for the gateway client.

This module holds the settings that shape outgoing messages and the default
HTTP transport: chunk size, placeholder, allow-list, notice and timeouts.
"""

import os
from typing import FrozenSet
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .allowlist import DEFAULT_ALLOW_LIST, load_allow_list

FREE_MOBILE_ENDPOINT = "https://smsapi.free-mobile.fr/sendmsg"
GATEWAY_MAX_CHUNK_LENGTH = 999
DEFAULT_NOTICE = "[] = Emojis are not supported by FreeMobile API. Try to avoid them."


class GatewayConfig(BaseModel):
    """Configuration model for the Free Mobile gateway client."""

    # Gateway endpoint
    endpoint_url: str = Field(
        default=FREE_MOBILE_ENDPOINT,
        description="URL of the SMS gateway endpoint"
    )

    http_method: str = Field(
        default="POST",
        description="POST sends a JSON body, GET sends query parameters"
    )

    # Message shaping
    max_chunk_length: int = Field(
        default=GATEWAY_MAX_CHUNK_LENGTH,
        description="Maximum characters per gateway call"
    )

    placeholder: str = Field(
        default="[]",
        description="Replacement text for unsupported symbols"
    )

    allow_list: FrozenSet[str] = Field(
        default=DEFAULT_ALLOW_LIST,
        description="Pictographic sequences passed through unchanged"
    )

    append_notice: bool = Field(
        default=False,
        description="Append notice_text when at least one symbol was replaced"
    )

    notice_text: str = Field(
        default=DEFAULT_NOTICE,
        description="Explanatory note for replaced symbols"
    )

    # Transport settings
    request_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for a single gateway call in seconds"
    )

    # Logging settings
    log_message_content: bool = Field(
        default=False,
        description="Whether to log message content (privacy consideration)"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator('http_method')
    @classmethod
    def validate_http_method(cls, v):
        v = v.upper()
        if v not in ("GET", "POST"):
            raise ValueError("http_method must be GET or POST")
        return v

    @field_validator('max_chunk_length')
    @classmethod
    def validate_max_chunk_length(cls, v):
        if v <= 0:
            raise ValueError("max_chunk_length must be positive")
        if v > GATEWAY_MAX_CHUNK_LENGTH:
            raise ValueError(
                f"max_chunk_length cannot exceed {GATEWAY_MAX_CHUNK_LENGTH} characters"
            )
        return v

    @field_validator('placeholder')
    @classmethod
    def validate_placeholder(cls, v):
        if not v:
            raise ValueError("placeholder must be a non-empty string")
        return v

    @field_validator('request_timeout_seconds')
    @classmethod
    def validate_request_timeout(cls, v):
        if v <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        if v > 120:
            raise ValueError("request_timeout_seconds cannot exceed 120 seconds")
        return v


def load_config() -> GatewayConfig:
    """
    Load configuration from environment variables or defaults.

    Environment variables supported:
    - FREESMS_ENDPOINT_URL: Gateway URL
    - FREESMS_HTTP_METHOD: GET or POST
    - FREESMS_MAX_CHUNK_LENGTH: Characters per gateway call
    - FREESMS_PLACEHOLDER: Replacement for unsupported symbols
    - FREESMS_ALLOW_LIST_FILE: Path of an allow-list file
    - FREESMS_APPEND_NOTICE: Append the notice after replacements (true/false)
    - FREESMS_NOTICE_TEXT: Notice text
    - FREESMS_REQUEST_TIMEOUT: Gateway call timeout in seconds
    - FREESMS_LOG_CONTENT: Log message content (true/false)

    Returns:
        GatewayConfig: Configured settings instance
    """
    config_data = {}

    if endpoint := os.getenv('FREESMS_ENDPOINT_URL'):
        config_data['endpoint_url'] = endpoint

    if method := os.getenv('FREESMS_HTTP_METHOD'):
        config_data['http_method'] = method

    if max_length := os.getenv('FREESMS_MAX_CHUNK_LENGTH'):
        config_data['max_chunk_length'] = int(max_length)

    if placeholder := os.getenv('FREESMS_PLACEHOLDER'):
        config_data['placeholder'] = placeholder

    if allow_list_file := os.getenv('FREESMS_ALLOW_LIST_FILE'):
        config_data['allow_list'] = load_allow_list(allow_list_file)

    if append_notice := os.getenv('FREESMS_APPEND_NOTICE'):
        config_data['append_notice'] = append_notice.lower() == 'true'

    if notice_text := os.getenv('FREESMS_NOTICE_TEXT'):
        config_data['notice_text'] = notice_text

    if timeout := os.getenv('FREESMS_REQUEST_TIMEOUT'):
        config_data['request_timeout_seconds'] = float(timeout)

    if log_content := os.getenv('FREESMS_LOG_CONTENT'):
        config_data['log_message_content'] = log_content.lower() == 'true'

    return GatewayConfig(**config_data)


# Global configuration instance
config = load_config()
