"""Default configuration parameters for plan loading and reference resolution."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FetchParams:
    """HTTP fetch transport parameters."""
    timeout_seconds: float = 30.0                    # Per-request timeout
    retry_attempts: int = 2                          # Retries after the first attempt
    retry_delay_seconds: float = 0.5                 # Fixed delay between attempts
    user_agent: str = "otp-app/0.1"
    headers: dict[str, str] = field(default_factory=dict)
    follow_redirects: bool = True


@dataclass(frozen=True)
class ResolverParams:
    """Resolution pass parameters."""
    concurrent: bool = False                         # Fan out sibling references
    max_concurrent_fetches: int = 8                  # In-flight fetch bound when concurrent


@dataclass(frozen=True)
class DocumentParams:
    """Document decoding parameters."""
    format: str = "yaml"                             # yaml also reads JSON


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters passed to configure_logging."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    fetch: FetchParams
    resolver: ResolverParams
    document: DocumentParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        fetch=FetchParams(),
        resolver=ResolverParams(),
        document=DocumentParams(),
        logging=LoggingParams(),
    )
