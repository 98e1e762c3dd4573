"""Circuit breaker settings for notification channels."""

from pydantic import Field

from leadnotify.configuration.base import InfrastructureSettings


class CircuitBreakerSettings(InfrastructureSettings):
    """Per-channel circuit breaker configuration.

    Every channel gets its own breaker built from these values.

    Environment Variables:
        CIRCUIT_BREAKER_ENABLED: Wrap channels in circuit breakers (default: True)
        CIRCUIT_BREAKER_FAILURE_THRESHOLD: Consecutive failures before
            opening (default: 3)
        CIRCUIT_BREAKER_TIMEOUT_SECONDS: Seconds to stay OPEN before a
            probe is allowed (default: 30)
    """

    enabled: bool = Field(
        default=True,
        alias="CIRCUIT_BREAKER_ENABLED",
        description="Enable circuit breakers around notification channels",
    )
    failure_threshold: int = Field(
        default=3,
        ge=1,
        alias="CIRCUIT_BREAKER_FAILURE_THRESHOLD",
        description="Consecutive failures before the circuit opens",
    )
    timeout_seconds: float = Field(
        default=30,
        ge=0,
        alias="CIRCUIT_BREAKER_TIMEOUT_SECONDS",
        description="Seconds before an OPEN circuit allows a probe",
    )
