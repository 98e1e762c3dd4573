"""Lead notification delivery.

Packages:
- configuration: Settings management (Settings, NotificationSettings, CircuitBreakerSettings)
- logging: Structured logging setup and context binding
- resilience: Circuit breakers and the breaker registry
- notifications: Request/outcome models, channels, circuit guard, router
- services: Process-scoped providers (get_settings, get_notification_service)
"""

__version__ = "0.1.0"
