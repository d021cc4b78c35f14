"""Webhook subscription management."""

from dataclasses import dataclass, field


@dataclass
class WebhookSubscription:
    """A registered webhook endpoint."""

    url: str
    secret: str
    event_types: list[str] = field(default_factory=list)
    active: bool = True


class WebhookRegistry:
    """Registry of webhook subscriptions.

    One instance is built at application startup and kept on ``app.state``.
    """

    def __init__(self, subscriptions: list[WebhookSubscription] | None = None) -> None:
        self._subscriptions: list[WebhookSubscription] = list(subscriptions or [])

    @classmethod
    def from_urls(cls, urls: list[str], secret: str) -> "WebhookRegistry":
        return cls([WebhookSubscription(url=url, secret=secret) for url in urls])

    def get_subscribers(self, event_type: str) -> list[WebhookSubscription]:
        """Return active subscriptions matching the event type."""
        return [
            s
            for s in self._subscriptions
            if s.active and (not s.event_types or event_type in s.event_types)
        ]

    def list_all(self) -> list[WebhookSubscription]:
        return list(self._subscriptions)
