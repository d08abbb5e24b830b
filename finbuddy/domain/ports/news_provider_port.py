"""
Port (interface) for external headline providers.
Infrastructure adapters (e.g. NewsDataProvider, FinnhubProvider) must implement
this interface. Providers are tried in order by the NewsFetcher.
"""

from abc import ABC, abstractmethod

from finbuddy.domain.entities.news import NewsDraft


class INewsProvider(ABC):
    name: str = "unknown"

    @abstractmethod
    def is_configured(self) -> bool:
        """True when the provider has the credentials it needs."""
        ...

    @abstractmethod
    def fetch(self) -> list[NewsDraft]:
        """Return at most 10 drafts.

        Raises:
            ProviderUnavailable: on HTTP failure or an unexpected response body.
        """
        ...
