"""
Provider registry for entry providers.

Provides registration and discovery of EntryProvider implementations.
"""

import logging
from typing import Any, Type

from .base import EntryProvider
from .exceptions import ProviderNotFoundError

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """
    Registry for entry providers.

    Usage:
        # Register using decorator
        @ProviderRegistry.register('json_file')
        class JSONFileProvider(EntryProvider):
            ...

        # Or register manually
        ProviderRegistry.register_provider('json_file', JSONFileProvider)

        # Get a configured provider instance
        provider = ProviderRegistry.get_provider('json_file', path='rt.json')
    """

    _providers: dict[str, Type[EntryProvider]] = {}

    @classmethod
    def register(cls, provider_name: str):
        """
        Decorator to register a provider class.

        Args:
            provider_name: Provider identifier for registry lookup
        """

        def decorator(provider_class: Type[EntryProvider]) -> Type[EntryProvider]:
            cls.register_provider(provider_name, provider_class)
            return provider_class

        return decorator

    @classmethod
    def register_provider(
        cls, provider_name: str, provider_class: Type[EntryProvider]
    ) -> None:
        """
        Register a provider class under a name.

        Raises:
            TypeError: If provider_class doesn't inherit from EntryProvider
        """
        if not issubclass(provider_class, EntryProvider):
            raise TypeError(
                f"Provider class must inherit from EntryProvider, "
                f"got {provider_class.__name__}"
            )

        provider_name = provider_name.lower()

        if provider_name in cls._providers:
            logger.warning(
                f"Overwriting existing entry provider '{provider_name}'"
            )

        cls._providers[provider_name] = provider_class
        logger.debug(f"Registered entry provider: {provider_name}")

    @classmethod
    def get_provider_class(cls, provider_name: str) -> Type[EntryProvider]:
        """
        Get a provider class by name (without instantiation).

        Raises:
            ProviderNotFoundError: If provider is not registered
        """
        provider_name = provider_name.lower()

        if provider_name not in cls._providers:
            raise ProviderNotFoundError(
                provider_name=provider_name,
                available_providers=list(cls._providers.keys()),
            )

        return cls._providers[provider_name]

    @classmethod
    def get_provider(cls, provider_name: str, **kwargs: Any) -> EntryProvider:
        """
        Instantiate a registered provider.

        Args:
            provider_name: Provider identifier
            **kwargs: Passed to the provider's constructor

        Returns:
            Configured provider instance

        Raises:
            ProviderNotFoundError: If provider is not registered
        """
        return cls.get_provider_class(provider_name)(**kwargs)

    @classmethod
    def list_providers(cls) -> list[str]:
        """Return sorted registered provider names."""
        return sorted(cls._providers.keys())

    @classmethod
    def is_provider_registered(cls, provider_name: str) -> bool:
        return provider_name.lower() in cls._providers

    @classmethod
    def unregister(cls, provider_name: str) -> None:
        """
        Remove a provider from the registry.

        Raises:
            ProviderNotFoundError: If provider is not registered
        """
        provider_name = provider_name.lower()
        if provider_name not in cls._providers:
            raise ProviderNotFoundError(
                provider_name=provider_name,
                available_providers=list(cls._providers.keys()),
            )
        del cls._providers[provider_name]
        logger.debug(f"Unregistered entry provider: {provider_name}")

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registered providers.

        Primarily used for testing to reset registry state.
        """
        cls._providers.clear()
        logger.debug("Cleared entry provider registry")


# =============================================================================
# Convenience Functions
# =============================================================================


def get_provider(provider_name: str, **kwargs: Any) -> EntryProvider:
    """Instantiate a registered provider. Wraps ProviderRegistry.get_provider()."""
    return ProviderRegistry.get_provider(provider_name, **kwargs)


def register_provider(
    provider_name: str, provider_class: Type[EntryProvider]
) -> None:
    """Register a provider class. Wraps ProviderRegistry.register_provider()."""
    ProviderRegistry.register_provider(provider_name, provider_class)


def list_providers() -> list[str]:
    """List registered provider names. Wraps ProviderRegistry.list_providers()."""
    return ProviderRegistry.list_providers()
