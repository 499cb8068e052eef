"""Provider registry - resolves, caches and health-checks provider instances.

Provider lifecycle per type::

    uninitialized -> constructing -> cached (live)
                          ^                |
                          +---- stale <----+  (liveness probe failed)

The registry holds at most one live instance per provider type. A per-type
``asyncio.Lock`` serialises the check-construct-cache sequence so that
concurrent callers never build the same provider twice. A registry serves
one event loop at a time; ``clear_instances`` resets it for another.
"""

import asyncio
from collections.abc import Mapping
from enum import Enum
from typing import Any

from loguru import logger
from pydantic import ValidationError

from taskpilot.core.config import Settings, get_settings
from taskpilot.decomposition.models import ProviderConfig
from taskpilot.providers.anthropic_provider import AnthropicProvider
from taskpilot.providers.base import AIProvider
from taskpilot.providers.errors import ProviderError, ProviderErrorCode
from taskpilot.providers.google_provider import GoogleProvider


class ProviderType(str, Enum):
    """Supported provider types."""

    ANTHROPIC = "anthropic"
    GOOGLE = "google"


PROVIDER_CLASSES: dict[ProviderType, type[AIProvider]] = {
    ProviderType.ANTHROPIC: AnthropicProvider,
    ProviderType.GOOGLE: GoogleProvider,
}

# Fallback order for get_best_provider
PREFERENCE_ORDER: tuple[ProviderType, ...] = (ProviderType.ANTHROPIC, ProviderType.GOOGLE)

ConfigLike = ProviderConfig | Mapping[str, Any] | None


class ProviderRegistry:
    """
    Registry owning one cached instance per provider type.

    Example:
        >>> registry = ProviderRegistry()
        >>> provider = await registry.get_provider("anthropic", {"api_key": "sk-ant-..."})
        >>> provider is await registry.get_provider("anthropic", {"api_key": "sk-ant-..."})
        True
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the registry.

        Args:
            settings: Settings used for environment credentials. Uses the
                cached settings if not provided.
        """
        self.settings = settings or get_settings()
        self._instances: dict[ProviderType, AIProvider] = {}
        self._locks: dict[ProviderType, asyncio.Lock] = {}

    @property
    def cached_types(self) -> list[ProviderType]:
        """Provider types with a cached instance."""
        return list(self._instances)

    # =========================================================================
    # VALIDATION
    # =========================================================================

    @staticmethod
    def _validate_provider_type(provider_type: ProviderType | str) -> ProviderType:
        try:
            return ProviderType(provider_type)
        except ValueError:
            supported = ", ".join(t.value for t in ProviderType)
            raise ProviderError(
                f"Provider type '{provider_type}' not supported. Must be one of: {supported}",
                ProviderErrorCode.INVALID_PROVIDER,
            ) from None

    @staticmethod
    def _validate_config(config: ConfigLike, provider_type: ProviderType) -> ProviderConfig:
        if isinstance(config, ProviderConfig):
            validated = config
        else:
            try:
                validated = ProviderConfig.model_validate(dict(config or {}))
            except (ValidationError, TypeError, ValueError) as e:
                raise ProviderError(
                    f"Invalid configuration for {provider_type.value} provider: {e}",
                    ProviderErrorCode.INVALID_CONFIG,
                ) from e

        if not validated.api_key:
            raise ProviderError(
                f"API key is required for {provider_type.value} provider",
                ProviderErrorCode.INVALID_CONFIG,
            )
        return validated

    @staticmethod
    def _resolve_provider_class(provider_type: ProviderType) -> type[AIProvider]:
        try:
            return PROVIDER_CLASSES[provider_type]
        except KeyError:
            raise ProviderError(
                f"Failed to load {provider_type.value} provider module: no implementation registered",
                ProviderErrorCode.MODULE_LOAD_ERROR,
            ) from None

    # =========================================================================
    # PRIMARY INTERFACE
    # =========================================================================

    async def get_provider(self, provider_type: ProviderType | str, config: ConfigLike) -> AIProvider:
        """
        Get or create a provider instance.

        Args:
            provider_type: Provider type, e.g. ``"anthropic"``.
            config: ProviderConfig or mapping with ``api_key``/``model``/``options``.

        Returns:
            A live, initialized provider shared with other callers.

        Raises:
            ProviderError: With one of the ProviderErrorCode values.
        """
        try:
            ptype = self._validate_provider_type(provider_type)
            provider_config = self._validate_config(config, ptype)

            async with self._locks.setdefault(ptype, asyncio.Lock()):
                cached = self._instances.get(ptype)
                if cached is not None:
                    if await cached.is_available():
                        return cached
                    logger.info(f"Cached {ptype.value} provider is unavailable, recreating")
                    del self._instances[ptype]

                provider_class = self._resolve_provider_class(ptype)

                provider = provider_class()
                try:
                    await provider.initialize(provider_config)
                except Exception as e:
                    raise ProviderError(
                        f"Failed to initialize {ptype.value} provider: {e}",
                        ProviderErrorCode.INIT_ERROR,
                    ) from e

                if not await provider.is_available():
                    raise ProviderError(
                        f"{ptype.value} provider is not available after initialization",
                        ProviderErrorCode.PROVIDER_UNAVAILABLE,
                    )

                self._instances[ptype] = provider
                logger.info(f"Cached {ptype.value} provider ({provider.model})")
                return provider

        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(
                f"Unexpected error creating {getattr(provider_type, 'value', provider_type)} provider: {e}",
                ProviderErrorCode.UNKNOWN_ERROR,
            ) from e

    async def get_best_provider(
        self,
        overrides: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> AIProvider:
        """
        Get the best available provider.

        Tries the ``AI_PROVIDER`` preference first, then every supported type
        in preference order. Credentials come from ``<TYPE>_API_KEY`` and
        ``<TYPE>_MODEL``; ``overrides[type]`` entries take precedence.

        Args:
            overrides: Optional per-type configuration overrides.

        Returns:
            The first provider that could be constructed.

        Raises:
            ProviderError: ``NO_PROVIDERS`` if every attempt failed.
        """
        preferred = (self.settings.ai_provider or "").strip().lower()
        if preferred:
            try:
                return await self.get_provider(preferred, self._env_config(preferred, overrides))
            except ProviderError as e:
                logger.warning(f"Failed to initialize preferred provider ({preferred}): {e.message}")

        for ptype in PREFERENCE_ORDER:
            try:
                return await self.get_provider(ptype, self._env_config(ptype.value, overrides))
            except ProviderError as e:
                logger.warning(f"Failed to initialize {ptype.value} provider: {e.message}")

        raise ProviderError(
            "No AI providers are available. Please check your configuration and API keys.",
            ProviderErrorCode.NO_PROVIDERS,
        )

    async def get_all_providers(
        self,
        overrides: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> dict[ProviderType, AIProvider]:
        """
        Get every provider that can be constructed.

        Args:
            overrides: Optional per-type configuration overrides.

        Returns:
            Mapping of provider type to provider; failures are omitted.
        """
        providers: dict[ProviderType, AIProvider] = {}

        for ptype in ProviderType:
            try:
                providers[ptype] = await self.get_provider(
                    ptype, self._env_config(ptype.value, overrides)
                )
            except ProviderError as e:
                logger.warning(f"Failed to initialize {ptype.value} provider: {e.message}")

        return providers

    def clear_instances(self) -> None:
        """Drop all cached provider instances and their locks.

        Locks bind to the event loop that first waits on them, so call this
        before reusing the registry from another event loop.
        """
        if self._instances:
            logger.debug(f"Clearing {len(self._instances)} cached providers")
        self._instances.clear()
        self._locks.clear()

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _env_config(
        self,
        type_name: str,
        overrides: Mapping[str, Mapping[str, Any]] | None,
    ) -> dict[str, Any]:
        """Build a config from environment credentials plus overrides."""
        config: dict[str, Any] = dict(self.settings.provider_credentials(type_name))
        if overrides and type_name in overrides:
            config.update(overrides[type_name])
        return config
