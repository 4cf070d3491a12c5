"\"\"\"Dependency injection container for the recommendation system.\"\"\""

from __future__ import annotations

from typing import Any

from dependency_injector import containers, providers

from .adapters import LocalDocumentStore, PackagedDocumentStore
from .core import (
    RecommendationEngine,
    RecommendOptions,
    SkillMatcher,
    SkillMatcherConfig,
    SkillNormalizer,
)
from .pipeline import CandidateLoader, RecommendationPipeline, open_catalog


class RecommendationContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    document_store = providers.Singleton(
        LocalDocumentStore,
        base_path=config.storage.base_path,
    )
    packaged_store = providers.Singleton(PackagedDocumentStore)

    normalizer = providers.Singleton(SkillNormalizer)
    matcher = providers.Singleton(SkillMatcher)
    default_options = providers.Singleton(RecommendOptions)

    catalog = providers.Singleton(
        open_catalog,
        reference=config.catalog.path,
        store=document_store,
        packaged_store=packaged_store,
        normalizer=normalizer,
    )

    engine = providers.Singleton(
        RecommendationEngine,
        catalog=catalog,
        normalizer=normalizer,
        matcher=matcher,
        defaults=default_options,
    )

    candidate_loader = providers.Factory(CandidateLoader, store=document_store)

    pipeline = providers.Factory(
        RecommendationPipeline,
        engine=engine,
        candidate_loader=candidate_loader,
    )


def create_container(*, settings: dict[str, Any] | None = None) -> RecommendationContainer:
    """Instantiate container with optional overrides."""

    container = RecommendationContainer()

    if not settings:
        return container

    container.config.from_dict(
        {
            "catalog": settings.get("catalog") or {},
            "storage": settings.get("storage") or {},
        }
    )

    if settings.get("recommend"):
        options = RecommendOptions(**settings["recommend"])
        container.default_options.override(providers.Object(options))

    if settings.get("matcher"):
        matcher_config = SkillMatcherConfig(**settings["matcher"])
        container.matcher.override(providers.Singleton(SkillMatcher, config=matcher_config))

    aliases = (settings.get("normalizer") or {}).get("aliases")
    if aliases:
        container.normalizer.override(providers.Singleton(SkillNormalizer, aliases=aliases))

    return container
