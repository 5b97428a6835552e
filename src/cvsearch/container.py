"""Dependency injection container for the candidate search tool."""

from __future__ import annotations

from dependency_injector import containers, providers

from .adapters import CvSearchAdapter, MappingConfig
from .client import SearchClient, SearchServiceConfig, SessionContext
from .core import FallbackScorer, ProfileCompletenessScorer, RemoteAIScorer, ScoringConfig, TextMatchScorer
from .llm import AIScoringConfig, HTTPScoringClient
from .pipeline import RemoteSearchPipeline, SearchSession


class SearchContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    session_context = providers.Singleton(SessionContext.resolve)

    search_client = providers.Singleton(SearchClient, session=session_context)

    result_adapter = providers.Singleton(CvSearchAdapter)

    ai_client = providers.Singleton(HTTPScoringClient)
    ai_scorer = providers.Singleton(RemoteAIScorer, client=ai_client)
    text_scorer = providers.Singleton(TextMatchScorer)
    profile_scorer = providers.Singleton(ProfileCompletenessScorer)

    scoring_config = providers.Singleton(ScoringConfig)
    mapping_config = providers.Singleton(MappingConfig)

    scorer = providers.Singleton(
        FallbackScorer,
        primary=ai_scorer,
        fallback=text_scorer,
        mock=profile_scorer,
        config=scoring_config,
    )

    pipeline = providers.Factory(
        RemoteSearchPipeline,
        client=search_client,
        adapter=result_adapter,
        config=mapping_config,
    )

    search_session = providers.Factory(
        SearchSession,
        scorer=scorer,
        sort_results=scoring_config.provided.sort_results,
    )


def create_container(*, settings: dict | None = None) -> SearchContainer:
    """Instantiate container with optional overrides."""

    container = SearchContainer()

    if not settings:
        return container

    session_settings = settings.get("session", {})
    if session_settings.get("token"):
        container.session_context.override(
            providers.Singleton(SessionContext.resolve, token=session_settings["token"])
        )

    if "search" in settings:
        search_config = SearchServiceConfig(**settings["search"])
        container.search_client.override(
            providers.Singleton(SearchClient, config=search_config, session=container.session_context)
        )

    if "ai" in settings:
        ai_config = AIScoringConfig(**settings["ai"])
        container.ai_client.override(providers.Singleton(HTTPScoringClient, config=ai_config))

    if "scoring" in settings:
        container.scoring_config.override(providers.Singleton(ScoringConfig, **settings["scoring"]))

    if "mapping" in settings:
        container.mapping_config.override(providers.Singleton(MappingConfig, **settings["mapping"]))

    return container
