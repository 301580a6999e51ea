"""CQRS Registry Compliance Tests.

Self-enforcing tests that fail if the registry is incomplete or inconsistent.

Test categories:
1. Completeness - All commands/queries registered, no duplicates
2. Handler compliance - All handlers have handle() method
3. Container compliance - Every entry has a handler factory
4. Naming conventions - Handler named after its command/query
5. Statistics - Registry counts match expectations
"""

import inspect
from typing import get_args

import pytest

import src.core.container as container
from src.application.cqrs import (
    COMMAND_REGISTRY,
    QUERY_REGISTRY,
    CQRSCategory,
    get_all_commands,
    get_all_queries,
    get_command_metadata,
    get_commands_by_category,
    get_commands_bypassing_access_policy,
    get_commands_emitting_events,
    get_handler_factory_name,
    get_queries_by_category,
    get_query_metadata,
    get_statistics,
    validate_registry_consistency,
)
from src.application.cqrs.metadata import CommandMetadata
from src.application.commands import CreateOrganisation, RenameOrganisation
from src.application.queries import ListOrganisations
from src.core.container.repositories import get_unrestricted_organisation_repository


@pytest.mark.unit
class TestRegistryCompleteness:
    """Verify all commands and queries are registered."""

    def test_command_registry_not_empty(self) -> None:
        assert len(COMMAND_REGISTRY) > 0, "COMMAND_REGISTRY is empty"

    def test_query_registry_not_empty(self) -> None:
        assert len(QUERY_REGISTRY) > 0, "QUERY_REGISTRY is empty"

    def test_registry_is_consistent(self) -> None:
        errors = validate_registry_consistency()

        assert errors == [], f"Registry errors: {errors}"

    def test_helpers_match_registry(self) -> None:
        assert len(get_all_commands()) == len(COMMAND_REGISTRY)
        assert len(get_all_queries()) == len(QUERY_REGISTRY)


@pytest.mark.unit
class TestHandlerCompliance:
    """Verify handlers conform to CQRS patterns."""

    def test_all_handlers_have_async_handle(self) -> None:
        handlers = [m.handler_class for m in COMMAND_REGISTRY] + [
            m.handler_class for m in QUERY_REGISTRY
        ]

        not_async = [
            h.__name__
            for h in handlers
            if not inspect.iscoroutinefunction(getattr(h, "handle", None))
        ]

        assert not not_async, f"handle() missing or not async: {not_async}"

    def test_handler_named_after_command(self) -> None:
        mismatched = [
            meta.handler_class.__name__
            for meta in COMMAND_REGISTRY
            if meta.handler_class.__name__ != f"{meta.command_class.__name__}Handler"
        ]

        assert not mismatched, f"Handler names do not match commands: {mismatched}"

    def test_handler_named_after_query(self) -> None:
        mismatched = [
            meta.handler_class.__name__
            for meta in QUERY_REGISTRY
            if meta.handler_class.__name__ != f"{meta.query_class.__name__}Handler"
        ]

        assert not mismatched, f"Handler names do not match queries: {mismatched}"

    def test_commands_are_frozen_dataclasses(self) -> None:
        for meta in COMMAND_REGISTRY:
            params = getattr(meta.command_class, "__dataclass_params__", None)
            assert params is not None, f"{meta.command_class.__name__} is not a dataclass"
            assert params.frozen, f"{meta.command_class.__name__} is not frozen"


@pytest.mark.unit
class TestContainerCompliance:
    """Every registry entry must have a container factory."""

    def test_every_command_has_factory(self) -> None:
        missing = [
            get_handler_factory_name(meta)
            for meta in COMMAND_REGISTRY
            if not callable(getattr(container, get_handler_factory_name(meta), None))
        ]

        assert not missing, f"Missing container factories: {missing}"

    def test_every_query_has_factory(self) -> None:
        missing = [
            get_handler_factory_name(meta)
            for meta in QUERY_REGISTRY
            if not callable(getattr(container, get_handler_factory_name(meta), None))
        ]

        assert not missing, f"Missing container factories: {missing}"

    def test_factory_name_derivation(self) -> None:
        meta = get_command_metadata(CreateOrganisation)

        assert get_handler_factory_name(meta) == "get_create_organisation_handler"

    def test_factory_name_for_query(self) -> None:
        meta = get_query_metadata(ListOrganisations)

        assert get_handler_factory_name(meta) == "get_list_organisations_handler"

    def test_only_policy_bypassing_commands_get_unrestricted_repository(self) -> None:
        for meta in COMMAND_REGISTRY:
            factory = getattr(container, get_handler_factory_name(meta))
            dependencies = {
                extra.dependency
                for param in inspect.signature(factory).parameters.values()
                for extra in get_args(param.annotation)[1:]
                if hasattr(extra, "dependency")
            }
            unrestricted = get_unrestricted_organisation_repository in dependencies

            assert unrestricted == meta.bypasses_access_policy, meta.command_class


@pytest.mark.unit
class TestMetadataValidation:
    def test_result_dto_flag_requires_class(self) -> None:
        with pytest.raises(ValueError):
            CommandMetadata(
                command_class=CreateOrganisation,
                handler_class=object,
                category=CQRSCategory.ORGANISATION,
                has_result_dto=True,
                result_dto_class=None,
            )


@pytest.mark.unit
class TestComputedViews:
    def test_categories_partition_commands(self) -> None:
        organisation = get_commands_by_category(CQRSCategory.ORGANISATION)
        membership = get_commands_by_category(CQRSCategory.MEMBERSHIP)

        assert len(organisation) + len(membership) == len(COMMAND_REGISTRY)
        assert len(membership) == 3

    def test_rename_emits_no_events(self) -> None:
        emitting = {m.command_class for m in get_commands_emitting_events()}

        assert RenameOrganisation not in emitting
        assert CreateOrganisation in emitting

    def test_unknown_class_has_no_metadata(self) -> None:
        assert get_command_metadata(str) is None
        assert get_query_metadata(str) is None

    def test_statistics(self) -> None:
        stats = get_statistics()

        assert stats["total_commands"] == 6
        assert stats["total_queries"] == 2
        assert stats["commands_emitting_events"] == 5
        assert stats["commands_bypassing_access_policy"] == 1
        assert [m.command_class for m in get_commands_bypassing_access_policy()] == [
            CreateOrganisation
        ]
        assert stats["paginated_queries"] == 1
        assert stats["queries_by_category"] == {"organisation": 2}
        assert len(get_queries_by_category(CQRSCategory.MEMBERSHIP)) == 0
