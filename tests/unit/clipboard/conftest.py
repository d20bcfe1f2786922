"""Fake collaborators shared by clipboard tests."""

import pytest

from padboard.core.interfaces import PathResolution


class FakeSchemaRegistry:
    def __init__(self, names: set[str]) -> None:
        self.names = set(names)

    def is_known_schema(self, name: str) -> bool:
        return name in self.names


class FakeRecordResolver:
    def __init__(self, existing: set[tuple[str, str]]) -> None:
        self.existing = set(existing)
        self.calls: list[tuple[str, str]] = []

    def exists(self, schema: str, record_id: str) -> bool:
        self.calls.append((schema, record_id))
        return (schema, record_id) in self.existing


class FakePathResolver:
    """Resolves paths from a table of outcomes.

    Values are PathResolution members or exception instances to raise.
    Unlisted paths are FOUND. Paths in `directories` are folders.
    """

    def __init__(
        self,
        outcomes: dict[str, object] | None = None,
        directories: set[str] | None = None,
    ) -> None:
        self.outcomes = dict(outcomes or {})
        self.directories = set(directories or ())

    def resolve(self, path: str) -> PathResolution:
        outcome = self.outcomes.get(path, PathResolution.FOUND)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def is_directory(self, path: str) -> bool:
        return path in self.directories


@pytest.fixture
def schemas() -> FakeSchemaRegistry:
    return FakeSchemaRegistry({"pages", "tt_content", "sys_category"})


@pytest.fixture
def records() -> FakeRecordResolver:
    return FakeRecordResolver(
        {("pages", "1"), ("pages", "2"), ("tt_content", "5"), ("tt_content", "7")}
    )


@pytest.fixture
def make_paths():
    """Factory for FakePathResolver instances."""
    return FakePathResolver
