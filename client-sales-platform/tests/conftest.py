"""
Pytest configuration and shared fixtures.

Adds the project directory to the Python path so that tests can import
from the domain, repositories, services and api packages, and provides a
fake Supabase client that records PostgREST builder calls.
"""

import sys
from collections import deque
from pathlib import Path
from types import SimpleNamespace
from typing import Any, List, Optional

import pytest

# Add the client-sales-platform directory to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


class FakeQuery:
    """Chainable stand-in for a PostgREST request builder."""

    def __init__(self, owner: "FakeSupabase", kind: str, name: str, params: Any = None) -> None:
        self.owner = owner
        self.kind = kind
        self.name = name
        self.params = params
        self.calls: List[tuple] = []

    def __getattr__(self, method: str):
        def record(*args: Any, **kwargs: Any) -> "FakeQuery":
            self.calls.append((method, args, kwargs))
            return self

        return record

    def called(self, method: str) -> List[tuple]:
        """(args, kwargs) of every call to `method`, in order."""
        return [(args, kwargs) for name, args, kwargs in self.calls if name == method]

    def execute(self) -> SimpleNamespace:
        return self.owner.next_response()


class FakeSupabase:
    """Records table()/rpc() requests and replays queued responses in order."""

    def __init__(self) -> None:
        self.queries: List[FakeQuery] = []
        self._responses: deque = deque()

    def queue(
        self,
        data: Optional[list] = None,
        count: Optional[int] = None,
        error: Any = None,
        raises: Optional[BaseException] = None,
    ) -> None:
        self._responses.append((SimpleNamespace(data=data or [], count=count, error=error), raises))

    def next_response(self) -> SimpleNamespace:
        response, raises = self._responses.popleft()
        if raises is not None:
            raise raises
        return response

    def table(self, name: str) -> FakeQuery:
        query = FakeQuery(self, "table", name)
        self.queries.append(query)
        return query

    def rpc(self, name: str, params: Any = None) -> FakeQuery:
        query = FakeQuery(self, "rpc", name, params)
        self.queries.append(query)
        return query


@pytest.fixture
def fake_supabase(monkeypatch: pytest.MonkeyPatch) -> FakeSupabase:
    """Route every repository module to a FakeSupabase instance."""

    from repositories import client_repository, sale_repository, sales_analytics_repository

    fake = FakeSupabase()
    for module in (client_repository, sale_repository, sales_analytics_repository):
        monkeypatch.setattr(module, "get_supabase", lambda: fake)
    return fake
