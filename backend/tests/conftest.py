import sys
from collections import defaultdict, deque
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))

from admin_console.main import create_app


class StubTransaction:
	def __init__(self, conn: "StubConnection") -> None:
		self._conn = conn

	async def __aenter__(self):
		self._conn.transactions += 1
		return self

	async def __aexit__(self, exc_type, exc, tb):
		if exc_type is not None:
			self._conn.rollbacks += 1
		return False


class StubConnection:
	"""Records every statement and replays queued results per asyncpg method."""

	def __init__(self) -> None:
		self.calls: list[tuple[str, str, tuple[Any, ...]]] = []
		self.results: dict[str, deque] = defaultdict(deque)
		self.transactions = 0
		self.rollbacks = 0

	def queue(self, method: str, *results: Any) -> None:
		self.results[method].extend(results)

	def queries(self, method: str | None = None) -> list[str]:
		return [query for name, query, _ in self.calls if method is None or name == method]

	def args_for(self, method: str) -> list[tuple[Any, ...]]:
		return [args for name, _, args in self.calls if name == method]

	def _next(self, method: str, default: Any) -> Any:
		queue = self.results[method]
		result = queue.popleft() if queue else default
		if isinstance(result, BaseException):
			raise result
		return result

	async def fetch(self, query: str, *args: Any):
		self.calls.append(("fetch", query, args))
		return self._next("fetch", [])

	async def fetchrow(self, query: str, *args: Any):
		self.calls.append(("fetchrow", query, args))
		return self._next("fetchrow", None)

	async def fetchval(self, query: str, *args: Any):
		self.calls.append(("fetchval", query, args))
		return self._next("fetchval", None)

	async def execute(self, query: str, *args: Any):
		self.calls.append(("execute", query, args))
		return self._next("execute", "OK")

	async def executemany(self, query: str, rows):
		self.calls.append(("executemany", query, (list(rows),)))
		return self._next("executemany", None)

	def transaction(self) -> StubTransaction:
		return StubTransaction(self)


class StubAcquire:
	def __init__(self, conn: StubConnection) -> None:
		self._conn = conn

	async def __aenter__(self):
		return self._conn

	async def __aexit__(self, exc_type, exc, tb):
		return False


class StubPool:
	def __init__(self, conn: StubConnection) -> None:
		self.conn = conn

	def acquire(self) -> StubAcquire:
		return StubAcquire(self.conn)


@pytest.fixture
def stub_conn() -> StubConnection:
	return StubConnection()


@pytest.fixture
def stub_pool(stub_conn: StubConnection) -> StubPool:
	return StubPool(stub_conn)


@pytest.fixture
def app():
	application = create_app()
	try:
		yield application
	finally:
		application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def api_client(app):
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://testserver") as client:
		yield client
