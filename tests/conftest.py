"""Pytest fixtures for testing without a MySQL server."""

import copy
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest

from workbench.db_connection import ConnectionScope
from workbench.repositories import ProjectRepository
from workbench.services import ProjectService


class MockCursor:
    """Mock database cursor; each execute() consumes the next scripted outcome."""

    def __init__(self, connection: 'MockConnection'):
        self._connection = connection
        self._results: List[Dict] = []
        self.lastrowid: Optional[int] = None
        self.rowcount: int = -1
        self.closed = False

    def execute(self, query: str, params: tuple = None):
        self._connection.executed_queries.append((query, params))
        outcome = self._connection.next_outcome()
        if isinstance(outcome, Exception):
            raise outcome
        self._results = outcome.get('rows', [])
        self.rowcount = outcome.get('rowcount', len(self._results))
        self.lastrowid = outcome.get('lastrowid')

    def fetchall(self) -> List[Dict]:
        return list(self._results)

    def fetchone(self) -> Optional[Dict]:
        return self._results[0] if self._results else None

    def close(self):
        self.closed = True


class MockConnection:
    """Mock database connection that records the transaction lifecycle."""

    def __init__(self, outcomes: List[Any] = None):
        self._outcomes = list(outcomes or [])
        self.executed_queries: List[tuple] = []
        self.cursors: List[MockCursor] = []
        self.autocommit = True
        self.transaction_started = False
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def queue(self, *outcomes):
        """Script results for the next execute() calls.

        Each outcome is a dict with ``rows``/``rowcount``/``lastrowid``
        keys, or an exception to raise.
        """
        self._outcomes.extend(outcomes)

    def next_outcome(self):
        return self._outcomes.pop(0) if self._outcomes else {}

    def cursor(self, dictionary: bool = False, **kwargs) -> MockCursor:
        cursor = MockCursor(self)
        self.cursors.append(cursor)
        return cursor

    def start_transaction(self):
        self.transaction_started = True

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeStoreConnection:
    """In-memory stand-in for the five project tables.

    Understands exactly the statements ProjectRepository issues and keeps
    snapshot/rollback semantics so atomicity can be observed.
    """

    def __init__(self, store: 'FakeStore'):
        self._store = store
        self._snapshot = None
        self.autocommit = True

    def cursor(self, dictionary: bool = False, **kwargs):
        return FakeStoreCursor(self._store)

    def start_transaction(self):
        self._snapshot = copy.deepcopy(self._store.tables)

    def commit(self):
        self._snapshot = None

    def rollback(self):
        if self._snapshot is not None:
            self._store.tables = self._snapshot
            self._snapshot = None

    def close(self):
        self.rollback()


class FakeStoreCursor:

    def __init__(self, store: 'FakeStore'):
        self._store = store
        self._results: List[Dict] = []
        self.lastrowid = None
        self.rowcount = -1

    def execute(self, query: str, params: tuple = ()):
        sql = ' '.join(query.split())
        for fragment in self._store.fail_on:
            if fragment in sql:
                import mysql.connector
                raise mysql.connector.Error(f"Simulated failure on: {fragment}")

        tables = self._store.tables
        self._results = []
        if sql.startswith('INSERT INTO project'):
            self._store.next_id += 1
            name, estimated, actual, difficulty, notes = params
            tables['project'].append({
                'project_id': self._store.next_id, 'project_name': name,
                'estimated_hours': estimated, 'actual_hours': actual,
                'difficulty': difficulty, 'notes': notes,
            })
            self.lastrowid = self._store.next_id
            self.rowcount = 1
        elif sql.startswith('SELECT * FROM project ORDER BY project_name'):
            self._results = sorted(tables['project'], key=lambda r: r['project_name'].lower())
        elif sql.startswith('SELECT * FROM project WHERE'):
            self._results = [r for r in tables['project'] if r['project_id'] == params[0]]
        elif sql.startswith('SELECT * FROM material WHERE'):
            self._results = [r for r in tables['material'] if r['project_id'] == params[0]]
        elif sql.startswith('SELECT * FROM step WHERE'):
            self._results = [r for r in tables['step'] if r['project_id'] == params[0]]
        elif sql.startswith('SELECT c.* FROM category c'):
            ids = [link['category_id'] for link in tables['project_category']
                   if link['project_id'] == params[0]]
            self._results = [c for c in tables['category'] if c['category_id'] in ids]
        elif sql.startswith('UPDATE project'):
            matched = [r for r in tables['project'] if r['project_id'] == params[5]]
            for row in matched:
                row.update(zip(('project_name', 'estimated_hours', 'actual_hours',
                                'difficulty', 'notes'), params[:5]))
            self.rowcount = len(matched)
        elif sql.startswith('DELETE FROM project'):
            before = len(tables['project'])
            tables['project'] = [r for r in tables['project'] if r['project_id'] != params[0]]
            self.rowcount = before - len(tables['project'])
            for child in ('material', 'step', 'project_category'):
                tables[child] = [r for r in tables[child] if r['project_id'] != params[0]]
        else:
            raise AssertionError(f"Unexpected statement: {sql}")
        self._results = [dict(r) for r in self._results]

    def fetchall(self) -> List[Dict]:
        return self._results

    def close(self):
        pass


class FakeStore:
    def __init__(self):
        self.tables: Dict[str, List[Dict]] = {
            'project': [], 'material': [], 'step': [], 'category': [], 'project_category': [],
        }
        self.next_id = 0
        self.fail_on: List[str] = []

    def connect(self) -> FakeStoreConnection:
        return FakeStoreConnection(self)

    def seed_children(self, project_id: int, materials: int, steps: int, categories: int):
        for i in range(materials):
            self.tables['material'].append({
                'material_id': 100 + i, 'project_id': project_id,
                'material_name': f'Material {i}', 'num_required': i + 1,
                'cost': Decimal('4.50'),
            })
        for i in range(steps):
            self.tables['step'].append({
                'step_id': 200 + i, 'project_id': project_id,
                'step_text': f'Step {i}', 'step_order': i + 1,
            })
        for i in range(categories):
            self.tables['category'].append({'category_id': 300 + i, 'category_name': f'Category {i}'})
            self.tables['project_category'].append({'project_id': project_id, 'category_id': 300 + i})


@pytest.fixture
def mock_connection():
    """Provide a mock database connection."""
    return MockConnection()


@pytest.fixture
def mock_scope(mock_connection):
    """ConnectionScope that always hands out ``mock_connection``."""
    return ConnectionScope(connect=lambda: mock_connection)


@pytest.fixture
def mock_repo(mock_scope):
    return ProjectRepository(scope=mock_scope)


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def store_repo(fake_store):
    """ProjectRepository backed by the in-memory fake store."""
    return ProjectRepository(scope=ConnectionScope(connect=fake_store.connect))


@pytest.fixture
def store_service(store_repo):
    return ProjectService(project_repo=store_repo)


@pytest.fixture
def sample_project_row() -> Dict:
    """Sample project row as returned by a dictionary cursor."""
    return {
        'project_id': 1,
        'project_name': 'Build a deck',
        'estimated_hours': Decimal('10.00'),
        'actual_hours': Decimal('12.00'),
        'difficulty': 3,
        'notes': 'n',
    }


@pytest.fixture
def sample_material_row() -> Dict:
    return {
        'material_id': 11,
        'project_id': 1,
        'material_name': '2x4 lumber',
        'num_required': 20,
        'cost': Decimal('3.99'),
    }


@pytest.fixture
def sample_step_row() -> Dict:
    return {
        'step_id': 21,
        'project_id': 1,
        'step_text': 'Pour footings',
        'step_order': 1,
    }


@pytest.fixture
def sample_category_row() -> Dict:
    return {
        'category_id': 31,
        'category_name': 'Outdoor',
    }
