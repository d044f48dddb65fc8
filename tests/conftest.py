"""
Pytest configuration and fixtures for casbin-rule-store tests
"""
import pytest
from casbin.model import Model

from casbin_rule_store import Adapter, AdapterSettings


RBAC_MODEL = """
[request_definition]
r = sub, obj, act

[policy_definition]
p = sub, obj, act

[role_definition]
g = _, _

[policy_effect]
e = some(where (p.eft == allow))

[matchers]
m = g(r.sub, p.sub) && r.obj == p.obj && r.act == p.act
"""

ACL_MODEL = """
[request_definition]
r = sub, obj, act

[policy_definition]
p = sub, obj, act

[policy_effect]
e = some(where (p.eft == allow))

[matchers]
m = r.sub == p.sub && r.obj == p.obj && r.act == p.act
"""

WIDE_MODEL = """
[request_definition]
r = sub, obj, act

[policy_definition]
p = sub, obj, act
p2 = a0, a1, a2, a3, a4, a5, a6

[role_definition]
g = _, _

[policy_effect]
e = some(where (p.eft == allow))

[matchers]
m = g(r.sub, p.sub) && r.obj == p.obj && r.act == p.act
"""

RBAC_POLICY = [
    ["alice", "data1", "read"],
    ["bob", "data2", "write"],
    ["data2_admin", "data2", "read"],
    ["data2_admin", "data2", "write"],
]

RBAC_GROUPING = [
    ["alice", "data2_admin"],
]


def build_model(text: str = RBAC_MODEL) -> Model:
    model = Model()
    model.load_model_from_text(text)
    return model


@pytest.fixture
def database_url(tmp_path):
    """File backed SQLite database, one per test"""
    return f"sqlite+aiosqlite:///{(tmp_path / 'casbin.db').as_posix()}"


@pytest.fixture
def adapter_settings(database_url):
    return AdapterSettings(database_url=database_url, sqlite_journal_mode="DELETE")


@pytest.fixture
async def adapter(adapter_settings):
    """Open adapter on an empty rule table"""
    a = await Adapter.new_adapter(adapter_settings)
    yield a
    await a.close()


@pytest.fixture
def model():
    return build_model()


@pytest.fixture
def acl_model():
    return build_model(ACL_MODEL)


@pytest.fixture
def wide_model():
    """Model with a seven field policy type"""
    return build_model(WIDE_MODEL)


@pytest.fixture
def rbac_model():
    """RBAC model pre-populated with the sample rules"""
    m = build_model()
    for rule in RBAC_POLICY:
        m.add_policy("p", "p", rule)
    for rule in RBAC_GROUPING:
        m.add_policy("g", "g", rule)
    return m


@pytest.fixture
async def seeded_adapter(adapter, rbac_model):
    """Adapter whose store already holds the sample rules"""
    await adapter.save_policy(rbac_model)
    return adapter


@pytest.fixture
def model_factory():
    """Build an empty casbin model from model text"""
    return build_model


@pytest.fixture
def wide_model_factory():
    return lambda: build_model(WIDE_MODEL)


# Test configuration
def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (requires a database)"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
