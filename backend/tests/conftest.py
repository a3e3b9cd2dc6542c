import os, sys, pytest
# Ensure backend directory is on path so 'bizsuite' and 'tests' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from bizsuite import create_app, get_db
from bizsuite.models.records import Base
# Import all model modules to ensure tables are registered before create_all
import bizsuite.models.audit  # noqa: F401

@pytest.fixture(scope='session', autouse=True)
def app_instance():
    os.environ['DATABASE_URL'] = 'sqlite+pysqlite:///:memory:'
    app = create_app({'TESTING': True})
    with app.app_context():
        engine = get_db().get_bind()
        Base.metadata.create_all(engine)
    yield app

@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()
