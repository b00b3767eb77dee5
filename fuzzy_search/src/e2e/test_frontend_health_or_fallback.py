import pytest
from fuzzymatch.engine import Engine
from frontend.web import app as flask_app

@pytest.mark.e2e
def test_health_or_fallback():
    import frontend.web as webmod
    client = flask_app.test_client()

    webmod._engine = None
    assert client.get("/health").status_code == 503
    assert client.get("/api/search?q=apple").status_code == 503

    eng = Engine([{"id": "a", "name": "apple"}])
    webmod._engine = eng
    try:
        rv = client.get("/health")
        assert rv.status_code == 200
        assert rv.get_json() == {"ok": True, "records": 1}
    finally:
        webmod._engine = None
        eng.shutdown()
