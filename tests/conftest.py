import logging, threading
import pytest
from werkzeug.serving import make_server
from target_app.app import create_app

@pytest.fixture
def sink():
    return logging.getLogger("tests.sink")

@pytest.fixture
def app(sink):
    app = create_app(logger=sink)
    app.config.update(TESTING=True)
    return app

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def serve():
    """Start a threaded werkzeug server for a Flask app; yields a starter returning its base URL."""
    servers = []

    def start(flask_app):
        srv = make_server("127.0.0.1", 0, flask_app, threaded=True)
        threading.Thread(target=srv.serve_forever, daemon=True).start()
        servers.append(srv)
        return f"http://127.0.0.1:{srv.server_port}"

    yield start
    for srv in servers:
        srv.shutdown()
        srv.server_close()

@pytest.fixture
def live_url(serve, sink):
    return serve(create_app(logger=sink))
