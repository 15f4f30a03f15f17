# target_app/app.py
import os, threading
from flask import Flask, Response
from utils import configure_logging, env_int

ROOT_BODY = "springboot-nginx-demo ok"
WORK_BODY = "springboot-nginx-demo work done"
WORK_DELAY_S = 0.1

class RequestInterrupted(RuntimeError):
    """The simulated /work delay was cut short by server shutdown."""

def _text(body):
    return Response(body, status=200, mimetype="text/plain")

def create_app(logger=None, shutdown=None):
    app = Flask(__name__)
    log = logger or app.logger
    # set on shutdown; wakes any /work request still waiting
    stop = shutdown or threading.Event()
    app.extensions["shutdown"] = stop

    @app.get("/")
    def root():
        log.info("root endpoint called")
        return _text(ROOT_BODY)

    @app.get("/work")
    def work():
        log.info("work endpoint called")
        # parks only this request's thread
        if stop.wait(WORK_DELAY_S):
            raise RequestInterrupted("work delay interrupted by shutdown")
        return _text(WORK_BODY)

    return app

app = create_app()

def main():
    configure_logging()
    host = os.getenv("HOST", "0.0.0.0")
    port = env_int("PORT", 8080)
    try:
        app.run(host=host, port=port, threaded=True)
    finally:
        app.extensions["shutdown"].set()

if __name__ == "__main__":
    main()
