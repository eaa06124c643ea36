import time
from http import HTTPStatus

import pytest
from flask import request
from http_server_mock import HttpServerMock

HOST = "localhost"
PORT = 5000
BASE_URL = f"http://{HOST}:{PORT}"

SAMPLE = {
    "user": {"name": "John", "age": 30},
    "items": [
        {"id": 1, "name": "First"},
        {"id": 2, "name": "Second"},
    ],
}

app = HttpServerMock(__name__)


@app.get("/sample")
def sample():
    return SAMPLE, HTTPStatus.OK


@app.get("/status/<int:code>")
def status(code: int):
    return {"status": code}, code


@app.get("/text")
def text():
    return "hello world", HTTPStatus.OK, {"Content-Type": "text/plain; charset=utf-8"}


@app.get("/binary")
def binary():
    return b"\xff\xfe\x00\x01", HTTPStatus.OK, {"Content-Type": "application/octet-stream"}


@app.route("/echo/json", methods=["POST", "PUT", "PATCH"])
def echo_json():
    """Echo back JSON body along with the content type it arrived with"""
    return {"received": request.get_json(force=True, silent=True), "content_type": request.content_type}, HTTPStatus.OK


@app.post("/echo/text")
def echo_text():
    return {"text": request.get_data(as_text=True), "content_type": request.content_type}, HTTPStatus.OK


@app.get("/echo/query")
def echo_query():
    return {key: request.args.getlist(key) for key in request.args}, HTTPStatus.OK


@app.get("/echo/headers")
def echo_headers():
    return {key.lower(): value for key, value in request.headers.items()}, HTTPStatus.OK


@app.delete("/items/<int:item_id>")
def delete_item(item_id: int):
    return "", HTTPStatus.NO_CONTENT, {"X-Deleted": str(item_id)}


@app.get("/redirect-source")
def redirect_source():
    return "", HTTPStatus.FOUND, {"Location": f"{BASE_URL}/redirect-target"}


@app.get("/redirect-target")
def redirect_target():
    return {"success": True}, HTTPStatus.OK


@app.get("/delay/<int:seconds>")
def delay(seconds: int):
    time.sleep(seconds)
    return {"delayed": seconds}, HTTPStatus.OK


@pytest.fixture
def server():
    with app.run(HOST, PORT):
        yield BASE_URL
