from fastapi.testclient import TestClient

from buildconfig_demo.config import Settings
from buildconfig_demo.main import create_app


def test_serves_public_file(public_dir, client):
    (public_dir / "hello.txt").write_text("hi there")
    res = client.get("/hello.txt")
    assert res.status_code == 200
    assert res.text == "hi there"
    assert res.headers["content-type"].startswith("text/plain")


def test_serves_nested_file(public_dir, client):
    (public_dir / "css").mkdir()
    (public_dir / "css" / "site.css").write_text("body {}")
    res = client.get("/css/site.css")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/css")


def test_index_html_shadows_welcome(public_dir, client):
    (public_dir / "index.html").write_text("<h1>demo</h1>")
    res = client.get("/")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/html")
    assert "<h1>demo</h1>" in res.text


def test_static_file_named_like_route_wins(public_dir, client):
    (public_dir / "health").write_text("static")
    assert client.get("/health").text == "static"


def test_missing_file_falls_through_to_routes(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/nope.txt").json() == {
        "error": "Not Found",
        "message": "Route GET /nope.txt not found",
    }


def test_custom_404_page_is_not_used(public_dir, client):
    (public_dir / "404.html").write_text("<p>gone</p>")
    res = client.get("/nope")
    assert res.status_code == 404
    assert res.json()["error"] == "Not Found"


def test_write_methods_skip_static(public_dir, client):
    (public_dir / "hello.txt").write_text("hi")
    res = client.post("/hello.txt")
    assert res.status_code == 404
    assert res.json()["message"] == "Route POST /hello.txt not found"


def test_missing_public_dir(tmp_path):
    settings = Settings(public_dir=str(tmp_path / "absent"))
    client = TestClient(create_app(settings))
    assert client.get("/").json()["status"] == "success"


def test_static_response_has_cors_headers(public_dir, client):
    (public_dir / "hello.txt").write_text("hi")
    res = client.get("/hello.txt", headers={"Origin": "https://example.com"})
    assert res.headers["access-control-allow-origin"] == "*"
