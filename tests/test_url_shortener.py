"""
End-to-end tests through the HTTP API.
"""
import re
import sys

from fastapi.testclient import TestClient

from shortlink_app.app_factory import create_app
from shortlink_app.config import Settings
from shortlink_app.services.short_code_strategies import Sha3ShortCodeStrategy


class TestShortenEndpoint:
    """Test POST /send-url"""

    def test_shorten_then_repeat(self, client: TestClient):
        """Test a first shorten counts 1 and a repeat returns the same code with 2"""
        response = client.post("/send-url", json={"url": "https://coderprog.com"})
        assert response.status_code == 200

        data = response.json()
        assert data["original_url"] == "https://coderprog.com"
        assert re.fullmatch(r"[0-9a-f]{12}", data["shortened_url"])
        assert data["request_count"] == 1

        repeat = client.post("/send-url", json={"url": "https://coderprog.com"}).json()
        assert repeat["shortened_url"] == data["shortened_url"]
        assert repeat["request_count"] == 2

    def test_code_matches_derivation(self, client: TestClient):
        """Test the API returns the SHA3-derived code"""
        data = client.post("/send-url", json={"url": "https://coderprog.com"}).json()

        assert data["shortened_url"] == Sha3ShortCodeStrategy().derive("https://coderprog.com")

    def test_missing_url_field(self, client: TestClient):
        """Test a body without url is rejected before the store"""
        response = client.post("/send-url", json={"link": "https://coderprog.com"})
        assert response.status_code == 422

    def test_malformed_json(self, client: TestClient):
        """Test an unparseable body is rejected"""
        response = client.post(
            "/send-url",
            content="{not json",
            headers={"content-type": "application/json"}
        )
        assert response.status_code == 422

    def test_shorten_saves_store(self, client: TestClient, storage_path):
        """Test the store file is written after a shorten"""
        data = client.post("/send-url", json={"url": "https://coderprog.com"}).json()

        assert storage_path.read_text(encoding="utf-8") == f"https://coderprog.com:{data['shortened_url']}:1\n"

    def test_save_failure_does_not_fail_request(self, tmp_path):
        """Test an unwritable store file still answers 200"""
        settings = Settings(
            _env_file=None,
            storage_file_path=str(tmp_path / "missing-dir" / "shortened_urls.txt")
        )

        with TestClient(create_app(settings)) as client:
            response = client.post("/send-url", json={"url": "https://coderprog.com"})

        assert response.status_code == 200
        assert response.json()["request_count"] == 1

    def test_collision_rejected(self, settings: Settings, colliding_store):
        """Test a rejected collision maps to 409"""
        settings.collision_policy = "reject"
        app = create_app(settings)
        app.state.url_service.store = colliding_store

        with TestClient(app) as client:
            assert client.post("/send-url", json={"url": "https://first.com/"}).status_code == 200
            response = client.post("/send-url", json={"url": "https://second.com/"})

        assert response.status_code == 409


class TestRedirectEndpoint:
    """Test GET /redirect/{short_url}"""

    def test_redirect(self, client: TestClient):
        """Test a known code redirects with 307 and counts the hit"""
        code = client.post("/send-url", json={"url": "https://coderprog.com"}).json()["shortened_url"]

        response = client.get(f"/redirect/{code}", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "https://coderprog.com"
        info = client.get(f"/api/v1/urls/{code}").json()
        assert info["hit_count"] == 2

    def test_redirect_unknown_code(self, client: TestClient, storage_path):
        """Test an unknown code is a 404 and nothing is written"""
        response = client.get("/redirect/doesnotexist", follow_redirects=False)

        assert response.status_code == 404
        assert not storage_path.exists()

    def test_redirect_saves_new_count(self, client: TestClient, storage_path):
        """Test the incremented count reaches the store file"""
        code = client.post("/send-url", json={"url": "https://coderprog.com"}).json()["shortened_url"]

        client.get(f"/redirect/{code}", follow_redirects=False)

        assert storage_path.read_text(encoding="utf-8") == f"https://coderprog.com:{code}:2\n"


class TestMetricsEndpoints:
    """Test GET /metrics and GET /top-urls"""

    def test_top_domains(self, client: TestClient):
        """Test domains are ranked by total hits"""
        client.post("/send-url", json={"url": "https://a.com/x"})
        client.post("/send-url", json={"url": "https://a.com/x"})
        client.post("/send-url", json={"url": "https://b.com/y"})

        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.json() == [
            {"domain": "a.com", "count": 2},
            {"domain": "b.com", "count": 1},
        ]

    def test_metrics_empty(self, client: TestClient):
        """Test an empty store gives an empty report"""
        assert client.get("/metrics").json() == []

    def test_metrics_limited_to_three(self, client: TestClient):
        """Test only the top three domains are reported"""
        for i in range(5):
            client.post("/send-url", json={"url": f"https://d{i}.com/"})

        assert len(client.get("/metrics").json()) == 3

    def test_top_urls(self, client: TestClient):
        """Test URLs are ranked by request count"""
        client.post("/send-url", json={"url": "https://a.com/x"})
        client.post("/send-url", json={"url": "https://b.com/y"})
        client.post("/send-url", json={"url": "https://b.com/y"})

        data = client.get("/top-urls").json()

        assert [item["original_url"] for item in data] == ["https://b.com/y", "https://a.com/x"]
        assert data[0]["request_count"] == 2


class TestInfoEndpoints:
    """Test read-only endpoints"""

    def test_url_info(self, client: TestClient):
        """Test URL info does not count a hit and includes the short URL"""
        code = client.post("/send-url", json={"url": "https://coderprog.com"}).json()["shortened_url"]

        first = client.get(f"/api/v1/urls/{code}").json()
        second = client.get(f"/api/v1/urls/{code}").json()

        assert first["hit_count"] == second["hit_count"] == 1
        assert first["short_url"].endswith(f"/redirect/{code}")

    def test_url_info_unknown(self, client: TestClient):
        assert client.get("/api/v1/urls/nonexistent").status_code == 404

    def test_health(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestRestart:
    """Test durability across application instances"""

    def test_store_survives_restart(self, settings: Settings):
        """Test a new app loads what the previous one saved"""
        with TestClient(create_app(settings)) as client:
            code = client.post("/send-url", json={"url": "https://coderprog.com"}).json()["shortened_url"]
            client.post("/send-url", json={"url": "https://coderprog.com"})

        with TestClient(create_app(settings)) as client:
            response = client.get(f"/redirect/{code}", follow_redirects=False)
            repeat = client.post("/send-url", json={"url": "https://coderprog.com"}).json()

        assert response.status_code == 307
        assert response.headers["location"] == "https://coderprog.com"
        assert repeat["request_count"] == 4

    def test_corrupt_file_starts_empty(self, settings: Settings, storage_path):
        """Test startup proceeds when the file has no usable lines"""
        storage_path.write_text("garbage\nmore garbage\n", encoding="utf-8")

        with TestClient(create_app(settings)) as client:
            assert client.get("/metrics").json() == []
            assert client.post("/send-url", json={"url": "https://a.com/"}).json()["request_count"] == 1

    def test_empty_url_survives_restart(self, settings: Settings):
        """Test the empty-string key still redirects after a restart"""
        with TestClient(create_app(settings)) as client:
            code = client.post("/send-url", json={"url": ""}).json()["shortened_url"]

        with TestClient(create_app(settings)) as client:
            response = client.get(f"/redirect/{code}", follow_redirects=False)

        assert code == "a7ffc6f8bf1e"
        assert response.status_code == 307

    def test_line_separator_in_url_survives_restart(self, settings: Settings):
        """Test a URL holding U+2028 keeps its full target after a restart"""
        url = "https://a.com/\u2028https://evil.com"
        with TestClient(create_app(settings)) as client:
            code = client.post("/send-url", json={"url": url}).json()["shortened_url"]

        with TestClient(create_app(settings)) as client:
            info = client.get(f"/api/v1/urls/{code}").json()
            metrics = client.get("/metrics").json()

        assert info["original_url"] == url
        assert info["hit_count"] == 1
        assert metrics == [{"domain": "a.com", "count": 1}]


class TestAppFactory:
    """Test the application factory module"""

    def test_tests_do_not_build_the_module_level_app(self):
        """Test importing the factory does not import main (which starts an app in the cwd)"""
        assert "main" not in sys.modules
