"""Tests for starglyph FastAPI endpoints."""

from fastapi.testclient import TestClient

from starglyph.main import app

client = TestClient(app)

ROWS = [[-10, 0, 10, 5], [1, 2, 3], [0, 0, 0], [4, -4, 2, -2, 1], [7], [2, 2], [-1, 3, 5]]


class TestHealthEndpoint:
    def test_health_returns_200(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["service"] == "starglyph"

    def test_health_includes_version(self):
        resp = client.get("/health")
        data = resp.json()
        assert "version" in data


class TestLayoutEndpoint:
    def test_layout_metrics(self):
        resp = client.post("/layout", json={"rows": ROWS, "viewport_width": 500})
        assert resp.status_code == 200
        data = resp.json()
        assert data["columns"] == 3
        assert data["rows"] == 3
        assert data["canvas_height"] == 450
        assert data["outer_padding_x"] == 75
        assert len(data["centers"]) == len(ROWS)
        assert data["centers"][0] == {"x": 125, "y": 100}

    def test_empty_row_returns_422(self):
        resp = client.post("/layout", json={"rows": [[1], []], "viewport_width": 500})
        assert resp.status_code == 422

    def test_non_positive_viewport_returns_422(self):
        resp = client.post("/layout", json={"rows": ROWS, "viewport_width": 0})
        assert resp.status_code == 422

    def test_non_numeric_values_return_422(self):
        resp = client.post("/layout", json={"rows": [["a", "b"]], "viewport_width": 500})
        assert resp.status_code == 422


class TestSceneEndpoints:
    def test_scene_svg(self):
        resp = client.post("/scene/svg", json={"rows": ROWS, "viewport_width": 500})
        assert resp.status_code == 200
        assert "image/svg+xml" in resp.headers["content-type"]
        assert "<svg" in resp.text
        assert resp.text.count('class="glyph"') == len(ROWS)
        assert 'class="star"' not in resp.text

    def test_scene_png(self):
        resp = client.post("/scene/png", json={"rows": ROWS, "viewport_width": 500})
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/png"
        assert resp.content[:4] == b"\x89PNG"


class TestFrameEndpoints:
    def test_frame_returns_one_star_per_value(self):
        resp = client.post(
            "/frame",
            json={"rows": ROWS, "viewport_width": 500, "elapsed_ms": 750},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["elapsed_ms"] == 750
        assert len(data["stars"]) == sum(len(r) for r in ROWS)
        for star in data["stars"]:
            assert 5 <= star["size"] <= 10
            assert 50 <= star["alpha"] <= 255
            assert star["color"].startswith("#")

    def test_frame_is_deterministic(self):
        body = {"rows": ROWS, "viewport_width": 640, "elapsed_ms": 1234}
        first = client.post("/frame", json=body).json()
        second = client.post("/frame", json=body).json()
        assert first == second

    def test_frame_svg(self):
        resp = client.post(
            "/frame/svg",
            json={"rows": ROWS, "viewport_width": 500, "elapsed_ms": 100},
        )
        assert resp.status_code == 200
        assert resp.text.count('class="star"') == sum(len(r) for r in ROWS)

    def test_negative_elapsed_returns_422(self):
        resp = client.post(
            "/frame",
            json={"rows": ROWS, "viewport_width": 500, "elapsed_ms": -1},
        )
        assert resp.status_code == 422


class TestDatasetEndpoint:
    def test_upload_csv(self):
        csv_bytes = b"a,b,c,d\n-10,0,10,5\n1,2,3,4\n"
        resp = client.post(
            "/dataset/svg?viewport_width=500&elapsed_ms=0",
            files={"file": ("dataset.csv", csv_bytes, "text/csv")},
        )
        assert resp.status_code == 200
        assert resp.text.count('class="glyph"') == 2
        assert resp.text.count('class="star"') == 8

    def test_upload_non_numeric_returns_422(self):
        resp = client.post(
            "/dataset/svg",
            files={"file": ("dataset.csv", b"a,b\nx,y\n", "text/csv")},
        )
        assert resp.status_code == 422


class TestLongRunningTime:
    def test_frame_with_huge_elapsed_time(self):
        resp = client.post(
            "/frame",
            json={"rows": [[1, 2]], "viewport_width": 500, "elapsed_ms": 1e308},
        )
        assert resp.status_code == 200
        for star in resp.json()["stars"]:
            assert 50 <= star["alpha"] <= 255

    def test_frame_svg_with_huge_elapsed_time(self):
        resp = client.post(
            "/frame/svg",
            json={"rows": [[1, 2]], "viewport_width": 500, "elapsed_ms": 1e308},
        )
        assert resp.status_code == 200
        assert resp.text.count('class="star"') == 2

    def test_dataset_svg_with_huge_elapsed_time(self):
        resp = client.post(
            "/dataset/svg?viewport_width=500&elapsed_ms=1e308",
            files={"file": ("dataset.csv", b"a,b\n1,2\n", "text/csv")},
        )
        assert resp.status_code == 200
        assert resp.text.count('class="star"') == 2

    def test_infinite_elapsed_time_returns_422(self):
        resp = client.post(
            "/dataset/svg?elapsed_ms=inf",
            files={"file": ("dataset.csv", b"a,b\n1,2\n", "text/csv")},
        )
        assert resp.status_code == 422


class TestNonFiniteValues:
    def _post_raw(self, path: str, body: str):
        return client.post(path, content=body, headers={"content-type": "application/json"})

    def test_nan_value_returns_422(self):
        resp = self._post_raw("/frame", '{"rows": [[NaN, 1]], "viewport_width": 500}')
        assert resp.status_code == 422

    def test_infinite_value_returns_422(self):
        resp = self._post_raw("/scene/svg", '{"rows": [[1, Infinity]], "viewport_width": 500}')
        assert resp.status_code == 422

    def test_validation_error_omits_rejected_input(self):
        resp = self._post_raw("/layout", '{"rows": [[NaN]], "viewport_width": 500}')
        assert resp.status_code == 422
        assert all("input" not in err for err in resp.json()["detail"])

    def test_infinite_elapsed_returns_422(self):
        resp = self._post_raw(
            "/frame", '{"rows": [[1, 2]], "viewport_width": 500, "elapsed_ms": Infinity}'
        )
        assert resp.status_code == 422

    def test_uploaded_csv_with_inf_returns_422(self):
        resp = client.post(
            "/dataset/svg",
            files={"file": ("dataset.csv", b"a,b,c\nnan,1,inf\n", "text/csv")},
        )
        assert resp.status_code == 422
        assert "Non-finite field on line 2" in resp.json()["detail"]
