class TestTakeSnapshot:
    def test_creates_report(self, client, make_mods):
        make_mods("1. Library", "a-1.0.jar")
        r = client.post("/api/v1/snapshots/")
        assert r.status_code == 201
        data = r.json()
        assert data["report_kind"] == "diff"
        assert data["mods"] == 1
        assert data["deleted"] == 0

    def test_empty_profiles_root(self, client):
        r = client.post("/api/v1/snapshots/")
        assert r.status_code == 201
        assert r.json()["profiles"] == 0


class TestListReports:
    def test_empty(self, client):
        r = client.get("/api/v1/snapshots/")
        assert r.status_code == 200
        assert r.json() == []

    def test_lists_created_report(self, client, make_mods):
        make_mods("1. Library", "a-1.0.jar")
        name = client.post("/api/v1/snapshots/").json()["report_file"]
        r = client.get("/api/v1/snapshots/")
        assert [f["name"] for f in r.json()] == [name]
        assert r.json()[0]["size"] > 0


class TestLatestReport:
    def test_not_found(self, client):
        r = client.get("/api/v1/snapshots/latest")
        assert r.status_code == 404

    def test_returns_text(self, client, make_mods):
        make_mods("1. Library", "a-1.0.jar")
        client.post("/api/v1/snapshots/")
        r = client.get("/api/v1/snapshots/latest")
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/plain")
        assert r.text.startswith("# Snapshot Diff Report")


class TestDiff:
    def _profile(self, name, *files):
        return {
            "profile_path": f"/profiles/{name}",
            "mods_path": f"/profiles/{name}/mods",
            "mods": [{"file_name": f, "identity": {"name": f.split("-")[0]}} for f in files],
        }

    def test_changed_profile(self, client):
        r = client.post(
            "/api/v1/snapshots/diff",
            json={
                "previous": {"profiles": [self._profile("A", "a-1.jar")]},
                "current": {"profiles": [self._profile("A", "a-1.jar", "b-1.jar")]},
            },
        )
        assert r.status_code == 200
        data = r.json()
        assert data["kind"] == "diff"
        assert "➕ Added Mods:" in data["text"]
        assert "- File: b-1.jar" in data["text"]

    def test_without_previous_is_first_snapshot(self, client):
        r = client.post(
            "/api/v1/snapshots/diff",
            json={"current": {"profiles": [self._profile("A", "a-1.jar")]}},
        )
        data = r.json()
        assert data["kind"] == "diff"
        assert "Profile:" not in data["text"]

    def test_identical_is_full_report(self, client):
        snapshot = {"profiles": [self._profile("A", "a-1.jar")]}
        r = client.post("/api/v1/snapshots/diff", json={"previous": snapshot, "current": snapshot})
        assert r.json()["kind"] == "full"

    def test_does_not_write_reports(self, client):
        snapshot = {"profiles": [self._profile("A", "a-1.jar")]}
        client.post("/api/v1/snapshots/diff", json={"previous": snapshot, "current": snapshot})
        assert client.get("/api/v1/snapshots/").json() == []
