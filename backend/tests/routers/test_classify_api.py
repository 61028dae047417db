class TestClassify:
    def test_compound_filename(self, client):
        r = client.post(
            "/api/v1/classify/",
            json={"file_names": ["examplemod-2.0.1+1.20.1-fabric.jar"]},
        )
        assert r.status_code == 200
        [item] = r.json()
        assert item["file_name"] == "examplemod-2.0.1+1.20.1-fabric.jar"
        assert item["key"] == "examplemod"
        assert item["rule"] == "compound_token"
        assert item["identity"]["version"] == "2.0.1"
        assert item["identity"]["platform_version"] == "1.20.1"
        assert item["identity"]["loader"] == "fabric"

    def test_defaults_from_settings(self, client):
        r = client.post("/api/v1/classify/", json={"file_names": ["mymod.jar"]})
        identity = r.json()[0]["identity"]
        assert identity["name"] == "mymod"
        assert identity["platform_version"] == "1.21.1"
        assert identity["loader"] == "neoforge"
        assert identity["valid_platform_version"] is True

    def test_request_overrides(self, client):
        r = client.post(
            "/api/v1/classify/",
            json={
                "file_names": ["mymod.jar"],
                "loader": "forge",
                "known_platform_versions": ["1.20.1"],
            },
        )
        identity = r.json()[0]["identity"]
        assert identity["loader"] == "forge"
        assert identity["valid_platform_version"] is False

    def test_preserves_order(self, client):
        names = ["b.jar", "a-1.0.jar", "c-1.0-1.20.1.jar"]
        r = client.post("/api/v1/classify/", json={"file_names": names})
        assert [item["file_name"] for item in r.json()] == names

    def test_missing_file_names(self, client):
        r = client.post("/api/v1/classify/", json={})
        assert r.status_code == 422

    def test_internal_error_degrades_to_fallback(self, client, monkeypatch):
        def _boom(self, file_name):
            raise RuntimeError("boom")

        monkeypatch.setattr("modpack_manager.matching.classifier.FilenameClassifier.draft", _boom)
        r = client.post("/api/v1/classify/", json={"file_names": ["Weird_Mod-1.0.jar"]})
        assert r.status_code == 200
        [item] = r.json()
        assert item["rule"] == "fallback"
        assert item["identity"]["name"] == "Weird-Mod-1.0"

    def test_prefixed_compound_platform_is_valid(self, client):
        r = client.post(
            "/api/v1/classify/",
            json={"file_names": ["sodium-fabric-0.5.8+mc1.20.4.jar"]},
        )
        identity = r.json()[0]["identity"]
        assert identity["platform_version"] == "mc1.20.4"
        assert identity["valid_platform_version"] is True
