from babyboard import main as main_mod


def test_main_runs_app_with_settings(monkeypatch, tmp_path):
    """``main`` builds the app from the environment and hands it to uvicorn."""
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("PORT", "8091")
    monkeypatch.setenv("ADMIN_PIN", "4711")
    calls = {}

    def fake_run(app, host, port, **kwargs):
        calls.update(app=app, host=host, port=port)

    monkeypatch.setattr(main_mod.uvicorn, "run", fake_run)
    assert main_mod.main() == 0
    assert calls["port"] == 8091
    assert calls["app"].state.settings.admin_pin == "4711"
    assert (tmp_path / "data" / "names.json").exists()
