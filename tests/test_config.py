from pathlib import Path

from latexextr.config import DEFAULT_CORS_ORIGIN, load_settings


def test_defaults(monkeypatch):
    for var in (
        "LATEXEXTR_TEMP_DIR",
        "LATEXEXTR_OUTPUT_DIR",
        "LATEXEXTR_PANDOC",
        "LATEXEXTR_PANDOC_TIMEOUT",
        "LATEXEXTR_CORS_ALLOW_ORIGINS",
        "PORT",
    ):
        monkeypatch.delenv(var, raising=False)

    settings = load_settings()
    assert settings.temp_dir == Path("temp")
    assert settings.output_dir == Path("latex_files")
    assert settings.pandoc_binary == "pandoc"
    assert settings.port == 3000
    assert settings.cors_allow_origins == [DEFAULT_CORS_ORIGIN]


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("LATEXEXTR_TEMP_DIR", str(tmp_path / "t"))
    monkeypatch.setenv("LATEXEXTR_OUTPUT_DIR", str(tmp_path / "o"))
    monkeypatch.setenv("LATEXEXTR_PANDOC", "/usr/local/bin/pandoc")
    monkeypatch.setenv("LATEXEXTR_PANDOC_TIMEOUT", "7.5")
    monkeypatch.setenv("LATEXEXTR_CORS_ALLOW_ORIGINS", "https://a.example, https://b.example ,")
    monkeypatch.setenv("PORT", "8080")

    settings = load_settings()
    assert settings.temp_dir == tmp_path / "t"
    assert settings.output_dir == tmp_path / "o"
    assert settings.pandoc_binary == "/usr/local/bin/pandoc"
    assert settings.pandoc_timeout == 7.5
    assert settings.cors_allow_origins == ["https://a.example", "https://b.example"]
    assert settings.port == 8080
