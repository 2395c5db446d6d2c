from inventory_service.core_settings import Settings

def test_database_url_from_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(POSTGRES_HOST="db", POSTGRES_USER="u", POSTGRES_PASSWORD="p", POSTGRES_DB="inv")
    assert settings.database_url == "postgresql+psycopg2://u:p@db:5432/inv"

def test_database_url_override():
    settings = Settings(DATABASE_URL="sqlite://")
    assert settings.database_url == "sqlite://"

def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("JWT_LEEWAY_SECONDS", "30")
    monkeypatch.setenv("RUN_MIGRATIONS", "true")
    settings = Settings()
    assert settings.JWT_LEEWAY_SECONDS == 30
    assert settings.RUN_MIGRATIONS is True
    assert settings.JWT_ALG == "PS256"
