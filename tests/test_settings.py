import pytest

from storefront.api.main import run
from storefront.db.session import Database
from storefront.settings import DEFAULT_DATABASE_URL, Settings, normalize_database_url, resolve_database_url


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("DATABASE_URL", "DATABASE_URL_FILE", "JWT_SECRET", "CORS_ORIGINS", "AUTO_CREATE_SCHEMA"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("storefront.settings.load_dotenv", lambda *args, **kwargs: False)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("psql postgresql://u:p@db:5432/shop", "postgresql://u:p@db:5432/shop"),
        ("postgres://u:p@db:5432/shop\n", "postgresql://u:p@db:5432/shop"),
        ("sqlite:///shop.db", "sqlite:///shop.db"),
        ("   ", None),
        ("not a url", None),
    ],
)
def test_normalize_database_url(raw, expected):
    assert normalize_database_url(raw) == expected


def test_database_url_file_wins_over_environment(monkeypatch, tmp_path):
    conn = tmp_path / "db_connection.txt"
    conn.write_text("psql postgresql://file:pw@localhost:5432/shop\n", encoding="utf-8")
    monkeypatch.setenv("DATABASE_URL_FILE", str(conn))
    monkeypatch.setenv("DATABASE_URL", "postgresql://env:pw@localhost:5432/shop")

    assert resolve_database_url() == "postgresql://file:pw@localhost:5432/shop"


def test_database_url_falls_back_to_default():
    assert resolve_database_url() == DEFAULT_DATABASE_URL


def test_from_env_requires_jwt_secret():
    with pytest.raises(RuntimeError, match="JWT_SECRET"):
        Settings.from_env()


def test_from_env_reads_values(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("DATABASE_URL", "postgres://u:p@db/shop")
    monkeypatch.setenv("CORS_ORIGINS", "https://shop.example.com, https://admin.example.com")
    monkeypatch.setenv("AUTO_CREATE_SCHEMA", "true")

    settings = Settings.from_env()

    assert settings.jwt_secret == "s3cret"
    assert settings.database_url == "postgresql://u:p@db/shop"
    assert settings.cors_origins == ("https://shop.example.com", "https://admin.example.com")
    assert settings.auto_create_schema is True
    assert settings.jwt_expires_in == 86400


def test_healthcheck_is_false_before_open():
    assert Database("sqlite://").healthcheck() is False


def test_health_routes(client):
    assert client.get("/").json() == {"message": "Healthy"}
    assert client.get("/health/db").json() == {"database": "ok", "ok": True}


def test_run_serves_the_app_factory(monkeypatch):
    served = {}
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.setattr("storefront.api.main.uvicorn.run", lambda app, **kwargs: served.update(app=app, **kwargs))

    run()

    assert served == {"app": "storefront.api.main:create_app", "factory": True, "host": "0.0.0.0", "port": 9001}
