"""Tests for .env generation.

Covers:
- Section order and always-present Redis/ClickHouse/S3/SMTP keys
- Local vs hosted vs absent service values
- PostgreSQL block only for a local Postgres
- Round-trip through parse_env
"""

from __future__ import annotations

import pytest

from deltas_setup.collector.envfile import parse_env
from deltas_setup.emitters.env_gen import CLICKHOUSE_KEYS, S3_KEYS, EnvGenerator
from deltas_setup.models import ServiceSelection, SmtpSettings

pytestmark = pytest.mark.unit


@pytest.fixture
def env_gen(renderer) -> EnvGenerator:
    return EnvGenerator(renderer)


class TestSections:
    def test_section_order_minimal(self, env_gen, make_model):
        titles = [s.title for s in env_gen.build_sections(make_model())]
        assert titles == [
            "Drizzle",
            "Application",
            "Better Auth",
            "Admin User",
            "Organization",
            "Redis",
            "ClickHouse",
            "MinIO (S3)",
            "Mailpit (SMTP)",
        ]

    def test_postgres_section_only_when_local(self, env_gen, make_model, local_postgres):
        titles = [s.title for s in env_gen.build_sections(make_model(postgres=local_postgres))]
        assert titles[-1] == "PostgreSQL"

        hosted = ServiceSelection(parameters={"DATABASE_URL": "postgres://remote/db"})
        titles = [s.title for s in env_gen.build_sections(make_model(postgres=hosted))]
        assert "PostgreSQL" not in titles


class TestValues:
    def test_absent_services_empty(self, env_gen, make_model):
        env = parse_env(env_gen.emit(make_model()))
        assert env["REDIS_URL"] == ""
        assert all(env[key] == "" for key in CLICKHOUSE_KEYS)
        assert all(env[key] == "" for key in S3_KEYS)
        assert env["SMTP_HOST"] == ""
        assert env["DATABASE_URL"] == ""
        assert "POSTGRES_USER" not in env

    def test_local_services_use_container_hosts(self, env_gen, full_local_model):
        env = parse_env(env_gen.emit(full_local_model))
        assert env["DATABASE_URL"] == "postgres://root:pw@db:5432/deltas"
        assert env["REDIS_URL"] == "redis://redis:6379"
        assert env["CLICKHOUSE_HOST"] == "clickhouse"
        assert env["CLICKHOUSE_NATIVE_PORT"] == "19000"
        assert env["CLICKHOUSE_PASSWORD"] == "chpw"
        assert env["S3_ENDPOINT"] == "http://minio:9000"
        assert env["S3_SECRET_KEY"] == "miniosecret"
        assert env["POSTGRES_PASSWORD"] == "pw"
        assert env["SMTP_PORT"] == "1025"

    def test_hosted_services_echo_parameters(self, env_gen, make_model):
        model = make_model(
            postgres=ServiceSelection(parameters={"DATABASE_URL": "postgres://u:p@pg.example.com:5432/d"}),
            redis=ServiceSelection(parameters={"REDIS_URL": "redis://cache.example.com:6379"}),
            clickhouse=ServiceSelection(
                parameters={
                    "CLICKHOUSE_HOST": "ch.example.com",
                    "CLICKHOUSE_PORT": "8443",
                    "CLICKHOUSE_NATIVE_PORT": "9440",
                    "CLICKHOUSE_USER": "ingest",
                    "CLICKHOUSE_PASSWORD": "secret",
                    "CLICKHOUSE_DATABASE": "events",
                }
            ),
            minio=ServiceSelection(
                parameters={
                    "S3_ENDPOINT": "https://r2.example.com",
                    "S3_ACCESS_KEY": "ak",
                    "S3_SECRET_KEY": "sk",
                    "S3_BUCKET": "b",
                }
            ),
        )
        env = parse_env(env_gen.emit(model))
        assert env["DATABASE_URL"] == "postgres://u:p@pg.example.com:5432/d"
        assert env["REDIS_URL"] == "redis://cache.example.com:6379"
        assert env["CLICKHOUSE_PORT"] == "8443"
        assert env["CLICKHOUSE_DATABASE"] == "events"
        assert env["S3_ENDPOINT"] == "https://r2.example.com"
        assert "POSTGRES_DB" not in env

    def test_values_double_quoted(self, env_gen, make_model):
        text = env_gen.emit(make_model())
        assert 'ORIGIN="http://localhost:5173"' in text
        assert 'REDIS_URL=""' in text
        assert "# Better Auth" in text


class TestRoundTrip:
    def test_parse_reproduces_scalars(self, env_gen, full_local_model):
        env = parse_env(env_gen.emit(full_local_model))
        assert env["ORIGIN"] == full_local_model.origin
        assert env["BETTER_AUTH_SECRET"] == full_local_model.auth_secret
        assert env["ADMIN_EMAIL"] == full_local_model.admin.email
        assert env["ADMIN_PASSWORD"] == full_local_model.admin.password
        assert env["ORG_NAME"] == full_local_model.admin.org_name
        assert env["SMTP_FROM"] == full_local_model.smtp.sender

    def test_every_emitted_key_parsed(self, env_gen, full_local_model):
        sections = env_gen.build_sections(full_local_model)
        expected = {key: value for section in sections for key, value in section.entries}
        assert parse_env(env_gen.emit(full_local_model)) == expected

    def test_secret_with_base64_padding(self, env_gen, make_model):
        model = make_model(auth_secret="q1w2e3+/r4t5==", smtp=SmtpSettings(password="p@ss=word"))
        env = parse_env(env_gen.emit(model))
        assert env["BETTER_AUTH_SECRET"] == "q1w2e3+/r4t5=="
        assert env["SMTP_PASSWORD"] == "p@ss=word"


class TestDeterminism:
    def test_identical_models_identical_output(self, env_gen, make_full_local_model):
        assert env_gen.emit(make_full_local_model()) == env_gen.emit(make_full_local_model())
