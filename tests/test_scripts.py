"""Tests for the launcher, migration and seeding scripts."""

import pytest

from modules.users.models import AccountKind, UserRole, classify_account
from shared.config import Settings
from run_api import build_parser
from run_migrations import MIGRATIONS_DIR, load_migrations, pending_migrations
from run_seed import build_seeded_user, demo_users, seed_users


class TestMigrations:
    def test_bundled_migrations_load(self):
        names = [m.name for m in load_migrations(MIGRATIONS_DIR)]
        assert names[0] == "001_create_users.sql"

    def test_sorted_by_filename(self, tmp_path):
        (tmp_path / "002_b.sql").write_text("SELECT 2;")
        (tmp_path / "001_a.sql").write_text("SELECT 1;")
        (tmp_path / "notes.txt").write_text("ignored")

        assert [m.name for m in load_migrations(tmp_path)] == ["001_a.sql", "002_b.sql"]

    def test_missing_directory(self, tmp_path):
        assert load_migrations(tmp_path / "nope") == []

    def test_pending_and_changed(self, tmp_path):
        (tmp_path / "001_a.sql").write_text("SELECT 1;")
        (tmp_path / "002_b.sql").write_text("SELECT 2;")
        (tmp_path / "003_c.sql").write_text("SELECT 3;")
        first, second, third = load_migrations(tmp_path)

        pending, changed = pending_migrations(
            [first, second, third],
            {first.name: first.checksum, second.name: "stale-checksum"},
        )

        assert pending == [third]
        assert changed == [second]


class TestSeeding:
    def test_seeded_user_is_verified_and_seeded(self):
        user = build_seeded_user("demo@x.com", "Demo", "User", UserRole.ORGANIZER)

        assert user.verified is True
        assert user.role == UserRole.ORGANIZER
        assert user.external_user_id.startswith("sb_")

    def test_demo_users_are_unique(self):
        users = demo_users(5, UserRole.USER)

        assert len(users) == 5
        assert len({u.email for u in users}) == 5
        assert len({u.external_user_id for u in users}) == 5

    @pytest.mark.asyncio
    async def test_seed_users_skips_existing(self, user_store):
        user_store.add("taken@x.com")
        users = [
            build_seeded_user("fresh@x.com", "Fresh", "User"),
            build_seeded_user("taken@x.com", "Taken", "User"),
        ]

        created, skipped = await seed_users(user_store, users)

        assert [u.email for u in created] == ["fresh@x.com"]
        assert skipped == ["taken@x.com"]
        assert classify_account(created[0]) is AccountKind.SEEDED

    @pytest.mark.asyncio
    async def test_seeded_account_logs_in_with_magic_code(self, service, user_store, gateway):
        await seed_users(user_store, [build_seeded_user("demo@x.com", "Demo", "User")])

        await service.login("demo@x.com")
        session = await service.verify_login("demo@x.com", "000000")

        assert session.user.email == "demo@x.com"
        gateway.request_otp.assert_not_awaited()


class TestApiLauncher:
    def test_defaults_come_from_settings(self):
        args = build_parser(Settings(_env_file=None)).parse_args([])

        assert args.port == 3001
        assert args.host == "0.0.0.0"
        assert args.reload is False
        assert args.log_level == "info"

    def test_flags_override_settings(self):
        settings = Settings(_env_file=None, port=4000, log_level="WARNING")
        args = build_parser(settings).parse_args(["--port", "3002", "--log-level", "debug"])

        assert args.port == 3002
        assert args.log_level == "debug"
        assert build_parser(settings).parse_args([]).port == 4000
