"""
Tests for the startup script.
"""
import os

import run_storefront


class TestStartupScript:
    """Test argument parsing and environment preparation."""

    def test_defaults(self):
        args = run_storefront.build_parser().parse_args([])
        assert args.host == "0.0.0.0"
        assert args.port == 8000
        assert args.database_url is None
        assert args.reload is False

    def test_database_url_is_exported(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        # Registers DATABASE_URL with monkeypatch so it is restored afterwards
        monkeypatch.setenv("DATABASE_URL", "")

        run_storefront.prepare_environment("sqlite:///./data/shop.db")

        assert os.environ["DATABASE_URL"] == "sqlite:///./data/shop.db"
        assert (tmp_path / "data").is_dir()

    def test_existing_database_url_is_kept(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DATABASE_URL", "postgresql://shop@localhost/shop")

        run_storefront.prepare_environment()

        assert os.environ["DATABASE_URL"] == "postgresql://shop@localhost/shop"
