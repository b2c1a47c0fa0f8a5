"""Tests for the StructureManager host entry point."""

from pathlib import Path

import pytest
from structman.core.paths import BaseDirectory, PathResolutionError
from structman.reconcile.manager import StructureManager
from structman.reconcile.report import Outcome
from structman.structure.models import ConfigError, StructureError
from structman.structure.schema import StructureConfig, StructureItem, StructureItemOptions


@pytest.fixture
def config() -> StructureConfig:
    """Configuration declaring appData and document structures."""
    return StructureConfig.model_validate(
        {
            "identifier": "com.example.hubio",
            "appData": {"files": ["settings.json"], "dirs": {"projects": {}}},
            "document": {"dirs": {"Hubio": {"options": {"repair": True}}}},
        }
    )


class TestResolveRoot:
    """Tests for root resolution."""

    def test_app_base_uses_identifier(self, config: StructureConfig, isolated_xdg: Path) -> None:
        """App-specific bases nest the identifier under the shared base."""
        manager = StructureManager(config)

        root = manager.resolve_root(BaseDirectory.APP_DATA)

        assert root == str(isolated_xdg / ".local" / "share" / "com.example.hubio")

    def test_identifier_argument_wins(self, config: StructureConfig, isolated_xdg: Path) -> None:
        """An explicit identifier overrides the configured one."""
        manager = StructureManager(config, identifier="org.other")

        root = manager.resolve_root(BaseDirectory.APP_LOG)

        assert root == str(isolated_xdg / ".local" / "share" / "org.other" / "logs")

    def test_overrides_merge_over_config_roots(self, tmp_path: Path) -> None:
        """Constructor overrides take precedence over configured roots."""
        config = StructureConfig.model_validate(
            {"roots": {"cache": "/configured", "temp": "/configured-temp"}}
        )
        manager = StructureManager(config, overrides={"cache": str(tmp_path)})

        assert manager.resolve_root(BaseDirectory.CACHE) == str(tmp_path)
        assert manager.resolve_root(BaseDirectory.TEMP) == "/configured-temp"

    def test_unresolvable_base_raises(self) -> None:
        """Bases without a platform default raise PathResolutionError."""
        manager = StructureManager(StructureConfig())

        with pytest.raises(PathResolutionError):
            manager.resolve_root(BaseDirectory.RESOURCE)


class TestVerify:
    """Tests for single-base verification."""

    def test_verify_creates_structure(self, config: StructureConfig, tmp_path: Path) -> None:
        """verify reconciles the base's tree at its resolved root."""
        manager = StructureManager(config, overrides={"appData": str(tmp_path / "app")})

        report = manager.verify(BaseDirectory.APP_DATA)

        assert report.success is True
        assert report.root == str(tmp_path / "app")
        assert (tmp_path / "app" / "settings.json").is_file()
        assert (tmp_path / "app" / "projects").is_dir()

    def test_verify_unconfigured_base(self, config: StructureConfig) -> None:
        """An unconfigured base raises StructureError."""
        manager = StructureManager(config)

        with pytest.raises(StructureError, match="'cache' not found"):
            manager.verify(BaseDirectory.CACHE)

    def test_verify_dry_run(self, config: StructureConfig, tmp_path: Path) -> None:
        """A dry-run manager never touches the filesystem."""
        manager = StructureManager(
            config, dry_run=True, overrides={"appData": str(tmp_path / "app")}
        )

        report = manager.verify(BaseDirectory.APP_DATA)

        assert all(r.dry_run for r in report)
        assert not (tmp_path / "app").exists()

    def test_tree_for(self, config: StructureConfig) -> None:
        """tree_for builds the declared tree without resolving the root."""
        tree = StructureManager(config).tree_for(BaseDirectory.DOCUMENT)

        assert [c.name for c in tree.children] == ["Hubio"]
        assert tree.children[0].options.repair is True


class TestVerifyAll:
    """Tests for multi-base verification."""

    def test_verifies_all_configured_bases(
        self, config: StructureConfig, tmp_path: Path
    ) -> None:
        """Every configured base is verified in declaration order."""
        manager = StructureManager(
            config,
            overrides={"appData": str(tmp_path / "app"), "document": str(tmp_path / "docs")},
        )

        results = manager.verify_all()

        assert [r.base for r in results] == [BaseDirectory.APP_DATA, BaseDirectory.DOCUMENT]
        assert all(r.success for r in results)
        assert (tmp_path / "docs" / "Hubio").is_dir()

    def test_resolution_error_captured(self, config: StructureConfig, tmp_path: Path) -> None:
        """An unresolvable base is reported without stopping the others."""
        config = config.model_copy(update={"identifier": None})
        manager = StructureManager(config, overrides={"document": str(tmp_path)})

        results = manager.verify_all()

        app_data, document = results
        assert app_data.root is None
        assert app_data.report is None
        assert app_data.error is not None
        assert "identifier" in app_data.error
        assert app_data.success is False
        assert document.success is True

    def test_unconfigured_base_captured(self, config: StructureConfig, tmp_path: Path) -> None:
        """Requesting an unconfigured base records an error for it."""
        manager = StructureManager(config, overrides={"cache": str(tmp_path)})

        (result,) = manager.verify_all([BaseDirectory.CACHE])

        assert result.root == str(tmp_path)
        assert result.error is not None
        assert "not found" in result.error
        assert not (tmp_path / "anything").exists()

    def test_invalid_base_leaves_filesystem_untouched(self, tmp_path: Path) -> None:
        """An invalid structure in a later base aborts before any base is touched."""
        # Bypasses schema validation so only the tree build can catch it
        invalid = StructureItem.model_construct(
            options=StructureItemOptions(),
            files=[],
            dirs={"..": StructureItem()},
        )
        config = StructureConfig(
            app_data=StructureItem(dirs={"good": StructureItem()}),
            app_log=invalid,
        )
        manager = StructureManager(
            config,
            overrides={"appData": str(tmp_path / "a"), "appLog": str(tmp_path / "b")},
        )

        with pytest.raises(ConfigError, match="Invalid structure for 'appLog'"):
            manager.verify_all()

        assert not (tmp_path / "a").exists()
        assert not (tmp_path / "b").exists()

    def test_conflict_makes_base_unsuccessful(
        self, config: StructureConfig, tmp_path: Path
    ) -> None:
        """A conflict inside a base marks that base as unsuccessful."""
        root = tmp_path / "app"
        root.mkdir()
        (root / "projects").write_text("")
        manager = StructureManager(config, overrides={"appData": str(root)})

        (result,) = manager.verify_all([BaseDirectory.APP_DATA])

        assert result.success is False
        assert result.report is not None
        assert result.report.outcome_for(str(root / "projects")) == Outcome.CONFLICT
