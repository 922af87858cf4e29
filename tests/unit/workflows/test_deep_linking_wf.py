"""Tests for the deep linking workflow over an in-memory project."""

import logging

import pytest

from linkprune.helpers.exceptions import FileNotInStoreError
from linkprune.workflows.deep_linking.deep_linking_wf import extract_deep_link_config, run_deep_linking

ROOT_MODULE = "/app/src/app/app.module.ts"
ROOT_FACTORY = "/app/src/app/app.module.ngfactory.ts"

EXPECTED_REGISTRY = (
    "{\n"
    "  links: [\n"
    "    { loadChildren: '../pages/home/home.module#HomePageModule', name: 'home-page', segment: 'home', "
    "priority: 'high', defaultHistory: ['LoginPage', 'WelcomePage'] },\n"
    "    { loadChildren: '../pages/about/about.module#AboutPageModule', name: 'AboutPage', segment: null, "
    "priority: 'low', defaultHistory: [] }\n"
    "  ]\n"
    "}"
)


class TestSourceModeDeepLinking:
    """Registry written into the root module's forRoot() call."""

    @pytest.mark.unit
    def test_extract_returns_hydrated_entries(self, build_config, app_file_store) -> None:
        """extract_deep_link_config should return entries in discovery order."""
        entries = extract_deep_link_config(app_file_store, build_config)
        assert [e.exported_class_name for e in entries] == ["HomePageModule", "AboutPageModule"]

    @pytest.mark.unit
    def test_patches_root_module(self, build_config, app_file_store, app_module_source) -> None:
        """run_deep_linking should patch forRoot in the root module."""
        result = run_deep_linking(app_file_store, build_config)

        assert result.registry_text == EXPECTED_REGISTRY
        assert result.target_path == ROOT_MODULE
        assert result.replaced_existing is False
        assert app_file_store.get(ROOT_MODULE) == app_module_source.replace(
            "IonicModule.forRoot(MyApp)", f"IonicModule.forRoot(MyApp, {{}}, {EXPECTED_REGISTRY})"
        )
        assert app_file_store.dirty_paths() == [ROOT_MODULE]

    @pytest.mark.unit
    def test_second_run_replaces_and_warns(self, build_config, app_file_store, caplog) -> None:
        """A second run should replace the registry and log a warning."""
        run_deep_linking(app_file_store, build_config)
        first = app_file_store.get(ROOT_MODULE)

        with caplog.at_level(logging.WARNING):
            result = run_deep_linking(app_file_store, build_config)

        assert result.replaced_existing is True
        assert app_file_store.get(ROOT_MODULE) == first
        assert "2 link(s)" in caplog.text


class TestCompiledModeDeepLinking:
    """Registry written into the generated root factory."""

    @pytest.mark.unit
    def test_patches_root_factory(self, compiled_config, app_file_store, app_factory_source, app_module_source) -> None:
        """Compiled mode should patch the root factory, not the module."""
        app_file_store.set(ROOT_FACTORY, app_factory_source)

        result = run_deep_linking(app_file_store, compiled_config)

        assert result.target_path == ROOT_FACTORY
        patched = app_file_store.get(ROOT_FACTORY)
        assert "this._DeepLinkConfigToken_53 = {\n  links: [\n" in patched
        assert "'../pages/home/home.module.ngfactory#HomePageModuleNgFactory'" in patched
        assert app_file_store.get(ROOT_MODULE) == app_module_source

    @pytest.mark.unit
    def test_missing_factory(self, compiled_config, app_file_store) -> None:
        """Compiled mode without a factory should raise FileNotInStoreError."""
        with pytest.raises(FileNotInStoreError, match="app.module.ngfactory.ts"):
            run_deep_linking(app_file_store, compiled_config)
