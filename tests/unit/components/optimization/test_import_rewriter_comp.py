"""Unit tests for the barrel and root factory rewrites."""

import pytest

from linkprune.components.optimization.import_rewriter_comp import (
    purge_component_factory_import_and_usage,
    purge_provider_class_name_from_root_method,
    purge_provider_controller_import_and_usage,
    purge_unused_imports_and_exports_from_index,
)

FW = "/app/node_modules/ionic-angular"
INDEX = f"{FW}/index.js"
FACTORY = "/app/src/app/app.module.ngfactory.js"

BARREL = """import { ActionSheet } from './components/action-sheet/action-sheet';
import { Alert } from './components/alert/alert';
import { AlertCmp } from "./components/alert/alert-component";
export { ActionSheet } from './components/action-sheet/action-sheet';
export { Alert } from './components/alert/alert';
export { AlertCmp } from "./components/alert/alert-component";
"""

FACTORY_SOURCE = """import * as import0 from '@angular/core';
import * as import12 from '../../node_modules/ionic-angular/components/alert/alert-component.ngfactory';
import * as import13 from '../../node_modules/ionic-angular/components/toast/toast-component.ngfactory';
import * as import20 from '../../node_modules/ionic-angular/components/alert/alert-controller';
class AppModuleInjector extends import0.NgModuleInjector {
  constructor(parent) {
    super(parent, [import12.AlertCmpNgFactory, import13.ToastCmpNgFactory], [import1.IonicApp]);
  }
  get _AlertController_60() {
    if ((this.__AlertController_60 == null)) { (this.__AlertController_60 = new import20.AlertController(this._App_52, this._Config_29)); }
    return this.__AlertController_60;
  }
  getInternal(token, notFoundResult) {
    if ((token === import20.AlertController)) { return this._AlertController_60; }
    return notFoundResult;
  }
}
"""


class TestPurgeFromIndex:
    """Named import/export statements in the framework barrel."""

    @pytest.mark.unit
    def test_removes_import_and_export_of_purged_module(self) -> None:
        """The purged module's import and export should leave the barrel."""
        updated = purge_unused_imports_and_exports_from_index(INDEX, BARREL, [f"{FW}/components/alert/alert.js"])
        assert updated == (
            "import { ActionSheet } from './components/action-sheet/action-sheet';\n"
            'import { AlertCmp } from "./components/alert/alert-component";\n'
            "export { ActionSheet } from './components/action-sheet/action-sheet';\n"
            'export { AlertCmp } from "./components/alert/alert-component";\n'
        )

    @pytest.mark.unit
    def test_double_quoted_specifiers(self) -> None:
        """Double-quoted specifiers should be matched too."""
        updated = purge_unused_imports_and_exports_from_index(
            INDEX, BARREL, [f"{FW}/components/alert/alert-component.js"]
        )
        assert "alert-component" not in updated
        assert "'./components/alert/alert'" in updated

    @pytest.mark.unit
    def test_running_twice_is_a_no_op(self) -> None:
        """Running the rewrite twice should change nothing."""
        purged = [f"{FW}/components/alert/alert.js", f"{FW}/components/action-sheet/action-sheet.js"]
        once = purge_unused_imports_and_exports_from_index(INDEX, BARREL, purged)
        assert purge_unused_imports_and_exports_from_index(INDEX, once, purged) == once

    @pytest.mark.unit
    def test_repeated_statements_all_removed_in_one_pass(self) -> None:
        """Duplicate import and export lines for a module should go in one pass."""
        barrel = (
            "import { Alert } from './components/alert/alert';\n"
            "import { Alert } from './components/alert/alert';\n"
            "export { Alert } from './components/alert/alert';\n"
            "export { Alert } from './components/alert/alert';\n"
            "import { Badge } from './components/badge/badge';\n"
        )
        purged = [f"{FW}/components/alert/alert.js"]
        once = purge_unused_imports_and_exports_from_index(INDEX, barrel, purged)
        assert once == "import { Badge } from './components/badge/badge';\n"
        assert purge_unused_imports_and_exports_from_index(INDEX, once, purged) == once

    @pytest.mark.unit
    def test_unreferenced_module_leaves_content_unchanged(self) -> None:
        """A module the barrel never names should leave it unchanged."""
        assert purge_unused_imports_and_exports_from_index(INDEX, BARREL, [f"{FW}/components/fab/fab.js"]) == BARREL


class TestPurgeComponentFactory:
    """Component factory import and entry component references."""

    @pytest.mark.unit
    def test_removes_import_and_list_entry(self) -> None:
        """The component factory import and its list entry should be removed."""
        updated = purge_component_factory_import_and_usage(
            FACTORY, FACTORY_SOURCE, f"{FW}/components/alert/alert-component.ngfactory.js"
        )
        assert "import12" not in updated
        assert "super(parent, [import13.ToastCmpNgFactory], [import1.IonicApp]);" in updated

    @pytest.mark.unit
    def test_last_list_entry(self) -> None:
        """Removing the last list entry should leave the list well formed."""
        updated = purge_component_factory_import_and_usage(
            FACTORY, FACTORY_SOURCE, f"{FW}/components/toast/toast-component.ngfactory.js"
        )
        assert "super(parent, [import12.AlertCmpNgFactory], [import1.IonicApp]);" in updated

    @pytest.mark.unit
    def test_missing_import_is_a_no_op(self) -> None:
        """A factory without the import should be left unchanged."""
        updated = purge_component_factory_import_and_usage(
            FACTORY, FACTORY_SOURCE, f"{FW}/components/modal/modal-component.ngfactory.js"
        )
        assert updated == FACTORY_SOURCE


class TestPurgeProviderController:
    """Controller import, construction and token lookup."""

    @pytest.mark.unit
    def test_removes_getter_lookup_and_import(self) -> None:
        """The controller getter, token lookup and import should be removed."""
        updated = purge_provider_controller_import_and_usage(
            FACTORY, FACTORY_SOURCE, f"{FW}/components/alert/alert-controller.js"
        )
        assert "import20" not in updated
        assert "_AlertController_60" not in updated
        assert (
            "  getInternal(token, notFoundResult) {\n"
            "    return notFoundResult;\n"
            "  }\n"
            "}\n"
        ) in updated
        assert "import12.AlertCmpNgFactory" in updated

    @pytest.mark.unit
    def test_typed_factory_source(self) -> None:
        """Typed fields and getters in a .ts factory should be removed."""
        source = (
            "import * as import20 from '../../node_modules/ionic-angular/components/alert/alert-controller';\n"
            "class AppModuleInjector {\n"
            "  __AlertController_60:import20.AlertController;\n"
            "  _Other_1:import3.Other;\n"
            "  get _AlertController_60():import20.AlertController {\n"
            "    if ((this.__AlertController_60 == null)) { (this.__AlertController_60 = "
            "new import20.AlertController(this._App_52)); }\n"
            "    return this.__AlertController_60;\n"
            "  }\n"
            "}\n"
        )
        updated = purge_provider_controller_import_and_usage(
            "/app/src/app/app.module.ngfactory.ts", source, f"{FW}/components/alert/alert-controller.js"
        )
        assert updated == "class AppModuleInjector {\n  _Other_1:import3.Other;\n}\n"

    @pytest.mark.unit
    def test_eager_construction(self) -> None:
        """An eager constructor assignment should be removed."""
        source = (
            "import * as import20 from '../../node_modules/ionic-angular/components/alert/alert-controller';\n"
            "function createInternal() {\n"
            "  this._AlertController_60 = new import20.AlertController(this._App_52);\n"
            "  return this;\n"
            "}\n"
        )
        updated = purge_provider_controller_import_and_usage(
            FACTORY, source, f"{FW}/components/alert/alert-controller.js"
        )
        assert updated == "function createInternal() {\n  return this;\n}\n"

    @pytest.mark.unit
    def test_running_twice_is_a_no_op(self) -> None:
        """Running the rewrite twice should change nothing."""
        path = f"{FW}/components/alert/alert-controller.js"
        once = purge_provider_controller_import_and_usage(FACTORY, FACTORY_SOURCE, path)
        assert purge_provider_controller_import_and_usage(FACTORY, once, path) == once


class TestPurgeProviderClassName:
    """Provider list of the framework's root method."""

    INDEX_SOURCE = """import { AlertController } from './components/alert/alert-controller';
export class IonicModule {
  static forRoot(appRoot, config = null, deepLinkConfig = null) {
    return {
      ngModule: IonicModule,
      providers: [
        ActionSheetController,
        AlertController,
        App,
      ]
    };
  }
}
"""

    @pytest.mark.unit
    def test_removes_class_after_root_method(self, build_config) -> None:
        """The provider class should leave the forRoot providers list."""
        updated = purge_provider_class_name_from_root_method(self.INDEX_SOURCE, "AlertController", build_config)
        assert updated == self.INDEX_SOURCE.replace("        AlertController,\n", "")
        assert updated.startswith("import { AlertController } from")

    @pytest.mark.unit
    def test_similar_names_are_left_alone(self, build_config) -> None:
        """Classes sharing a name prefix should be kept."""
        updated = purge_provider_class_name_from_root_method(self.INDEX_SOURCE, "SheetController", build_config)
        assert updated == self.INDEX_SOURCE
