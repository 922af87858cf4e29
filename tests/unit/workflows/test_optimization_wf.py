"""Tests for the tree shaking workflow over an in-memory framework package."""

import pytest

from linkprune.components.infrastructure.file_store_comp import FileStore
from linkprune.helpers.exceptions import FileNotInStoreError
from linkprune.workflows.optimization.optimization_wf import do_optimizations

FW = "/app/node_modules/ionic-angular"
COMPONENTS = f"{FW}/components"
INDEX = f"{FW}/index.js"
ROOT_FACTORY = "/app/src/app/app.module.ngfactory.js"
MAIN = "/app/src/app/main.js"
APP_MODULE = "/app/src/app/app.module.js"
HOME = "/app/src/pages/home/home.js"

INDEX_SOURCE = """import { Alert } from './components/alert/alert-component';
import { AlertController } from './components/alert/alert-controller';
import { Badge } from './components/badge/badge';
import { Button } from './components/button/button';
export { Alert } from './components/alert/alert-component';
export { AlertController } from './components/alert/alert-controller';
export { Badge } from './components/badge/badge';
export { Button } from './components/button/button';
export class IonicModule {
  static forRoot(appRoot) {
    return {
      ngModule: IonicModule,
      providers: [
        AlertController,
        ToastController,
      ]
    };
  }
}
"""

EXPECTED_INDEX = """import { Button } from './components/button/button';
export { Button } from './components/button/button';
export class IonicModule {
  static forRoot(appRoot) {
    return {
      ngModule: IonicModule,
      providers: [
        ToastController,
      ]
    };
  }
}
"""

FACTORY_SOURCE = """import * as import0 from '@angular/core';
import * as import12 from '../../node_modules/ionic-angular/components/alert/alert-component.ngfactory';
import * as import13 from '../../node_modules/ionic-angular/components/toast/toast-component.ngfactory';
import * as import20 from '../../node_modules/ionic-angular/components/alert/alert-controller';
import * as import21 from '../../node_modules/ionic-angular/components/toast/toast-controller';
class AppModuleInjector extends import0.NgModuleInjector {
  constructor(parent) {
    super(parent, [import12.AlertCmpNgFactory, import13.ToastCmpNgFactory], []);
  }
  get _AlertController_60() {
    if ((this.__AlertController_60 == null)) { (this.__AlertController_60 = new import20.AlertController()); }
    return this.__AlertController_60;
  }
  get _ToastController_61() {
    if ((this.__ToastController_61 == null)) { (this.__ToastController_61 = new import21.ToastController()); }
    return this.__ToastController_61;
  }
  getInternal(token, notFoundResult) {
    if ((token === import20.AlertController)) { return this._AlertController_60; }
    if ((token === import21.ToastController)) { return this._ToastController_61; }
    return notFoundResult;
  }
}
"""


def _graph() -> dict:
    alert = f"{COMPONENTS}/alert"
    toast = f"{COMPONENTS}/toast"
    return {
        f"{alert}/alert-controller.js": {ROOT_FACTORY, INDEX},
        f"{alert}/alert-component.js": {INDEX, f"{alert}/alert-controller.js"},
        f"{alert}/alert-component.ngfactory.js": {ROOT_FACTORY},
        f"{toast}/toast-controller.js": {ROOT_FACTORY, INDEX, HOME},
        f"{toast}/toast-component.js": {INDEX, f"{toast}/toast-controller.js"},
        f"{toast}/toast-component.ngfactory.js": {ROOT_FACTORY},
        f"{COMPONENTS}/badge/badge.js": {INDEX},
        f"{COMPONENTS}/button/button.js": {INDEX, HOME},
        HOME: {APP_MODULE},
        APP_MODULE: {MAIN},
        ROOT_FACTORY: {MAIN},
        MAIN: set(),
    }


class TestDoOptimizations:
    """Pruning plus barrel and root factory rewrites."""

    @pytest.mark.unit
    def test_purges_unused_components_and_provider(self, build_config) -> None:
        """do_optimizations should rewrite the barrel and root factory."""
        store = FileStore({INDEX: INDEX_SOURCE, ROOT_FACTORY: FACTORY_SOURCE})

        result = do_optimizations(store, _graph(), build_config)

        assert set(result.purged_modules) == {
            f"{COMPONENTS}/badge/badge.js",
            f"{COMPONENTS}/alert/alert-controller.js",
            f"{COMPONENTS}/alert/alert-component.js",
            f"{COMPONENTS}/alert/alert-component.ngfactory.js",
        }
        assert store.get(INDEX) == EXPECTED_INDEX

        factory = store.get(ROOT_FACTORY)
        assert "import12" not in factory
        assert "import20" not in factory
        assert "super(parent, [import13.ToastCmpNgFactory], []);" in factory
        assert "get _ToastController_61()" in factory
        assert "if ((token === import21.ToastController))" in factory
        assert sorted(store.dirty_paths()) == sorted([INDEX, ROOT_FACTORY])

    @pytest.mark.unit
    def test_without_root_factory_only_barrel_changes(self, build_config) -> None:
        """Without a root factory the barrel should still drop unused providers."""
        store = FileStore({INDEX: INDEX_SOURCE})
        do_optimizations(store, _graph(), build_config)
        assert "AlertController" not in store.get(INDEX)
        assert store.get(INDEX) == EXPECTED_INDEX
        assert store.dirty_paths() == [INDEX]

    @pytest.mark.unit
    def test_callers_graph_is_untouched(self, build_config) -> None:
        """do_optimizations should not mutate the caller's graph."""
        graph = _graph()
        do_optimizations(FileStore({INDEX: INDEX_SOURCE}), graph, build_config)
        assert graph == _graph()

    @pytest.mark.unit
    def test_second_run_changes_nothing(self, build_config) -> None:
        """A second run should change nothing."""
        store = FileStore({INDEX: INDEX_SOURCE, ROOT_FACTORY: FACTORY_SOURCE})
        do_optimizations(store, _graph(), build_config)
        index, factory = store.get(INDEX), store.get(ROOT_FACTORY)
        do_optimizations(store, _graph(), build_config)
        assert (store.get(INDEX), store.get(ROOT_FACTORY)) == (index, factory)

    @pytest.mark.unit
    def test_missing_barrel(self, build_config) -> None:
        """A missing barrel should raise FileNotInStoreError."""
        with pytest.raises(FileNotInStoreError):
            do_optimizations(FileStore(), _graph(), build_config)
