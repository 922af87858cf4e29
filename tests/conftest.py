"""
Pytest fixtures and configuration for the test suite.

Fixtures model a small Ionic project rooted at /app:
- /app/src/app/app.module.ts          root descriptor calling IonicModule.forRoot
- /app/src/pages/<page>/<page>.ts     annotated pages
- /app/src/pages/<page>/<page>.module.ts  their descriptors
- /app/node_modules/ionic-angular/    the framework package
Nothing touches the real filesystem except tests that use tmp_path.
"""

import os
import sys
from dataclasses import replace
from pathlib import Path

import pytest

# Add project root to path so tests can import linkprune package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from linkprune.components.infrastructure.file_store_comp import FileStore  # noqa: E402
from linkprune.helpers.dto.config_dto import BuildConfig  # noqa: E402
from linkprune.services.config_svc import ConfigService  # noqa: E402

APP_MODULE_TS = """import { NgModule } from '@angular/core';
import { BrowserModule } from '@angular/platform-browser';
import { IonicApp, IonicModule } from 'ionic-angular';
import { MyApp } from './app.component';

@NgModule({
  declarations: [
    MyApp
  ],
  imports: [
    BrowserModule,
    IonicModule.forRoot(MyApp)
  ],
  bootstrap: [IonicApp],
  entryComponents: [
    MyApp
  ],
  providers: []
})
export class AppModule {}
"""

HOME_PAGE_TS = """import { Component } from '@angular/core';
import { IonicPage, NavController } from 'ionic-angular';

@IonicPage({
  priority: 'high',
  defaultHistory: ['LoginPage', "WelcomePage"],
  segment: 'home',
  name: 'home-page'
})
@Component({
  selector: 'page-home',
  templateUrl: 'home.html'
})
export class HomePage {
  constructor(public navCtrl: NavController) {}
}
"""

HOME_MODULE_TS = """import { NgModule } from '@angular/core';
import { IonicPageModule } from 'ionic-angular';
import { HomePage } from './home';

@NgModule({
  declarations: [HomePage],
  imports: [IonicPageModule.forChild(HomePage)],
})
export class HomePageModule {}
"""

ABOUT_PAGE_TS = """import { Component } from '@angular/core';
import { IonicPage } from 'ionic-angular';

@IonicPage()
@Component({
  selector: 'page-about',
  templateUrl: 'about.html'
})
export class AboutPage {}
"""

ABOUT_MODULE_TS = """import { NgModule } from '@angular/core';
import { IonicPageModule } from 'ionic-angular';
import { AboutPage } from './about';

@NgModule({
  declarations: [AboutPage],
  imports: [IonicPageModule.forChild(AboutPage)],
})
export class AboutPageModule {}
"""

APP_MODULE_FACTORY_TS = """// Generated factory (módulo raíz)
import * as import0 from '@angular/core';
import * as import1 from './app.module';
class AppModuleInjector extends import0.NgModuleInjector<import1.AppModule> {
  _AppModule_51:import1.AppModule;
  _DeepLinkConfigToken_53:any;
  createInternal():import1.AppModule {
    this._AppModule_51 = new import1.AppModule();
    this._DeepLinkConfigToken_53 = (null as any);
    this._DeepLinkConfigTokenBackup_54 = (null as any);
    return this._AppModule_51;
  }
}
"""


@pytest.fixture(autouse=True)
def clean_linkprune_env(monkeypatch):
    """Keep developer LINKPRUNE_* variables out of the tests."""
    for key in list(os.environ):
        if key.startswith("LINKPRUNE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def build_config() -> BuildConfig:
    """Source-mode BuildConfig for a project rooted at /app."""
    return ConfigService(root_dir="/app").build_config()


@pytest.fixture
def compiled_config(build_config) -> BuildConfig:
    """Same project built ahead of time (registry goes into the root factory)."""
    return replace(build_config, compiled_mode=True)


@pytest.fixture
def app_file_store() -> FileStore:
    """Root descriptor plus two annotated pages (home first, then about)."""
    return FileStore(
        {
            "/app/src/app/app.module.ts": APP_MODULE_TS,
            "/app/src/pages/home/home.ts": HOME_PAGE_TS,
            "/app/src/pages/home/home.module.ts": HOME_MODULE_TS,
            "/app/src/pages/about/about.ts": ABOUT_PAGE_TS,
            "/app/src/pages/about/about.module.ts": ABOUT_MODULE_TS,
        }
    )


@pytest.fixture
def app_module_source() -> str:
    return APP_MODULE_TS


@pytest.fixture
def app_factory_source() -> str:
    """Generated root module factory with one registry field assignment."""
    return APP_MODULE_FACTORY_TS


# === PYTEST MARKERS ===


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a fast unit test")
    config.addinivalue_line("markers", "integration: mark test as exercising a whole workflow or the CLI")
