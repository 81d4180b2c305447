"""Fixtures shared by the trellis example apps.

Every example directory holds an ``app.py`` that builds a module-level
``app`` from declarations, next to a ``test_app.py`` exercising it.
"""

import importlib.util
from pathlib import Path

import pytest

from trellis import Application


def _load_app(app_path: Path) -> Application:
    # One module name per example directory
    module_name = f"trellis_example_{app_path.parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, app_path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    app = module.app
    assert isinstance(app, Application), f"{app_path} must define an Application named 'app'"
    return app


@pytest.fixture
def example_app(request: pytest.FixtureRequest) -> Application:
    """A freshly declared app from the ``app.py`` beside the requesting test.

    Declarations are re-applied for every test, so in-memory state starts
    empty each time.
    """
    return _load_app(Path(request.path).parent / "app.py")
