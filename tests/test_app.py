import pytest

from kubecompass.core.app import DEFAULT_ENV, PARAMS_FILE, App, AppConfig
from kubecompass.core.errors import ComponentError, ErrorKind
from kubecompass.fs.filesystem import MemoryFileSystem, OsFileSystem

APP_YAML = """\
name: guestbook
paramsFile: params.jsonnet
environments:
  default:
  prod:
    targets:
    - app
    - app/backend
"""


def test_load_app_yaml():
    fs = MemoryFileSystem({"/srv/gb/app.yaml": APP_YAML})
    app = App.load("/srv/gb", fs)

    assert app.root == "/srv/gb"
    assert app.fs is fs
    assert app.config.name == "guestbook"
    assert app.params_file == "params.jsonnet"
    assert app.components_dir == "/srv/gb/components"
    assert app.environment("default").targets == []
    assert app.environment("prod").targets == ["app", "app/backend"]


def test_load_without_app_yaml():
    app = App.load("/srv/gb", MemoryFileSystem())
    assert list(app.config.environments) == [DEFAULT_ENV]
    assert app.params_file == PARAMS_FILE


def test_load_from_disk(tmp_path):
    (tmp_path / "app.yaml").write_text(APP_YAML)
    app = App.load(str(tmp_path))
    assert isinstance(app.fs, OsFileSystem)
    assert app.config.name == "guestbook"


def test_load_unparseable_app_yaml():
    fs = MemoryFileSystem({"/srv/gb/app.yaml": "environments: [unclosed\n"})
    with pytest.raises(ComponentError) as exc:
        App.load("/srv/gb", fs)
    assert exc.value.kind is ErrorKind.INVALID
    assert exc.value.path == "/srv/gb/app.yaml"


@pytest.mark.parametrize("data", [
    ["not", "a", "mapping"],
    {"environments": {"prod": {"targets": "app"}}},
    {"environments": ["dev", "prod"]},
    {"environments": {"prod": ["app"]}},
    {"environments": {"prod": "app"}},
])
def test_config_rejects_bad_shapes(data):
    with pytest.raises(ComponentError) as exc:
        AppConfig.from_dict(data)
    assert exc.value.kind is ErrorKind.INVALID


def test_unknown_environment():
    app = App("/srv/gb", MemoryFileSystem())
    with pytest.raises(ComponentError) as exc:
        app.environment("prod")
    assert exc.value.kind is ErrorKind.NOT_FOUND


def test_load_list_shaped_environments():
    fs = MemoryFileSystem({"/srv/gb/app.yaml": "environments:\n- dev\n- prod\n"})
    with pytest.raises(ComponentError) as exc:
        App.load("/srv/gb", fs)
    assert exc.value.kind is ErrorKind.INVALID
