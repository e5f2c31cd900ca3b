import os

import pytest

from conftest import ROOT, make_tree
from kubecompass.component.locator import ComponentPathLocator
from kubecompass.core.app import App, EnvironmentConfig
from kubecompass.core.errors import ComponentError, ErrorKind
from kubecompass.fs.filesystem import OsFileSystem


def test_locate_whole_tree(guestbook):
    paths = ComponentPathLocator(guestbook, "default").locate()
    assert paths == sorted(paths)
    assert f"{ROOT}/components/notes/README.md" not in paths
    assert not any(p.endswith("params.libsonnet") for p in paths)
    assert len(paths) == 4


def test_locate_skips_directories_without_params():
    app = make_tree({
        "components/loose/orphan.jsonnet": "{}",
        "components/loose/inner/params.libsonnet": "{}",
        "components/loose/inner/kept.yaml": "kind: Service",
    })
    assert ComponentPathLocator(app, "default").locate() == [
        f"{ROOT}/components/loose/inner/kept.yaml",
    ]


def test_locate_namespace_target(guestbook):
    assert ComponentPathLocator(guestbook, "prod").locate() == [
        f"{ROOT}/components/app/backend/redis.yaml",
    ]


def test_locate_target_is_not_recursive():
    app = make_tree({
        "components/app/params.libsonnet": "{}",
        "components/app/ui.yaml": "kind: Service",
        "components/app/backend/params.libsonnet": "{}",
        "components/app/backend/redis.yaml": "kind: Service",
    }, config={"environments": {"dev": {"targets": ["app"]}}})

    assert ComponentPathLocator(app, "dev").locate() == [f"{ROOT}/components/app/ui.yaml"]


def test_locate_file_target_and_overlap():
    app = make_tree({
        "components/app/params.libsonnet": "{}",
        "components/app/ui.yaml": "kind: Service",
    }, config={"environments": {"dev": {"targets": ["app", "app/ui.yaml"]}}})

    assert ComponentPathLocator(app, "dev").locate() == [f"{ROOT}/components/app/ui.yaml"]


def test_locate_target_not_a_namespace(guestbook):
    guestbook.config.environments["dev"] = EnvironmentConfig(name="dev", targets=["notes"])

    with pytest.raises(ComponentError) as exc:
        ComponentPathLocator(guestbook, "dev").locate()
    assert exc.value.kind is ErrorKind.INVALID


def test_locate_missing_target():
    app = make_tree({"components/params.libsonnet": "{}"},
                    config={"environments": {"dev": {"targets": ["gone"]}}})

    with pytest.raises(ComponentError) as exc:
        ComponentPathLocator(app, "dev").locate()
    assert exc.value.kind is ErrorKind.IO
    assert isinstance(exc.value.__cause__, FileNotFoundError)


def test_unknown_environment(guestbook):
    with pytest.raises(ComponentError) as exc:
        ComponentPathLocator(guestbook, "staging")
    assert exc.value.kind is ErrorKind.NOT_FOUND
    assert exc.value.name == "staging"


def test_missing_components_root():
    app = make_tree({"app.yaml": "name: empty"})
    with pytest.raises(ComponentError) as exc:
        ComponentPathLocator(app, "default").locate()
    assert exc.value.kind is ErrorKind.IO


@pytest.mark.skipif(os.name == "nt", reason="POSIX symlinks")
def test_locate_on_disk_ignores_symlink_loops(tmp_path):
    """
    CHAOS TEST: a symlink pointing back at the tree must not trap the walk.
    """
    ns = tmp_path / "components" / "app"
    ns.mkdir(parents=True)
    (ns / "params.libsonnet").write_text("{}")
    (ns / "ui.yaml").write_text("kind: Service")
    os.symlink(tmp_path / "components", ns / "loop", target_is_directory=True)

    app = App(str(tmp_path), OsFileSystem())
    assert ComponentPathLocator(app, "default").locate() == [str(ns / "ui.yaml")]
