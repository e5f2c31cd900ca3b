import pytest

from kubecompass.core.app import App, AppConfig
from kubecompass.fs.filesystem import MemoryFileSystem

ROOT = "/srv/guestbook"

DEPLOYMENT = """\
apiVersion: apps/v1
kind: Deployment
metadata:
  name: guestbook-ui
spec:
  replicas: 1 # scaled by hand
  template:
    spec:
      containers:
      - name: ui
        image: gcr.io/heptio-images/ks-guestbook-demo:0.1
"""

SERVICE_AND_MAP = """\
apiVersion: v1
kind: Service
metadata:
  name: redis
spec:
  ports:
  - port: 6379
---
apiVersion: v1
kind: ConfigMap
metadata:
  name: redis-conf
data:
  maxmemory: 2mb
"""


def make_tree(files, config=None, root=ROOT):
    fs = MemoryFileSystem({f"{root.rstrip('/')}/{p}": c for p, c in files.items()})
    return App(root, fs, AppConfig.from_dict(config))


@pytest.fixture
def guestbook():
    """
    components/
      params.libsonnet
      foo.jsonnet
      app/params.libsonnet
      app/bar.jsonnet
      app/ui.yaml
      app/backend/params.libsonnet
      app/backend/redis.yaml
      notes/README.md           (not a namespace)
    """
    return make_tree({
        "components/params.libsonnet": "{}",
        "components/foo.jsonnet": "{}",
        "components/app/params.libsonnet": "{}",
        "components/app/bar.jsonnet": "{}",
        "components/app/ui.yaml": DEPLOYMENT,
        "components/app/backend/params.libsonnet": "{}",
        "components/app/backend/redis.yaml": SERVICE_AND_MAP,
        "components/notes/README.md": "# notes",
    }, config={
        "name": "guestbook",
        "environments": {
            "default": {},
            "prod": {"targets": ["app/backend"]},
        },
    })
