import functools
import logging

import click.testing
import pytest

from ingressclass.cli import main

MANIFESTS = """
apiVersion: networking.k8s.io/v1
kind: IngressClass
metadata:
  name: kong
  annotations:
    ingressclass.kubernetes.io/is-default-class: "true"
spec:
  controller: ingress-controllers.konghq.com/kong
---
apiVersion: networking.k8s.io/v1
kind: Ingress
metadata:
  name: by-spec
  namespace: ns1
spec:
  ingressClassName: kong
---
apiVersion: networking.k8s.io/v1
kind: Ingress
metadata:
  name: by-annotation
  namespace: ns1
  annotations:
    kubernetes.io/ingress.class: kong
---
apiVersion: networking.k8s.io/v1
kind: Ingress
metadata:
  name: classless
  namespace: ns1
  annotations:
---
apiVersion: networking.k8s.io/v1
kind: Ingress
metadata:
  name: foreign
  namespace: ns1
spec:
  ingressClassName: nginx
---
"""

LIST_MANIFEST = """
apiVersion: v1
kind: List
items:
- apiVersion: networking.internal.knative.dev/v1alpha1
  kind: Ingress
  metadata:
    name: knative
    namespace: ns2
    annotations:
      networking.knative.dev/ingress.class: kong
- apiVersion: networking.internal.knative.dev/v1alpha1
  kind: Ingress
  metadata:
    name: knative-foreign
    namespace: ns2
    annotations:
      networking.knative.dev/ingress.class: istio
"""


@pytest.fixture(autouse=True)
def _restore_logging():
    logger = logging.getLogger()
    handlers = logger.handlers[:]
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture()
def manifests(tmp_path):
    path = tmp_path / 'manifests.yaml'
    path.write_text(MANIFESTS)
    return str(path)


@pytest.fixture()
def list_manifest(tmp_path):
    path = tmp_path / 'list.yaml'
    path.write_text(LIST_MANIFEST)
    return str(path)


@pytest.fixture()
def runner():
    runner = click.testing.CliRunner()
    return runner


@pytest.fixture()
def invoke(runner):
    return functools.partial(runner.invoke, main)
