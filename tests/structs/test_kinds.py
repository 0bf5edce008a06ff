import pytest

from ingressclass.structs.kinds import INGRESS_CLASS_KEY, KNATIVE_INGRESS_CLASS_KEY, \
                                       ObjectKind, annotation_key_for, identify


@pytest.mark.parametrize('api_version, kind, expected', [
    ('networking.k8s.io/v1', 'Ingress', ObjectKind.INGRESS),
    ('networking.k8s.io/v1beta1', 'Ingress', ObjectKind.INGRESS_V1BETA1),
    ('extensions/v1beta1', 'Ingress', ObjectKind.INGRESS_EXTENSIONS),
    ('networking.internal.knative.dev/v1alpha1', 'Ingress', ObjectKind.KNATIVE_INGRESS),
    ('networking.k8s.io/v1', 'IngressClass', ObjectKind.INGRESS_CLASS),
    ('networking.k8s.io/v1beta1', 'IngressClass', ObjectKind.OTHER),
    ('configuration.konghq.com/v1beta1', 'TCPIngress', ObjectKind.OTHER),
    ('v1', 'Service', ObjectKind.OTHER),
    ('networking.k8s.io/v1', 'ingress', ObjectKind.OTHER),
])
def test_identification(api_version, kind, expected):
    kind = identify({'apiVersion': api_version, 'kind': kind})
    assert kind is expected


@pytest.mark.parametrize('body', [
    {},
    {'kind': 'Ingress'},
    {'apiVersion': 'networking.k8s.io/v1'},
    {'apiVersion': None, 'kind': None},
    {'apiVersion': 123, 'kind': ['Ingress']},
])
def test_identification_of_incomplete_objects(body):
    kind = identify(body)
    assert kind is ObjectKind.OTHER


@pytest.mark.parametrize('kind, expected', [
    (ObjectKind.INGRESS, True),
    (ObjectKind.INGRESS_V1BETA1, True),
    (ObjectKind.INGRESS_EXTENSIONS, True),
    (ObjectKind.KNATIVE_INGRESS, False),
    (ObjectKind.INGRESS_CLASS, False),
    (ObjectKind.OTHER, False),
])
def test_class_field_support(kind, expected):
    assert kind.has_class_field is expected


def test_annotation_key_for_knative_ingresses(make_body):
    body = make_body('networking.internal.knative.dev/v1alpha1', 'Ingress')
    key = annotation_key_for(body)
    assert key == KNATIVE_INGRESS_CLASS_KEY == 'networking.knative.dev/ingress.class'


@pytest.mark.parametrize('api_version, kind', [
    ('networking.k8s.io/v1', 'Ingress'),
    ('networking.k8s.io/v1beta1', 'Ingress'),
    ('extensions/v1beta1', 'Ingress'),
    ('networking.k8s.io/v1', 'IngressClass'),
    ('configuration.konghq.com/v1beta1', 'UDPIngress'),
    (None, None),
])
def test_annotation_key_for_everything_else(make_body, api_version, kind):
    body = make_body(api_version, kind)
    key = annotation_key_for(body)
    assert key == INGRESS_CLASS_KEY == 'kubernetes.io/ingress.class'
