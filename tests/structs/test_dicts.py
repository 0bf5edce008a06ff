import pytest

from ingressclass.structs.dicts import MappingView, resolve


@pytest.mark.parametrize('field', ['spec.ingressClassName', ['spec', 'ingressClassName']])
def test_resolving_existing_fields(field):
    body = {'spec': {'ingressClassName': 'kong'}}
    assert resolve(body, field, None) == 'kong'


def test_resolving_keys_with_dots():
    body = {'metadata': {'annotations': {'kubernetes.io/ingress.class': 'kong'}}}
    field = ('metadata', 'annotations', 'kubernetes.io/ingress.class')
    assert resolve(body, field, None) == 'kong'
    assert resolve(body, 'metadata.annotations.kubernetes.io/ingress.class', None) is None


@pytest.mark.parametrize('body', [
    {},
    {'spec': None},
    {'spec': 'kong'},
    {'spec': {}},
    None,
])
def test_resolving_unreachable_fields(body):
    default = object()
    assert resolve(body, 'spec.ingressClassName', default) is default


def test_resolving_nulls_as_values():
    body = {'spec': {'ingressClassName': None}}
    assert resolve(body, 'spec.ingressClassName', 'default') is None


def test_resolving_the_root():
    body = {'kind': 'Ingress'}
    assert resolve(body, (), None) is body


@pytest.mark.parametrize('body', [
    {},
    {'metadata': None},
    {'metadata': {'annotations': None}},
    {'metadata': {'annotations': 'kong'}},
])
def test_views_of_unreachable_fields_are_empty(body):
    view = MappingView(body, ('metadata', 'annotations'))
    assert len(view) == 0
    assert list(view) == []
    assert view.get('kubernetes.io/ingress.class') is None
    assert repr(view) == '{}'


def test_views_follow_the_source_without_modifying_it():
    body = {}
    view = MappingView(body, 'spec')
    assert view.get('ingressClassName') is None
    assert body == {}

    body['spec'] = {'ingressClassName': 'kong'}
    assert view['ingressClassName'] == 'kong'
    assert dict(view) == {'ingressClassName': 'kong'}
