"""Tests for shape normalization and fill substitution."""

import xml.etree.ElementTree as ET

import pytest

from nac_modules.core import MalformedAssetError, VariantGeometry
from nac_modules.core.recolor import (
    DEFAULT_VIEW_BOX, SVG_NS, local_name, normalize_shape,
    recolor_document, recolored_group
)

from tests.conftest import make_variant_svg

TEAL = (132, 218, 222)


def _drawable_children(root):
    return [c for c in root if local_name(c.tag) not in ('defs', 'title', 'desc', 'metadata', 'style')]


def test_group_wrapped_shape_gets_single_wrapper():
    root, wrapper, view_box = normalize_shape(make_variant_svg(10, grouped=True))
    assert _drawable_children(root) == [wrapper]
    assert [local_name(c.tag) for c in wrapper] == ['g']
    assert len(list(wrapper[0])) == 3
    assert view_box == (0.0, 0.0, 100.0, 100.0)


def test_root_level_paths_get_single_wrapper():
    root, wrapper, _ = normalize_shape(make_variant_svg(15, grouped=False))
    assert _drawable_children(root) == [wrapper]
    assert [local_name(c.tag) for c in wrapper] == ['rect'] * 5


def test_non_drawable_children_stay_at_root():
    svg = (
        f'<svg xmlns="{SVG_NS}" viewBox="0 0 100 100">'
        '<title>module</title>'
        '<defs><linearGradient id="a"/></defs>'
        '<path d="M0 0H100V100Z"/>'
        '</svg>'
    )
    root, wrapper, _ = normalize_shape(svg)
    assert [local_name(c.tag) for c in root] == ['title', 'defs', 'g']
    assert root[2] is wrapper
    assert [local_name(c.tag) for c in wrapper] == ['path']


def test_view_box_fallbacks():
    _, _, view_box = normalize_shape('<svg width="64px" height="32"><path d="M0 0"/></svg>')
    assert view_box == (0.0, 0.0, 64.0, 32.0)
    _, _, view_box = normalize_shape('<svg><path d="M0 0"/></svg>')
    assert view_box == DEFAULT_VIEW_BOX
    _, _, view_box = normalize_shape('<svg viewBox="10,10,50,50"><path d="M0 0"/></svg>')
    assert view_box == (10.0, 10.0, 50.0, 50.0)


def test_unnamespaced_document_keeps_bare_tags():
    root, wrapper, _ = normalize_shape('<svg viewBox="0 0 100 100"><path d="M0 0"/></svg>')
    assert wrapper.tag == 'g'


@pytest.mark.parametrize("text", [
    '<svg viewBox="0 0 100 100"><path d="M0 0"',
    '<html><body/></html>',
    f'<svg xmlns="{SVG_NS}" viewBox="0 0 100 100"><title>empty</title></svg>',
    '<svg viewBox="0 0 0 100"><path d="M0 0"/></svg>',
    '<svg viewBox="a b c d"><path d="M0 0"/></svg>',
])
def test_malformed_shapes(text):
    with pytest.raises(MalformedAssetError):
        normalize_shape(text)


def test_recolored_group_sets_only_fill():
    svg = (
        f'<svg xmlns="{SVG_NS}" viewBox="0 0 100 100">'
        '<g transform="rotate(90 50 50)" stroke="red">'
        '<path d="M0 0H100" stroke-width="3"/>'
        '</g>'
        '</svg>'
    )
    geometry = VariantGeometry.parse('1', 0, svg)
    group = recolored_group(geometry, TEAL)
    
    assert group.attrib == {'fill': 'rgb(132,218,222)'}
    inner = group[0]
    assert inner.attrib == {'transform': 'rotate(90 50 50)', 'stroke': 'red'}
    assert inner[0].attrib == {'d': 'M0 0H100', 'stroke-width': '3'}


def test_recolor_does_not_mutate_geometry():
    geometry = VariantGeometry.parse('E', 3, make_variant_svg(3, grouped=False))
    recolored_group(geometry, TEAL)
    recolor_document(geometry, '#ff006e')
    assert geometry.wrapper.get('fill') is None


def test_recolor_document_is_standalone_svg():
    geometry = VariantGeometry.parse('1', 5, make_variant_svg(5, grouped=True))
    text = recolor_document(geometry, '#ff006e')
    
    root = ET.fromstring(text)
    assert root.tag == f'{{{SVG_NS}}}svg'
    assert root.get('viewBox') == '0 0 100 100'
    groups = [c for c in root if local_name(c.tag) == 'g']
    assert len(groups) == 1
    assert groups[0].get('fill') == 'rgb(255,0,110)'


def test_both_structures_recolour_identically():
    grouped = VariantGeometry.parse('1', 6, make_variant_svg(6, grouped=True))
    flat = VariantGeometry.parse('E', 6, make_variant_svg(6, grouped=False))
    assert recolored_group(grouped, TEAL).get('fill') == recolored_group(flat, TEAL).get('fill')
    rects_grouped = recolored_group(grouped, TEAL).findall(f'.//{{{SVG_NS}}}rect')
    rects_flat = recolored_group(flat, TEAL).findall(f'.//{{{SVG_NS}}}rect')
    assert [r.attrib for r in rects_grouped] == [r.attrib for r in rects_flat]


def test_root_paint_attributes_move_to_wrapper():
    svg = (
        f'<svg xmlns="{SVG_NS}" viewBox="0 0 100 100" width="100" height="100" '
        'fill-rule="evenodd" stroke="#123456" stroke-width="4">'
        '<path d="M0 0H100V100Z"/>'
        '</svg>'
    )
    root, wrapper, _ = normalize_shape(svg)
    assert root.attrib == {'viewBox': '0 0 100 100', 'width': '100', 'height': '100'}
    assert wrapper.attrib == {'fill-rule': 'evenodd', 'stroke': '#123456', 'stroke-width': '4'}


def test_root_fill_is_replaced_by_recolour():
    svg = (
        f'<svg xmlns="{SVG_NS}" viewBox="0 0 100 100" fill="red" '
        'style="fill:blue; stroke:green">'
        '<path d="M0 0H100V100Z"/>'
        '</svg>'
    )
    geometry = VariantGeometry.parse('1', 0, svg)
    group = recolored_group(geometry, TEAL)
    assert group.get('fill') == 'rgb(132,218,222)'
    assert group.get('style') == 'stroke:green'
    
    only_fill = VariantGeometry.parse('1', 0, svg.replace('fill:blue; stroke:green', 'fill:blue'))
    assert 'style' not in recolored_group(only_fill, TEAL).attrib
