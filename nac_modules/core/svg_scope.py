"""
Id and class scoping for shapes merged into one exported document.

Each variant document is self-contained, so two glyphs may both define
id="a" or style a class "a". When their content is written side by side the
names are prefixed per variant (and per cell for ids inside the drawn
content) and every reference is rewritten to match.
"""

import re
import xml.etree.ElementTree as ET
from typing import Dict, Iterable, Mapping

from .recolor import XLINK_NS, local_name

_URL_RE = re.compile(r'url\(\s*([\'"]?)#([^)\'"\s]+)\1\s*\)')
_CLASS_SELECTOR_RE = re.compile(r'\.(-?[_a-zA-Z][\w-]*)')
_ID_SELECTOR_RE = re.compile(r'#(-?[_a-zA-Z][\w-]*)')
_RULE_RE = re.compile(r'([^{}]*)(\{[^{}]*\})')
_UNSAFE_RE = re.compile(r'[^\w-]')

_HREF_ATTRS = ('href', f'{{{XLINK_NS}}}href')


def scope_prefix(glyph: str, variant: int) -> str:
    """Per-variant name prefix, e.g. 'g1_v00_'."""
    return 'g{}_v{:02d}_'.format(_UNSAFE_RE.sub('_', glyph), variant)


def collect_ids(elements: Iterable[ET.Element]) -> set:
    """Every id defined in the given subtrees."""
    return {
        node.get('id')
        for element in elements
        for node in element.iter()
        if node.get('id')
    }


def prefixed(ids: Iterable[str], prefix: str) -> Dict[str, str]:
    return {name: prefix + name for name in ids}


def _rewrite_urls(value: str, id_map: Mapping[str, str]) -> str:
    def replace(match):
        target = id_map.get(match.group(2))
        if target is None:
            return match.group(0)
        return f'url(#{target})'
    return _URL_RE.sub(replace, value)


def scope_css(text: str, id_map: Mapping[str, str], class_prefix: str) -> str:
    """Rewrite class and id selectors and url() references in a stylesheet."""
    def rule(match):
        selectors = _CLASS_SELECTOR_RE.sub(lambda m: f'.{class_prefix}{m.group(1)}', match.group(1))
        selectors = _ID_SELECTOR_RE.sub(lambda m: '#' + id_map.get(m.group(1), m.group(1)), selectors)
        return selectors + _rewrite_urls(match.group(2), id_map)
    return _RULE_RE.sub(rule, text)


def scope_element(element: ET.Element, id_map: Mapping[str, str], class_prefix: str) -> ET.Element:
    """
    Rename ids and classes in `element` (in place) and rewrite the url(#..),
    href and xlink:href references that point at renamed ids.
    
    Returns:
        The same element, for chaining
    """
    for node in element.iter():
        if local_name(node.tag) == 'style' and node.text:
            node.text = scope_css(node.text, id_map, class_prefix)
        
        for name, value in list(node.attrib.items()):
            if name == 'id':
                node.set(name, id_map.get(value, value))
            elif name == 'class':
                node.set(name, ' '.join(class_prefix + c for c in value.split()))
            elif name in _HREF_ATTRS and value.startswith('#'):
                node.set(name, '#' + id_map.get(value[1:], value[1:]))
            elif 'url(' in value:
                node.set(name, _rewrite_urls(value, id_map))
    return element
