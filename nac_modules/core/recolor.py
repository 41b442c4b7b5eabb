"""
Shape normalization and fill substitution for variant documents.

Shape authors either wrap their paths in a <g> or leave them directly under
<svg>. At load time every drawable top-level child is moved into one fresh
wrapper group, so recolouring has a single code path: set `fill` on the
wrapper and let every sub-path inherit it.
"""

import copy
import re
import xml.etree.ElementTree as ET
from typing import Tuple, Union

from ..models import Color, ColorLike
from .errors import MalformedAssetError

SVG_NS = 'http://www.w3.org/2000/svg'
XLINK_NS = 'http://www.w3.org/1999/xlink'

ET.register_namespace('', SVG_NS)
ET.register_namespace('xlink', XLINK_NS)

ViewBox = Tuple[float, float, float, float]

DEFAULT_VIEW_BOX: ViewBox = (0.0, 0.0, 100.0, 100.0)

# Root children that are not painted and stay outside the wrapper
_NON_DRAWABLE = {'defs', 'title', 'desc', 'metadata', 'style'}

# Root attributes that describe the canvas; everything else is paint state
# inherited by the content and moves onto the wrapper
_ROOT_ONLY = {'viewBox', 'width', 'height', 'version', 'x', 'y',
              'preserveAspectRatio', 'baseProfile', 'id'}

_NUMBER_SPLIT_RE = re.compile(r'[\s,]+')
_LENGTH_RE = re.compile(r'^\s*([0-9]*\.?[0-9]+)\s*(px)?\s*$')


def local_name(tag) -> str:
    """Tag name without its namespace ('{ns}g' -> 'g')."""
    if not isinstance(tag, str):
        return ''
    return tag.rsplit('}', 1)[-1]


def svg_tag(name: str, like: ET.Element = None) -> str:
    """Qualified tag in the SVG namespace, or bare if `like` has no namespace."""
    if like is not None and not like.tag.startswith('{'):
        return name
    return f'{{{SVG_NS}}}{name}'


def _read_view_box(root: ET.Element) -> ViewBox:
    view_box = root.get('viewBox')
    if view_box:
        parts = [p for p in _NUMBER_SPLIT_RE.split(view_box.strip()) if p]
        if len(parts) == 4:
            try:
                values = tuple(float(p) for p in parts)
            except ValueError:
                raise MalformedAssetError(f"Invalid viewBox: {view_box!r}")
            if values[2] <= 0 or values[3] <= 0:
                raise MalformedAssetError(f"Degenerate viewBox: {view_box!r}")
            return values
        raise MalformedAssetError(f"Invalid viewBox: {view_box!r}")
    
    # Fall back to plain pixel width/height
    width = _LENGTH_RE.match(root.get('width', ''))
    height = _LENGTH_RE.match(root.get('height', ''))
    if width and height and float(width.group(1)) > 0 and float(height.group(1)) > 0:
        return (0.0, 0.0, float(width.group(1)), float(height.group(1)))
    
    return DEFAULT_VIEW_BOX


def normalize_shape(svg_text: Union[str, bytes]) -> Tuple[ET.Element, ET.Element, ViewBox]:
    """
    Parse a variant document and wrap its drawable content in one group.
    
    Args:
        svg_text: The SVG document text
        
    Returns:
        (root, wrapper, view_box) where `wrapper` is the <g> holding every
        drawable element of `root` along with the root's inherited paint
        attributes (fill-rule, stroke, style, ...)
        
    Raises:
        MalformedAssetError: If the text is not an SVG document with content
    """
    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as e:
        raise MalformedAssetError(f"Unparsable shape: {e}")
    
    if local_name(root.tag) != 'svg':
        raise MalformedAssetError(f"Expected an <svg> root, got <{local_name(root.tag)}>")
    
    view_box = _read_view_box(root)
    
    drawable = [child for child in root if local_name(child.tag) not in _NON_DRAWABLE]
    if not drawable:
        raise MalformedAssetError("Shape has no drawable content")
    
    wrapper = ET.Element(svg_tag('g', root))
    for name in list(root.attrib):
        if name in _ROOT_ONLY or name.startswith('{'):
            continue
        wrapper.set(name, root.attrib.pop(name))
    
    for child in drawable:
        root.remove(child)
        wrapper.append(child)
    root.append(wrapper)
    
    return root, wrapper, view_box


def recolored_group(geometry, color: ColorLike) -> ET.Element:
    """
    Copy of the geometry's wrapper group with its fill set to `color`.
    Only the wrapper's fill is touched: the `fill` attribute is replaced and a
    `fill` declaration in its inline style (carried over from the root) is
    dropped so it cannot override the new colour.
    """
    group = copy.deepcopy(geometry.wrapper)
    group.set('fill', Color.parse(color).css)
    
    style = group.get('style')
    if style is not None:
        declarations = [
            d.strip() for d in style.split(';')
            if d.strip() and d.split(':', 1)[0].strip().lower() != 'fill'
        ]
        if declarations:
            group.set('style', ';'.join(declarations))
        else:
            del group.attrib['style']
    return group


def recolor_document(geometry, color: ColorLike) -> str:
    """Standalone SVG text for the geometry painted in `color`."""
    source = geometry.root
    root = ET.Element(source.tag, dict(source.attrib))
    for child in source:
        if child is geometry.wrapper:
            root.append(recolored_group(geometry, color))
        else:
            root.append(copy.deepcopy(child))
    return ET.tostring(root, encoding='unicode')
