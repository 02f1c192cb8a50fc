"""Structured document decoders.

Purpose
-------
Turn raw item bytes into Python values. Each decoder is a small wrapper around
``json``/``lxml``/``tomllib``/``yaml.safe_load``; parser exceptions are logged
and re-raised unchanged so callers can catch the exception type of the library
that produced it.

Contents
--------
* :func:`decode_json` – :func:`json.loads`.
* :func:`decode_xml` – :mod:`lxml.etree` with entity resolution disabled,
  converted into nested dictionaries by :func:`element_to_data`.
* :func:`decode_toml` – :mod:`tomllib` (``tomli`` before Python 3.11).
* :func:`decode_yaml` – :func:`yaml.safe_load`.
* :data:`DECODERS` – format name to decoder mapping used by
  :class:`lib_configurator.item.Item`.

System Role
-----------
Invoked only after :class:`~lib_configurator.item.Item` has rejected empty
content, so decoders never see an empty buffer.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Final, Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

import yaml
from lxml import etree

from ...observability import log_error

Decoder = Callable[[bytes], Any]


def decode_json(data: bytes) -> Any:
    """Decode JSON *data*.

    Examples
    --------
    >>> decode_json(b'{"name": "test"}')
    {'name': 'test'}
    """

    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        log_error("item_decode_failed", format="json", error=str(exc))
        raise


def decode_toml(data: bytes) -> dict[str, Any]:
    """Decode TOML *data* (UTF-8).

    Examples
    --------
    >>> decode_toml(b'name = "test"')
    {'name': 'test'}
    """

    try:
        return tomllib.loads(data.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        log_error("item_decode_failed", format="toml", error=str(exc))
        raise


def decode_yaml(data: bytes) -> Any:
    """Decode YAML *data* with the safe loader.

    Examples
    --------
    >>> decode_yaml(b'name: test')
    {'name': 'test'}
    """

    try:
        return yaml.safe_load(data)
    except yaml.YAMLError as exc:
        log_error("item_decode_failed", format="yaml", error=str(exc))
        raise


def decode_xml(data: bytes) -> dict[str, Any]:
    """Decode XML *data* into nested dictionaries rooted at the document element.

    The root element plays the role of the target structure: its attributes and
    children become the keys of the returned mapping.

    Examples
    --------
    >>> decode_xml(b'<config version="2"><name>test</name></config>')
    {'version': '2', 'name': 'test'}
    """

    parser = etree.XMLParser(resolve_entities=False, load_dtd=False, no_network=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as exc:
        log_error("item_decode_failed", format="xml", error=str(exc))
        raise
    result = element_to_data(root)
    if isinstance(result, dict):
        return result
    return {"text": result} if result else {}


def element_to_data(element: Any) -> Any:
    """Convert an element into text (leaf) or a mapping (attributes + children).

    Repeated child tags collect into lists.

    Examples
    --------
    >>> root = etree.fromstring(b'<r><port>1</port><port>2</port><db><host>x</host></db></r>')
    >>> element_to_data(root)
    {'port': ['1', '2'], 'db': {'host': 'x'}}
    >>> element_to_data(etree.fromstring(b'<name> test </name>'))
    'test'
    """

    children = [child for child in element if isinstance(child.tag, str)]
    if not children and not element.attrib:
        return (element.text or "").strip()
    result: dict[str, Any] = {str(key): value for key, value in element.attrib.items()}
    for child in children:
        key = etree.QName(child).localname
        value = element_to_data(child)
        if key in result:
            existing = result[key]
            if isinstance(existing, list):
                existing.append(value)
            else:
                result[key] = [existing, value]
        else:
            result[key] = value
    text = (element.text or "").strip()
    if text and not children:
        result.setdefault("text", text)
    return result


DECODERS: Final[Mapping[str, Decoder]] = {
    "json": decode_json,
    "xml": decode_xml,
    "toml": decode_toml,
    "yaml": decode_yaml,
}


def decoder_for(format: str) -> Decoder:
    """Return the decoder registered for *format*.

    Examples
    --------
    >>> decoder_for("json") is decode_json
    True
    """

    return DECODERS[format]
