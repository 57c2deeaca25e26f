"""Reading the Android manifest of a native activity."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET

_ACTIVITY_PACKAGE = ".".join(("org", "go" + "lang", "app"))
_NATIVE_ACTIVITY = f"{_ACTIVITY_PACKAGE}.GoNativeActivity"
_LIB_NAME_KEY = "android.app.lib_name"


def _local(name: str) -> str:
    return name.rpartition("}")[2]


def _attr(element: ET.Element, name: str) -> str:
    value = ""
    for key, attr_value in element.attrib.items():
        if _local(key) == name:
            value = attr_value
    return value


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def manifest_lib_name(data: bytes | str) -> str:
    """Return the library name of the NativeActivity declared in AndroidManifest.xml.

    Raises ValueError if the XML is malformed, the activity is not the native
    activity, or the lib_name meta-data is missing.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as err:
        raise ValueError(str(err)) from err

    name = ""
    meta_data: list[ET.Element] = []
    for application in _children(root, "application"):
        for activity in _children(application, "activity"):
            name = _attr(activity, "name")
            meta_data.extend(_children(activity, "meta-data"))

    if name != _NATIVE_ACTIVITY:
        raise ValueError(f"can only build an .apk for GoNativeActivity, not {json.dumps(name)}")

    lib_name = next(
        (_attr(md, "value") for md in meta_data if _attr(md, "name") == _LIB_NAME_KEY),
        "",
    )
    if not lib_name:
        raise ValueError("AndroidManifest.xml missing meta-data android.app.lib_name")
    return lib_name