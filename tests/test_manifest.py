import pytest

from fynetools.manifest import _NATIVE_ACTIVITY, manifest_lib_name

MANIFEST = """<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android"
    package="com.example.hello">
  <application android:label="Hello">
    <activity android:name="{activity}">
      <meta-data android:name="other.key" android:value="ignored" />
      {meta}
    </activity>
  </application>
</manifest>
"""

LIB_META = '<meta-data android:name="android.app.lib_name" android:value="hello" />'


def make(activity=_NATIVE_ACTIVITY, meta=LIB_META):
    return MANIFEST.format(activity=activity, meta=meta).encode()


def test_lib_name():
    assert manifest_lib_name(make()) == "hello"


def test_lib_name_from_str():
    assert manifest_lib_name(make().decode()) == "hello"


def test_wrong_activity():
    with pytest.raises(ValueError, match="can only build an .apk for GoNativeActivity"):
        manifest_lib_name(make(activity="com.example.Other"))


def test_missing_activity():
    data = b"<manifest><application></application></manifest>"
    with pytest.raises(ValueError, match='not ""'):
        manifest_lib_name(data)


def test_missing_lib_name():
    with pytest.raises(ValueError, match="missing meta-data android.app.lib_name"):
        manifest_lib_name(make(meta=""))


def test_malformed_xml():
    with pytest.raises(ValueError):
        manifest_lib_name(b"<manifest><application>")