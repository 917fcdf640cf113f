import pathlib

MANIFEST = """\
<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android" package="com.example.app" android:versionCode="{code}" android:versionName="{name}">
  <!-- Keep the version attributes on the root element -->
  <uses-sdk android:minSdkVersion="21" />
  <application android:label="Example" />
</manifest>
"""

MANIFEST_NO_VERSION_NAME = """\
<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android" package="com.example.app" android:versionCode="7">
  <application android:label="Example" />
</manifest>
"""

ASSEMBLY_INFO = """\
using System.Reflection;
using System.Runtime.InteropServices;

[assembly: AssemblyTitle("Example")]
// [assembly: AssemblyVersion("9.9.9.9")]
[assembly: AssemblyVersion("1.0.2.0")]
[assembly: AssemblyFileVersion("1.0.2.0")]
[assembly: AssemblyInformationalVersion("1.0.2.0-beta")]
"""

PLIST = """\
<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd"{artifact}>
<plist version="1.0">
<dict>
	<key>CFBundleDisplayName</key>
	<string>Example</string>
	<key>CFBundleShortVersionString</key>
	<string>{short}</string>
	<key>CFBundleVersion</key>
	<string>{bundle}</string>
	<key>UIRequiresFullScreen</key>
	<true/>
</dict>
</plist>
"""

PLIST_NO_BUNDLE_VERSION = """\
<?xml version="1.0" encoding="UTF-8"?>
<plist version="1.0">
<dict>
	<key>CFBundleShortVersionString</key>
	<string>1.0.2</string>
</dict>
</plist>
"""


def make_manifest(code: str = "10", name: str = "1.0.2.4") -> str:
    return MANIFEST.format(code=code, name=name)


def make_plist(short: str = "1.0.2", bundle: str = "5", artifact: str = "") -> str:
    return PLIST.format(short=short, bundle=bundle, artifact=artifact)


def write_file(
    tmp_path: pathlib.Path, name: str, content: str, newline: str = "\n"
) -> pathlib.Path:
    path = tmp_path / name
    path.write_bytes(content.replace("\n", newline).encode("utf-8"))
    return path
