# fynetools

Python helpers for preparing desktop and mobile application builds. The
package uses only the standard library.

## Installation

```
pip install fynetools
```

To run the test suite:

```
pip install "fynetools[test]"
pytest
```

## Modules

- `fynetools.shell` prepares commands that run with the environment of the
  user's shell. `command_in_shell(cmd, *args)` returns a prepared command whose
  `run()` and `output()` methods start it; on macOS the command is first
  resolved with `which` inside the login shell. `quote_args` and `quote_string`
  wrap arguments containing spaces in double quotes; `get_unix_shell` reads
  `$SHELL` (default `/bin/sh`) and `get_darwin_shell` asks `dscl` (default
  `zsh`).
- `fynetools.fileutil` has small file helpers: `exists`, `copy_file` (new
  targets get mode 0644), `copy_exe_file` (mode 0755), `ensure_sub_dir`,
  `ensure_abs_path` and `make_path_relative_to`.
- `fynetools.mobileutil` recognises mobile targets (`is_android`, `is_ios`,
  `is_mobile`) and locates the Android SDK: `require_android_sdk` raises
  `RuntimeError` when `ANDROID_HOME` is unset, and `android_build_tools_path`
  finds the `build-tools` directory, descending into a version directory when
  there is one.
- `fynetools.stringsflag` splits flag values into fields that may be wrapped in
  single or double quotes (`split_quoted_fields`, which raises `ValueError` on
  an unterminated quote) and holds them in `StringsFlag`.
- `fynetools.manifest` reads the native library name of the native activity
  from an `AndroidManifest.xml` (`manifest_lib_name`), raising `ValueError`
  when the manifest is malformed or does not declare one.
- `fynetools.ndk` describes the Android NDK toolchains (`NDK`, `toolchain`,
  `NdkToolchain` with `clang_prefix` and `path`), maps Go architectures to
  clang and NDK host names (`arch_clang`, `arch_ndk`), merges `key=value`
  environments (`environ`), and finds the NDK and Xcode tools (`ndk_root`,
  `env_clang`, `xcode_available`).
- `fynetools.buildenv` sets up a mobile cross-compilation environment.
  `BuildContext` locates the `gomobile` directory under `GOPATH`, creates a
  work directory and fills `android_env` and `darwin_env` with the compiler
  settings for each architecture. Used as a context manager it initialises on
  entry and removes the work directory on exit. With `build_n=True` it is a dry
  run that only prints the commands `mkdir`, `remove_all` and `run_cmd` would
  execute; `build_x=True` prints them and runs them. The module also has
  `go_env`, `parse_go_version`, `reset_read_only_flag_all` and
  `MobileCommand`, which holds a sub-command's options and prints its usage.

## Example

```python
from fynetools.mobileutil import is_mobile
from fynetools.stringsflag import split_quoted_fields
from fynetools.shell import quote_args
from fynetools.buildenv import BuildContext

is_mobile("android/arm64")          # True
split_quoted_fields("-a 'b c' d")   # ['-a', 'b c', 'd']
quote_args("a", "b c")              # ['a', '"b c"']

ctx = BuildContext(build_n=True)
ctx.run_cmd(["go", "build"], env=["GOOS=android"])  # prints: GOOS=android go build
```

## What it does not do

The package is a library only: it installs no command-line program. It
prepares build environments and runs individual commands, but it does not
build, package, sign or release applications itself, does not write APK
archives, and ships no project templates.