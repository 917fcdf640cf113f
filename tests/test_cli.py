import logging
import pathlib

import helpers
import pytest

import verbump
from verbump import cli


@pytest.mark.parametrize("tool", [cli.ANDROID_MANIFEST, cli.ASSEMBLY_INFO, cli.PLIST])
def test_no_arguments_prints_usage(capsys: pytest.CaptureFixture, tool: cli.Tool) -> None:
    assert cli.run([], tool) == 0
    out = capsys.readouterr().out
    assert out.startswith(f"Usage: {tool.prog} -filename=")
    assert "-increment-build-number" in out


def test_missing_filename_prints_usage(capsys: pytest.CaptureFixture) -> None:
    assert cli.run(["-increment-build-number"], cli.PLIST) == 0
    assert capsys.readouterr().out.startswith("Usage: plist-util")


def test_version_flag(capsys: pytest.CaptureFixture) -> None:
    assert cli.run(["-VERSION"], cli.PLIST) == 0
    assert capsys.readouterr().out.strip() == f"plist-util {verbump.__version__}"


def test_manifest_revision_bump(
    tmp_path: pathlib.Path, capsys: pytest.CaptureFixture
) -> None:
    path = helpers.write_file(tmp_path, "AndroidManifest.xml", helpers.make_manifest())
    assert cli.run([f"-filename={path}"], cli.ANDROID_MANIFEST) == 0

    text = path.read_text(encoding="utf-8")
    assert 'android:versionCode="11"' in text
    assert 'android:versionName="1.0.2.5"' in text

    out = capsys.readouterr().out
    assert "android:versionName: '1.0.2.4' -> '1.0.2.5'" in out
    assert f"Wrote {path}" in out


def test_tokens_are_case_insensitive(tmp_path: pathlib.Path) -> None:
    path = helpers.write_file(tmp_path, "AndroidManifest.xml", helpers.make_manifest())
    argv = [f"-FileName={path}", "-INCREMENT-BUILD-NUMBER"]
    assert cli.run(argv, cli.ANDROID_MANIFEST) == 0

    text = path.read_text(encoding="utf-8")
    assert 'android:versionCode="11"' in text
    assert 'android:versionName="1.0.3.0"' in text


@pytest.mark.parametrize("flag", ["-increment-build-number", "-reset-revision-number"])
def test_plist_build_bump(tmp_path: pathlib.Path, flag: str) -> None:
    path = helpers.write_file(tmp_path, "Info.plist", helpers.make_plist())
    assert cli.run([f"-filename={path}", flag], cli.PLIST) == 0

    data = path.read_bytes()
    assert b"<string>1.0.3</string>" in data
    assert b"<string>0</string>" in data


def test_assembly_info_revision_bump(tmp_path: pathlib.Path) -> None:
    path = helpers.write_file(tmp_path, "AssemblyInfo.cs", helpers.ASSEMBLY_INFO)
    assert cli.run([f"-filename={path}", "-unknown-flag"], cli.ASSEMBLY_INFO) == 0
    assert '[assembly: AssemblyVersion("1.0.2.1")]' in path.read_text(encoding="utf-8")


def test_get_mode() -> None:
    args, unknown = cli.parse_args(["-filename=x", "-Reset-Revision-Number", "extra"], cli.PLIST)
    assert args.filename == "x"
    assert cli.get_mode(args) == verbump.IncrementMode.BUILD
    assert unknown == ["extra"]

    args, _ = cli.parse_args(["-filename=x"], cli.PLIST)
    assert cli.get_mode(args) == verbump.IncrementMode.REVISION


@pytest.mark.parametrize("filename", ["", "   ", "does-not-exist.plist"])
def test_argument_errors(
    tmp_path: pathlib.Path,
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
    filename: str,
) -> None:
    monkeypatch.chdir(tmp_path)
    with caplog.at_level(logging.ERROR, logger="verbump"):
        assert cli.run([f"-filename={filename}"], cli.PLIST) == 1
    assert "Error:" in caplog.text


def test_build_config_raises_argument_error(tmp_path: pathlib.Path) -> None:
    with pytest.raises(verbump.ArgumentError, match="must not be empty"):
        verbump.configurator.build_config("  ", verbump.IncrementMode.REVISION)
    with pytest.raises(verbump.ArgumentError, match="Couldn't locate file"):
        verbump.configurator.build_config(
            str(tmp_path / "missing.cs"), verbump.IncrementMode.REVISION
        )

    path = helpers.write_file(tmp_path, "AssemblyInfo.cs", helpers.ASSEMBLY_INFO)
    config = verbump.configurator.build_config(str(path), verbump.IncrementMode.BUILD)
    assert config.path == path
    assert config.mode == verbump.IncrementMode.BUILD


def test_structural_error_returns_nonzero(
    tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = helpers.write_file(tmp_path, "Info.plist", helpers.PLIST_NO_BUNDLE_VERSION)
    before = path.read_bytes()
    with caplog.at_level(logging.ERROR, logger="verbump"):
        assert cli.run([f"-filename={path}"], cli.PLIST) == 1
    assert "Cannot find CFBundleVersion" in caplog.text
    assert path.read_bytes() == before


def test_main_entry_point(tmp_path: pathlib.Path) -> None:
    path = helpers.write_file(tmp_path, "Info.plist", helpers.make_plist())
    assert cli.main_plist([f"-filename={path}"]) == 0
    assert b"<string>6</string>" in path.read_bytes()


def test_filename_is_not_stripped(tmp_path: pathlib.Path) -> None:
    path = helpers.write_file(tmp_path, "AssemblyInfo.cs", helpers.ASSEMBLY_INFO)
    with pytest.raises(verbump.ArgumentError, match="Couldn't locate file"):
        verbump.configurator.build_config(f" {path} ", verbump.IncrementMode.REVISION)


def test_non_utf8_assembly_info(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "AssemblyInfo.cs"
    path.write_bytes(
        '[assembly: AssemblyCopyright("Copyright © 2015")]\n'
        '[assembly: AssemblyVersion("1.0.2.0")]\n'.encode("cp1252")
    )
    assert cli.run([f"-filename={path}"], cli.ASSEMBLY_INFO) == 0
    assert b'AssemblyVersion("1.0.2.1")' in path.read_bytes()
    assert b"\xa9 2015" in path.read_bytes()


@pytest.mark.parametrize(
    "argv",
    [
        ["-filename"],
        ["-filename", "AssemblyInfo.cs"],
        ["-increment-build-number=x"],
    ],
)
def test_inexact_tokens_print_usage(
    tmp_path: pathlib.Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture,
    argv: list[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    helpers.write_file(tmp_path, "AssemblyInfo.cs", helpers.ASSEMBLY_INFO)
    assert cli.run(argv, cli.ASSEMBLY_INFO) == 0
    assert capsys.readouterr().out.startswith("Usage: assemblyinfo-util")
    assert (tmp_path / "AssemblyInfo.cs").read_text(encoding="utf-8") == helpers.ASSEMBLY_INFO


def test_inexact_flag_is_ignored(tmp_path: pathlib.Path) -> None:
    path = helpers.write_file(tmp_path, "AssemblyInfo.cs", helpers.ASSEMBLY_INFO)
    argv = [f"-filename={path}", "-increment-build-number=x"]
    assert cli.run(argv, cli.ASSEMBLY_INFO) == 0
    assert '[assembly: AssemblyVersion("1.0.2.1")]' in path.read_text(encoding="utf-8")
