"""Tests for the tweakscript CLI."""

import subprocess
import sys

import pytest

COLLECTION_YAML = """
os: linux
scripting:
  language: shellscript
  startCode: "#!/usr/bin/env bash"
functions:
  - name: SetSetting
    parameters:
      - name: key
    code: gsettings set {{ $key }} off
    revertCode: gsettings reset {{ $key }}
actions:
  - category: Privacy
    children:
      - name: Disable telemetry
        recommend: standard
        call:
          function: SetSetting
          parameters:
            key: telemetry
      - name: Clear cache
        code: rm -rf ~/.cache/app
"""


def run_cli(*args, cwd):
    return subprocess.run(
        [sys.executable, "-m", "tweakscript.cli", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
    )


@pytest.fixture
def collection_file(tmp_path):
    path = tmp_path / "linux.yaml"
    path.write_text(COLLECTION_YAML)
    return path


class TestCLI:
    def test_version(self, tmp_path):
        result = run_cli("--version", cwd=tmp_path)
        assert result.returncode == 0
        assert "tweakscript" in result.stdout

    def test_compile_all_scripts(self, tmp_path, collection_file):
        result = run_cli("compile", str(collection_file), cwd=tmp_path)
        assert result.returncode == 0, result.stderr
        assert result.stdout.startswith("#!/usr/bin/env bash")
        assert "gsettings set telemetry off" in result.stdout
        assert "rm -rf ~/.cache/app" in result.stdout

    def test_compile_selected_script(self, tmp_path, collection_file):
        result = run_cli(
            "compile", str(collection_file), "-s", "Clear cache", cwd=tmp_path
        )
        assert result.returncode == 0, result.stderr
        assert "echo '--- Clear cache'" in result.stdout
        assert "gsettings" not in result.stdout

    def test_compile_by_level(self, tmp_path, collection_file):
        result = run_cli(
            "compile", str(collection_file), "--level", "standard", cwd=tmp_path
        )
        assert result.returncode == 0, result.stderr
        assert "gsettings set telemetry off" in result.stdout
        assert "rm -rf" not in result.stdout

    def test_compile_revert_skips_irreversible_scripts(self, tmp_path, collection_file):
        output = tmp_path / "out" / "undo.sh"
        result = run_cli(
            "compile", str(collection_file), "--revert", "-o", str(output), cwd=tmp_path
        )
        assert result.returncode == 0, result.stderr
        code = output.read_text()
        assert "gsettings reset telemetry" in code
        assert "Disable telemetry (revert)" in code
        assert "rm -rf" not in code

    def test_compile_unknown_script_fails(self, tmp_path, collection_file):
        result = run_cli("compile", str(collection_file), "-s", "Nope", cwd=tmp_path)
        assert result.returncode != 0

    def test_compile_same_script_twice_fails(self, tmp_path, collection_file):
        result = run_cli(
            "compile",
            str(collection_file),
            "-s",
            "Clear cache",
            "-s",
            "Clear cache",
            cwd=tmp_path,
        )
        assert result.returncode == 1
        assert "more than once" in result.stderr

    def test_compile_invalid_collection_fails(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text(
            "scripting:\n  language: shellscript\n"
            "actions:\n  - category: empty\n    children: []\n"
        )
        result = run_cli("compile", str(path), cwd=tmp_path)
        assert result.returncode == 1
        assert "category has no children" in result.stderr

    def test_list(self, tmp_path, collection_file):
        result = run_cli("list", str(collection_file), cwd=tmp_path)
        assert result.returncode == 0, result.stderr
        assert "Disable telemetry" in result.stdout
        assert "Clear cache" in result.stdout
