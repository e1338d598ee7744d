"""Shared fixtures: scratch directories and a fake external tool."""

import os
import shutil
import stat
from pathlib import Path

import pytest

from models.codec_options import CustomCodecOptions
from models.image_bundle import ImageBundle
from utils.test_images import generate_noise


class FakeRunner:
    """Stands in for run_command: records calls and copies input to output."""

    def __init__(self, succeed=True, produce_output=True, reported_time=None, output_bytes=None):
        self.succeed = succeed
        self.produce_output = produce_output
        self.reported_time = reported_time
        self.output_bytes = output_bytes
        self.calls = []
        self.inputs = []

    def __call__(self, command, args, quiet):
        self.calls.append((command, list(args), quiet))
        input_path, output_path = args[-2], args[-1]
        self.inputs.append(Path(input_path).read_bytes())
        if not self.succeed:
            return False
        if self.output_bytes is not None:
            Path(output_path).write_bytes(self.output_bytes)
        elif self.produce_output:
            shutil.copyfile(input_path, output_path)
        if self.reported_time is not None:
            Path(Path(output_path).stem + ".time").write_text(self.reported_time)
        return True


@pytest.fixture
def scratch_dir(tmp_path, monkeypatch):
    """Directory for temporary files; the working directory (for .time files) is separate."""
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return scratch


@pytest.fixture
def options(scratch_dir):
    return CustomCodecOptions(temp_dir=str(scratch_dir))


@pytest.fixture
def image():
    return ImageBundle.from_uint8(generate_noise(32), intensity_target=1000.0)


@pytest.fixture
def copy_tool(tmp_path):
    """Executable that copies its first argument to its second."""
    if os.name != "posix" or not os.path.exists("/bin/sh"):
        pytest.skip("needs a POSIX shell")
    script = tmp_path / "copy_tool.sh"
    script.write_text('#!/bin/sh\ncp "$1" "$2"\n')
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    return str(script)
