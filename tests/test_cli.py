import json
import os
import tempfile

import pytest
from click.testing import CliRunner

from sbundle.cli import main
from sbundle.core.bundle import Bundle


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_tempdir(tmp_path, monkeypatch):
    staging = tmp_path / "staging"
    staging.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(staging))
    return staging


@pytest.fixture
def descriptor(runner, tmp_path):
    path = tmp_path / "bundle.json"
    result = runner.invoke(main, [
        "create", "-p", "ci", "-s", "setup", "-s", "post",
        "-B", "/opt/data", "-B", "/srv", "--force", "-o", str(path),
    ])
    assert result.exit_code == 0, result.output
    return path


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "sbundle version" in result.output


def test_create_writes_descriptor(descriptor, isolated_tempdir):
    bundle = Bundle.load(descriptor)
    assert os.path.dirname(bundle.path) == str(isolated_tempdir)
    assert os.path.basename(bundle.path).startswith("ci-")
    assert os.path.isdir(bundle.rootfs)
    assert bundle.sections == ["setup", "post"]
    assert bundle.bind_paths == ["/opt/data", "/srv"]
    assert bundle.force is True
    assert bundle.update is False


def test_create_default_descriptor_location(runner, isolated_tempdir):
    result = runner.invoke(main, ["create"])
    assert result.exit_code == 0, result.output
    (staging_root,) = list(isolated_tempdir.iterdir())
    bundle = Bundle.load(staging_root / "bundle.json")
    assert bundle.sections == ["all"]


def test_create_with_config_and_recipe(runner, tmp_path):
    config = tmp_path / "build.yaml"
    config.write_text(
        "prefix: fromcfg\nsections: [none, all]\nbind_paths: [/cfg]\nupdate: true\n",
        encoding="utf-8",
    )
    recipe = tmp_path / "recipe.yaml"
    recipe.write_text("header:\n  bootstrap: docker\n  from: alpine\n", encoding="utf-8")
    out = tmp_path / "out.json"

    result = runner.invoke(main, [
        "create", "--config", str(config), "--recipe", str(recipe),
        "-B", "/cli", "--no-update", "-o", str(out),
    ])
    assert result.exit_code == 0, result.output

    bundle = Bundle.load(out)
    assert os.path.basename(bundle.path).startswith("fromcfg-")
    assert bundle.sections == ["none", "all"]
    assert bundle.bind_paths == ["/cfg", "/cli"]
    assert bundle.update is False
    assert bundle.recipe == {"header": {"bootstrap": "docker", "from": "alpine"}}


def test_create_fails_without_temp_root(runner, tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path / "missing"))
    result = runner.invoke(main, ["create", "-o", str(tmp_path / "b.json")])
    assert result.exit_code == 1
    assert not (tmp_path / "b.json").exists()


def test_should_run(runner, descriptor):
    assert runner.invoke(main, ["should-run", str(descriptor), "post"]).exit_code == 0
    assert runner.invoke(main, ["should-run", str(descriptor), "test", "-q"]).exit_code == 1


def test_should_run_is_order_sensitive(runner, tmp_path):
    for sections, expected in ((["none", "all"], 1), (["all", "none"], 0)):
        path = Bundle(path=str(tmp_path), sections=sections).save(tmp_path / "b.json")
        result = runner.invoke(main, ["should-run", str(path), "post", "-q"])
        assert result.exit_code == expected


def test_resolve(runner, descriptor):
    bundle = Bundle.load(descriptor)
    result = runner.invoke(main, ["resolve", str(descriptor), "rootfs"])
    assert result.exit_code == 0
    assert result.output.strip() == bundle.rootfs


def test_resolve_unknown_label(runner, descriptor):
    result = runner.invoke(main, ["resolve", str(descriptor), "data"])
    assert result.exit_code == 1
    assert "not registered" in result.output


@pytest.mark.parametrize("fmt", ["text", "yaml"])
def test_info(runner, descriptor, fmt):
    result = runner.invoke(main, ["info", str(descriptor), "--format", fmt])
    assert result.exit_code == 0, result.output
    assert "/opt/data" in result.output


def test_info_json(runner, descriptor):
    result = runner.invoke(main, ["info", str(descriptor), "--format", "json"])
    assert result.exit_code == 0
    assert json.loads(result.output)["sections"] == ["setup", "post"]


def test_info_missing_descriptor(runner, tmp_path):
    result = runner.invoke(main, ["info", str(tmp_path / "nope.json")])
    assert result.exit_code == 1


def test_validate(runner, descriptor):
    assert runner.invoke(main, ["validate", str(descriptor)]).exit_code == 0


def test_validate_strict_fails_on_warnings(runner, tmp_path):
    path = Bundle(path=str(tmp_path / "gone"), fs_objects={"rootfs": "fs"}).save(tmp_path / "b.json")
    assert runner.invoke(main, ["validate", str(path)]).exit_code == 0
    assert runner.invoke(main, ["validate", "--strict", str(path)]).exit_code == 1


def test_doctor(runner):
    result = runner.invoke(main, ["doctor"])
    assert "System Diagnostics" in result.output


def test_create_with_single_string_config(runner, tmp_path):
    config = tmp_path / "build.yaml"
    config.write_text("sections: post\nbind_paths: /opt\n", encoding="utf-8")
    out = tmp_path / "out.json"
    result = runner.invoke(main, ["create", "--config", str(config), "-o", str(out)])
    assert result.exit_code == 0, result.output

    bundle = Bundle.load(out)
    assert bundle.sections == ["post"]
    assert bundle.bind_paths == ["/opt"]
    assert bundle.run_section("post") is True


def test_create_rejects_string_flag_in_config(runner, tmp_path):
    config = tmp_path / "build.yaml"
    config.write_text('force: "false"\n', encoding="utf-8")
    result = runner.invoke(main, ["create", "--config", str(config)])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_create_rejects_unencodable_recipe(runner, tmp_path, isolated_tempdir):
    recipe = tmp_path / "recipe.yaml"
    recipe.write_text("built: 2024-01-01\n", encoding="utf-8")
    result = runner.invoke(main, ["create", "--recipe", str(recipe)])
    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Invalid recipe" in result.output
    assert list(isolated_tempdir.iterdir()) == []
