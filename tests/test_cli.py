from photog.cli import main

from conftest import make_jpeg, write_config


def test_build_from_command_line(site, destination, runner):
    assert main([str(site), str(destination)]) == 0
    assert (destination / "index.html").is_file()
    assert (destination / "holiday" / "index.html").is_file()
    assert len(runner.named("photog-scale")) == 10


def test_destination_from_config(source, tmp_path, runner):
    write_config(source, "destination = ../site\n")
    make_jpeg(source / "a.jpg")
    assert main([str(source)]) == 0
    assert (tmp_path / "site" / "index.html").is_file()


def test_missing_destination(source, caplog):
    assert main([str(source)]) == 1
    assert "Destination not specified" in caplog.text


def test_missing_source(tmp_path, caplog):
    assert main([str(tmp_path / "nope"), str(tmp_path / "out")]) == 1
    assert "does not exist" in caplog.text


def test_keep_going_exit_status(site, destination, runner):
    runner.fail_on.add("photog-thumbnail")
    assert main([str(site), str(destination), "--keep-going", "-q"]) == 1
    assert (destination / "index.html").is_file()


def test_failing_command_aborts(site, destination, runner, caplog):
    runner.fail_on.add("photog-thumbnail")
    assert main([str(site), str(destination)]) == 1
    assert "Command failed" in caplog.text
