"""Tests for the command line front end."""

from __future__ import annotations

import json

import pytest

from conftest import ORACLE_DUMP, posix_only
from jfind import cli, report
from jfind.report import PostError


@pytest.fixture(autouse=True)
def fixed_host(monkeypatch):
    monkeypatch.setattr(report, "get_computer_name", lambda: "test-host")
    monkeypatch.setattr(report, "get_user_name", lambda: "tester")


@posix_only
def test_text_output(tmp_path, make_launcher, capsys):
    java = make_launcher("jdk/bin/java")

    assert cli.main(["--path", str(tmp_path)]) == 0

    assert capsys.readouterr().out == f"Java executable: {java}\n\n"


@posix_only
def test_json_output_with_evaluation(tmp_path, make_launcher, capsys):
    make_launcher("oracle/bin/java", ORACLE_DUMP)
    make_launcher("temurin/bin/java")

    assert cli.main(["--path", str(tmp_path), "--eval", "--json"]) == 0

    document = json.loads(capsys.readouterr().out)
    assert document["meta"]["computer_name"] == "test-host"
    assert document["meta"]["user_name"] == "tester"
    assert document["meta"]["count_result"] == 2
    assert document["meta"]["scanned_dirs"] == 5
    assert document["meta"]["has_oracle_jdk"] is True
    assert document["meta"]["scan_duration"].startswith("PT")
    assert [entry["java.vendor"] for entry in document["result"]] == ["Oracle Corporation", "Eclipse Adoptium"]


@posix_only
def test_depth_flag(tmp_path, make_launcher, capsys):
    make_launcher("jdk/bin/java")

    assert cli.main(["--path", str(tmp_path), "--depth", "2", "--json"]) == 0

    assert json.loads(capsys.readouterr().out)["result"] == []


def test_relative_path_is_resolved(tmp_path, monkeypatch, capsys):
    (tmp_path / "jdk").mkdir()
    monkeypatch.chdir(tmp_path)
    seen = []

    class RecordingFinder(cli.JavaFinder):
        def find(self):
            seen.append(self.start_path)
            return super().find()

    monkeypatch.setattr(cli, "JavaFinder", RecordingFinder)
    assert cli.main(["--path", "jdk"]) == 0
    assert seen == [str(tmp_path / "jdk")]


def test_missing_path_exits_with_error(tmp_path, caplog):
    assert cli.main(["--path", str(tmp_path / "missing")]) == 1
    assert any("Error during search" in record.getMessage() for record in caplog.records)


def _capture_posts(monkeypatch):
    posts = []
    monkeypatch.setattr(cli, "post_json", lambda payload, url: posts.append((json.loads(payload), url)))
    return posts


def test_post_to_explicit_url(tmp_path, monkeypatch, capsys):
    posts = _capture_posts(monkeypatch)

    assert cli.main(["--path", str(tmp_path), "--post", "http://collector.example/inventory"]) == 0

    assert capsys.readouterr().out == ""
    assert len(posts) == 1
    payload, url = posts[0]
    assert url == "http://collector.example/inventory"
    assert payload["meta"]["count_result"] == 0


def test_post_url_from_environment(tmp_path, monkeypatch):
    posts = _capture_posts(monkeypatch)
    monkeypatch.setenv(cli.POST_URL_ENV, "http://env.example/jfind")

    assert cli.main(["--path", str(tmp_path), "--post"]) == 0
    assert posts[0][1] == "http://env.example/jfind"


def test_post_default_url(tmp_path, monkeypatch):
    posts = _capture_posts(monkeypatch)
    monkeypatch.delenv(cli.POST_URL_ENV, raising=False)

    assert cli.main(["--path", str(tmp_path), "--post"]) == 0
    assert posts[0][1] == report.DEFAULT_POST_URL


def test_post_failure_exits_with_error(tmp_path, monkeypatch, caplog):
    def failing(payload, url):
        raise PostError("server returned 503 Service Unavailable")

    monkeypatch.setattr(cli, "post_json", failing)

    assert cli.main(["--path", str(tmp_path), "--post", "http://collector.example/jfind"]) == 1
    assert any("server returned 503" in record.getMessage() for record in caplog.records)
