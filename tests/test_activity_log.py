import os
import re
from datetime import datetime

from activity_log import SEPARATOR, ActivityLog, LogSettings


def read_today(logs_dir):
    path = os.path.join(logs_dir, f"log-{datetime.now():%Y-%m-%d}.log")
    with open(path, encoding="utf-8") as f:
        return f.read()


def test_lines_are_timestamped_and_leveled(tmp_path):
    log = ActivityLog(LogSettings(console_enabled=False, logs_dir=str(tmp_path)), name="test.lines")

    log.info("hello", {"answer": 42})
    log.error("boom", ValueError("bad value"))

    content = read_today(tmp_path)
    assert re.search(r"^\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z\] \[INFO\] hello$", content, re.M)
    assert '"answer": 42' in content
    assert "[ERROR] boom" in content
    assert '"message": "bad value"' in content


def test_tool_call_is_framed(tmp_path):
    log = ActivityLog(LogSettings(console_enabled=False, logs_dir=str(tmp_path)), name="test.tool")

    log.tool_call("get_projects", {"method": "tools/call"}, {"content": []})

    content = read_today(tmp_path)
    assert f"{SEPARATOR}\n[" in content
    assert "[TOOL] TOOL CALL: get_projects" in content
    assert '"request": {' in content
    assert content.rstrip().endswith(SEPARATOR)


def test_console_echo_follows_settings(tmp_path, capsys):
    settings = LogSettings(console_enabled=True, logs_dir=str(tmp_path))
    log = ActivityLog(settings, name="test.console")

    log.info("visible")
    log.error("to stderr")
    captured = capsys.readouterr()
    assert "visible" in captured.out
    assert "to stderr" in captured.err
    assert "to stderr" not in captured.out

    log.set_console_enabled(False)
    log.info("hidden")
    captured = capsys.readouterr()
    assert "hidden" not in captured.out
    assert settings.console_enabled is False
    assert log.console_enabled is False

    # the file keeps everything
    content = read_today(tmp_path)
    assert "hidden" in content
    assert "Console logs DISABLED" in content


def test_instances_keep_their_own_directory_and_toggle(tmp_path, capsys):
    first_dir = tmp_path / "first"
    second_dir = tmp_path / "second"
    first = ActivityLog(LogSettings(console_enabled=True, logs_dir=str(first_dir)))
    second = ActivityLog(LogSettings(console_enabled=False, logs_dir=str(second_dir)))

    first.info("from first")
    second.info("from second")

    assert "from first" in read_today(first_dir)
    assert "from second" not in read_today(first_dir)
    assert "from second" in read_today(second_dir)
    assert "from first" not in read_today(second_dir)

    out = capsys.readouterr().out
    assert "from first" in out
    assert "from second" not in out
