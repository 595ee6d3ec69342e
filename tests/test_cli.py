import io
import os
import re
import threading
import time

import psutil
import pytest

from proclist.cli import (
    Options,
    ProcessFilter,
    UsageError,
    display_name,
    list_processes,
    list_threads,
    main,
    parse_args,
    usage,
)

SPAN = re.compile(r"^\d+:\d\d:\d\d\.\d{3}$")
MISSING_PID = 4294967294


def own_name():
    return display_name(os.getpid(), psutil.Process().name())


def test_parse_args_defaults():
    options, process_filter = parse_args([])
    assert options == Options()
    assert process_filter == ProcessFilter()


def test_parse_args_flags():
    options, _ = parse_args(["-d", "-m", "-e"])
    assert (options.show_threads, options.show_memory, options.exact_match) == (True, True, True)
    assert options.show_help is False


def test_parse_args_pid():
    _, process_filter = parse_args(["1234"])
    assert process_filter == ProcessFilter(pid=1234)


def test_parse_args_pid_with_plus_sign():
    _, process_filter = parse_args(["+42"])
    assert process_filter.pid == 42


@pytest.mark.parametrize("arg", ["notepad", "12abc", "99999999999"])
def test_parse_args_name(arg):
    _, process_filter = parse_args([arg])
    assert process_filter == ProcessFilter(name=arg)


def test_parse_args_help_stops_parsing():
    options, _ = parse_args(["-h", "-x", "a", "b"])
    assert options.show_help is True


def test_parse_args_invalid_flag():
    with pytest.raises(UsageError) as info:
        parse_args(["-x"])
    assert str(info.value) == "Invalid argument: -x"
    assert info.value.show_usage is True


def test_parse_args_two_targets():
    with pytest.raises(UsageError) as info:
        parse_args(["explorer", "42"])
    assert str(info.value) == "Only one process name or PID can be specified."
    assert info.value.show_usage is False


def test_filter_without_criteria_matches_everything():
    assert ProcessFilter().matches("anything", 7, exact_match=False) is True


def test_filter_by_pid():
    process_filter = ProcessFilter(pid=10)
    assert process_filter.matches("x", 10, False) is True
    assert process_filter.matches("x", 11, False) is False


def test_filter_prefix_is_case_insensitive():
    process_filter = ProcessFilter(name="NOTE")
    assert process_filter.matches("notepad", 1, False) is True
    assert process_filter.matches("not", 1, False) is False
    assert process_filter.matches("explorer", 1, False) is False


def test_filter_exact_name():
    process_filter = ProcessFilter(name="Notepad")
    assert process_filter.matches("NOTEPAD", 1, True) is True
    assert process_filter.matches("notepad2", 1, True) is False


def test_not_found_messages():
    assert ProcessFilter(pid=5).not_found_message(False) == "Process with PID 5 was not found."
    assert (
        ProcessFilter(name="foo").not_found_message(True)
        == "Process with exact name 'foo' was not found."
    )
    assert (
        ProcessFilter(name="foo").not_found_message(False)
        == "Process name starting with 'foo' was not found."
    )
    assert ProcessFilter().not_found_message(False) == "No processes found, this is an error."


def test_usage_names_the_program():
    text = usage("plist")
    assert text.splitlines()[0] == "Usage: plist [-h] [-d] [-m] [-e] [name|PID]"
    assert "    Faults      Page Faults" in text.splitlines()


def test_display_name():
    assert display_name(0, "[System Process]") == "Idle"
    assert display_name(4, "svchost.exe") == "svchost"
    assert display_name(4, "bash") == "bash"


def test_list_processes_own_pid():
    out = io.StringIO()
    assert list_processes(Options(), ProcessFilter(pid=os.getpid()), out) is True
    lines = out.getvalue().splitlines()
    assert len(lines) == 2
    assert lines[0].split()[:6] == ["Name", "PID", "PPID", "Pri", "Thd", "Hnd"]
    assert lines[1].startswith(own_name())
    assert f" {os.getpid()} " in lines[1]


def test_list_processes_memory_mode():
    out = io.StringIO()
    assert list_processes(Options(show_memory=True), ProcessFilter(pid=os.getpid()), out)
    lines = out.getvalue().splitlines()
    assert lines[0].split()[:4] == ["Name", "PID", "WS", "Priv"]
    assert f" {os.getpid()} " in lines[1]


def test_list_processes_thread_mode():
    out = io.StringIO()
    assert list_processes(Options(show_threads=True), ProcessFilter(pid=os.getpid()), out)
    lines = out.getvalue().splitlines()
    assert lines[0] == f"{own_name()} {os.getpid()}:"
    assert lines[1].split()[:2] == ["TID", "Pri"]


def test_list_processes_missing_pid():
    out = io.StringIO()
    assert list_processes(Options(), ProcessFilter(pid=MISSING_PID), out) is True
    assert out.getvalue() == f"Process with PID {MISSING_PID} was not found.\n"


def test_list_processes_missing_exact_name():
    out = io.StringIO()
    name = "zz-no-such-process-name"
    assert list_processes(Options(exact_match=True), ProcessFilter(name=name), out) is True
    assert out.getvalue() == f"Process with exact name '{name}' was not found.\n"


def test_list_threads_of_own_process():
    out = io.StringIO()
    assert list_threads(os.getpid(), time.time(), out) is True
    lines = out.getvalue().splitlines()
    assert lines[0].split() == ["TID", "Pri", "User", "Time", "Kernel", "Time", "Elapsed", "Time"]
    rows = [line.split() for line in lines[1:]]
    assert str(threading.get_native_id()) in [row[0] for row in rows]
    for row in rows:
        assert len(row) == 5
        assert all(SPAN.match(cell) for cell in row[2:])


def test_list_threads_of_missing_process():
    out = io.StringIO()
    assert list_threads(MISSING_PID, time.time(), out) is False
    assert out.getvalue().startswith("[ERR:")


def test_main_help(capsys):
    assert main(["-h"]) == 0
    output = capsys.readouterr().out
    assert "    -e          Match process name exactly." in output


def test_main_invalid_argument(capsys):
    assert main(["-x"]) == 1
    output = capsys.readouterr().out
    assert output.startswith("Invalid argument: -x\n")
    assert "Usage:" in output


def test_main_two_targets(capsys):
    assert main(["1", "2"]) == 1
    assert capsys.readouterr().out == "Only one process name or PID can be specified.\n"


def test_main_lists_own_process(capsys):
    assert main([str(os.getpid())]) == 0
    assert f" {os.getpid()} " in capsys.readouterr().out