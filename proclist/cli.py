"""Command line tool that lists running processes, their memory use and threads."""

from __future__ import annotations

import os
import sys
import time
from dataclasses import dataclass

import psutil

from proclist.units import SizeWithUnit, TimeSpan, remove_extension

MAX_PID = 0xFFFFFFFF

_WHITESPACE = " \t\n\v\f\r"


@dataclass(frozen=True)
class Options:
    """What the listing shows."""

    show_threads: bool = False
    show_memory: bool = False
    exact_match: bool = False
    show_help: bool = False


@dataclass(frozen=True)
class ProcessFilter:
    """Restricts the listing to one PID or to processes with a given name."""

    pid: int | None = None
    name: str = ""

    def matches(self, process_name, pid, exact_match):
        """Tell whether a process passes the filter; names compare without regard to case."""
        if self.pid is not None and pid != self.pid:
            return False
        if self.name:
            wanted = self.name.lower()
            actual = process_name.lower()
            if exact_match:
                return actual == wanted
            return actual.startswith(wanted)
        return True

    def not_found_message(self, exact_match):
        """The message printed when no process passed the filter."""
        if self.pid is not None:
            return f"Process with PID {self.pid} was not found."
        if self.name:
            kind = "with exact name" if exact_match else "name starting with"
            return f"Process {kind} '{self.name}' was not found."
        return "No processes found, this is an error."


class UsageError(Exception):
    """Raised for command line arguments that cannot be used."""

    def __init__(self, message, show_usage=False):
        super().__init__(message)
        self.show_usage = show_usage


def _parse_pid(text):
    """Read a decimal PID the way strtoul would, or return None if it is not one."""
    digits = text.lstrip(_WHITESPACE)
    if digits.startswith("+"):
        digits = digits[1:]
    if not digits or not (digits.isascii() and digits.isdigit()):
        return None
    value = int(digits)
    return value if value <= MAX_PID else None


def parse_args(argv):
    """Parse the arguments that follow the program name into options and a filter."""
    show_threads = show_memory = exact_match = False
    pid = None
    name = ""

    for arg in argv:
        if arg == "-h":
            return (
                Options(show_threads, show_memory, exact_match, show_help=True),
                ProcessFilter(pid, name),
            )
        if arg == "-d":
            show_threads = True
        elif arg == "-m":
            show_memory = True
        elif arg == "-e":
            exact_match = True
        elif arg.startswith("-"):
            raise UsageError(f"Invalid argument: {arg}", show_usage=True)
        else:
            if pid is not None or name:
                raise UsageError("Only one process name or PID can be specified.")
            value = _parse_pid(arg)
            if value is None:
                name = arg
            else:
                pid = value

    return Options(show_threads, show_memory, exact_match), ProcessFilter(pid, name)


def usage(app_name):
    """The help text."""
    lines = [
        f"Usage: {app_name} [-h] [-d] [-m] [-e] [name|PID]",
        "    -d          Show thread detail.",
        "    -m          Show memory detail.",
        "    -e          Match process name exactly.",
        "    name        Show information about processes that begin with the name specified.",
        "    PID         Show information about specified process.",
        "    -h          Show this help message and exit.",
        "",
        "Abbreviations:",
        "    PID         Process ID",
        "    PPID        Parent Process ID",
        "    Pri         Priority",
        "    Thd         Number of Threads",
        "    Hnd         Number of Handles",
        "    WS          Working Set",
        "    Priv        Private Virtual Memory",
        "    Priv Pk     Private Virtual Memory Peak",
        "    Faults      Page Faults",
        "    NonP        Non-Paged Pool",
        "    Page        Paged Pool",
    ]
    return "\n".join(lines) + "\n"


def display_name(pid, exe_name):
    """The name shown for a process: 'Idle' for PID 0, else the executable without '.exe'."""
    if pid == 0:
        return "Idle"
    return remove_extension(exe_name)


def _report_error(out, func_name, exc):
    code = getattr(exc, "errno", None) or 0
    message = str(exc) or "Something went wrong"
    out.write(f"[ERR:{code}] {func_name}: {message}\n")


def _query(call, default):
    try:
        return call()
    except (psutil.Error, OSError):
        return default


def _memory_field(memory, *names):
    if memory is None:
        return 0
    for name in names:
        value = getattr(memory, name, None)
        if value is not None:
            return value
    return 0


def _handle_count(proc):
    counter = getattr(proc, "num_handles", None) or getattr(proc, "num_fds", None)
    return _query(counter, 0) if counter else 0


def _memory_header():
    return (
        f"{'Name':<32} {'PID':>6} {'WS':>9} {'Priv':>9} {'Priv Pk':>9} "
        f"{'Faults':>9} {'NonP':>9} {'Page':>9}\n"
    )


def _summary_header():
    return (
        f"{'Name':<32} {'PID':>6} {'PPID':>6} {'Pri':>6} {'Thd':>6} {'Hnd':>6} "
        f"{'Priv':>9} {'CPU Time':>15} {'Elapsed Time':>15}  Image Path\n"
    )


def _memory_row(proc, name):
    memory = _query(proc.memory_info, None)

    def size(*fields):
        return SizeWithUnit.from_bytes(_memory_field(memory, *fields))

    faults = _memory_field(memory, "num_page_faults")
    return (
        f"{name:<32} {proc.pid:6d} {size('wset', 'rss')} {size('pagefile', 'vms')} "
        f"{size('peak_pagefile', 'vms')} {faults:9d} {size('nonpaged_pool')} "
        f"{size('paged_pool')}\n"
    )


def _summary_row(proc, name, current_time, out):
    ppid = _query(proc.ppid, 0)
    priority = _query(proc.nice, 0)
    threads = _query(proc.num_threads, 0)
    handles = _handle_count(proc)
    private = SizeWithUnit.from_bytes(
        _memory_field(_query(proc.memory_info, None), "pagefile", "vms")
    )
    path = _query(proc.exe, "") or ""

    cpu_times = _query(proc.cpu_times, None)
    cpu_time = (
        TimeSpan.from_seconds(cpu_times.user + cpu_times.system) if cpu_times else TimeSpan()
    )
    created = _query(proc.create_time, None)
    age = TimeSpan.from_seconds(current_time - created) if created is not None else TimeSpan()

    if proc.pid == 0:
        try:
            cpu_time = TimeSpan.from_seconds(psutil.cpu_times().idle)
            age = TimeSpan.from_seconds(current_time - psutil.boot_time())
        except (psutil.Error, OSError) as exc:
            _report_error(out, "cpu_times", exc)

    return (
        f"{name:<32} {proc.pid:6d} {ppid:6d} {priority:6d} {threads:6d} {handles:6d} "
        f"{private} {cpu_time} {age}  {path}\n"
    )


def list_processes(options, process_filter, out):
    """Write the process listing to out; return False if processes could not be read."""
    current_time = time.time()
    try:
        processes = list(psutil.process_iter())
    except (psutil.Error, OSError) as exc:
        _report_error(out, "process_iter", exc)
        return False

    first = True
    for proc in processes:
        try:
            exe_name = proc.name()
        except psutil.NoSuchProcess:
            continue
        except (psutil.Error, OSError):
            exe_name = ""

        name = display_name(proc.pid, exe_name)
        if not process_filter.matches(name, proc.pid, options.exact_match):
            continue

        if options.show_threads:
            if not first:
                out.write("\n")
            out.write(f"{name} {proc.pid}:\n")
            list_threads(proc.pid, current_time, out)
        else:
            if first:
                out.write(_memory_header() if options.show_memory else _summary_header())
            with proc.oneshot():
                if options.show_memory:
                    out.write(_memory_row(proc, name))
                else:
                    out.write(_summary_row(proc, name, current_time, out))

        first = False

    if first:
        out.write(process_filter.not_found_message(options.exact_match) + "\n")
    return True


def _thread_details(thread_id, current_time):
    """Priority and age of a thread where the system exposes it as its own task."""
    try:
        task = psutil.Process(thread_id)
        with task.oneshot():
            priority = task.nice()
            age = TimeSpan.from_seconds(current_time - task.create_time())
    except (psutil.Error, OSError, ValueError):
        return 0, TimeSpan()
    return priority, age


def list_threads(owner_pid, current_time, out):
    """Write the threads of one process to out; return False if they could not be read."""
    try:
        threads = psutil.Process(owner_pid).threads()
    except (psutil.Error, OSError, ValueError) as exc:
        _report_error(out, "threads", exc)
        return False

    out.write(f"{'TID':>5} {'Pri':>3} {'User Time':>15} {'Kernel Time':>15} {'Elapsed Time':>15}\n")
    for thread in threads:
        priority, age = _thread_details(thread.id, current_time)
        user_time = TimeSpan.from_seconds(thread.user_time)
        kernel_time = TimeSpan.from_seconds(thread.system_time)
        out.write(f"{thread.id:5d} {priority:3d} {user_time} {kernel_time} {age}\n")
    return True


def _is_privileged():
    """Best-effort check for administrative rights; assumed where it cannot be checked."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is None or geteuid() == 0


def main(argv=None):
    """Run the command and return its exit status."""
    if argv is None:
        argv = sys.argv[1:]
    app_name = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "proclist"

    try:
        options, process_filter = parse_args(argv)
    except UsageError as exc:
        print(exc)
        if exc.show_usage:
            print(usage(app_name), end="")
        return 1

    if options.show_help:
        print(usage(app_name), end="")
        return 0

    if not _is_privileged():
        print("Warning: Please run as administrator to get all infos.\n")

    return 0 if list_processes(options, process_filter, sys.stdout) else 1


if __name__ == "__main__":
    sys.exit(main())