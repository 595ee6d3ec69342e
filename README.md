# proclist

A small command-line tool that lists running processes: their IDs, parent
IDs, priorities, thread and handle counts, private memory, CPU time, elapsed
time and image path. It can also show per-thread timings or a memory-focused
view. Process information is read through `psutil`.

## Installation

```
pip install .
```

## Usage

```
proclist [-h] [-d] [-m] [-e] [name|PID]
```

| Option | Meaning |
| ------ | ------- |
| `-d`   | Show thread detail. |
| `-m`   | Show memory detail. |
| `-e`   | Match process name exactly. |
| `name` | Show processes whose name begins with `name` (case-insensitive). |
| `PID`  | Show only the process with this ID. |
| `-h`   | Show the help message and exit. |

An argument made only of decimal digits (at most 4294967295) is taken as a
PID; anything else not starting with `-` is taken as a name. Only one name or
PID may be given. A trailing `.exe` (any letter case) is dropped from process
names before they are shown or matched, and process 0 is shown as `Idle`.

If no process passes the filter, a message saying so is printed. The exit
status is 0 on success and 1 for bad arguments or when the process list
cannot be read.

### Examples

List every process:

```
proclist
```

Show the memory view for processes whose name starts with `python`:

```
proclist -m python
```

Show the threads of process 1234:

```
proclist -d 1234
```

## Columns

| Column  | Meaning |
| ------- | ------- |
| PID     | Process ID |
| PPID    | Parent process ID |
| Pri     | Priority (the process's nice value) |
| Thd     | Number of threads |
| Hnd     | Number of handles (open file descriptors where handles do not exist) |
| WS      | Working set (resident memory where no working set is reported) |
| Priv    | Private virtual memory (virtual memory size where not reported) |
| Priv Pk | Private virtual memory peak (virtual memory size where not reported) |
| Faults  | Page faults |
| NonP    | Non-paged pool |
| Page    | Paged pool |

Sizes are shown in B, kB, MB, GB or TB, and times as `hours:MM:SS.mmm`.
Values that the system does not report, or that the current user is not
allowed to read, are shown as zero. When not run with administrative rights
on a system where that can be checked, the tool prints a warning first.

In the thread view, the priority and elapsed time of a thread are only filled
in where the system exposes the thread as a task of its own; elsewhere they
are shown as zero.

## Using it from Python

```python
import sys
from proclist.cli import Options, ProcessFilter, list_processes

list_processes(Options(show_memory=True), ProcessFilter(name="python"), sys.stdout)
```

`proclist.cli` also provides `parse_args`, `usage`, `display_name`,
`list_threads` and `main`. `proclist.units` provides `SizeWithUnit`,
`TimeSpan` and `remove_extension` for formatting sizes, durations and process
names the same way the tool does.