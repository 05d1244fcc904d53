# xv6utils

A minimal command shell and a handful of small Unix-style tools, together
with constants and binary-structure helpers for a tiny RISC-V operating
system. Pure Python, no dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Commands

| Command     | What it does                                                          |
|-------------|-----------------------------------------------------------------------|
| `xv6-sh`    | A minimal shell (see below)                                           |
| `xv6-grep`  | Print lines matching a pattern built from `^`, `.`, `*` and `$`       |
| `xv6-wc`    | Print line, word and byte counts followed by the file name            |
| `xv6-ls`    | Print name, type (1 directory, 2 file, 3 device), inode number, size  |
| `xv6-cat`   | Copy files, or standard input, to standard output                     |
| `xv6-echo`  | Print its arguments separated by spaces                               |
| `xv6-kill`  | Kill each process whose pid is given                                  |
| `xv6-ln`    | Create a hard link: `xv6-ln old new`                                  |
| `xv6-mkdir` | Create directories, stopping at the first failure                     |
| `xv6-rm`    | Remove files or empty directories, stopping at the first failure      |

Examples:

```
xv6-grep '^ab*c$' notes.txt
xv6-wc notes.txt
xv6-ls .
echo hello | xv6-cat
xv6-sh
```

With no file arguments, `xv6-cat`, `xv6-grep` and `xv6-wc` read standard
input; `xv6-ls` with no arguments lists the current directory, including
`.` and `..`, with entries sorted by name. `xv6-grep` only prints lines that
end in a newline.

### The shell

`xv6-sh` writes the prompt `$ ` to standard error, reads one line at a time
(up to 99 characters) and understands:

- `a | b` pipelines,
- `a ; b` sequential lists,
- `a &` (the command is run to completion before the next line is read),
- `< file`, `> file` and `>> file` redirections,
- `( ... )` grouping,
- `cd dir` as a built-in.

A command line starting with `!` prints the rest of its words, joined by
spaces and cut at 512 characters, with every `os` highlighted in blue.

Commands are looked up in a table of Python callables: `cat`, `echo`,
`grep`, `wc`, `ls`, `kill`, `ln`, `mkdir` and `rm`. Any other name prints
`exec NAME failed`. A pipeline runs its left side to completion, buffering
its output, then feeds that to the right side.

## Library use

```python
from xv6utils.grep import match
from xv6utils.fmt import sprintf
from xv6utils.prng import ParkMiller
from xv6utils.sh import parse_cmd, Shell

match("^ab*c", "abbbc")          # True
sprintf("%d %x", -5, 255)        # "-5 FF"
ParkMiller(1).next()             # 33613
cmd = parse_cmd("ls | grep x > out")
```

A `Shell` can be given its own command table and streams:
`Shell(commands, stdin, stdout, stderr)`, where each command is called as
`func(argv, stdin, stdout, stderr)` and returns its exit status.

Modules:

- `xv6utils.params` — system limits, `OpenFlag`, `FileType`, the `Stat`
  record, memory-layout addresses and paging helpers (`pg_round_up`,
  `pg_round_down`, `pa2pte`, `pte2pa`, `pte_flags`, `px`, `make_satp`,
  `kstack`, `plic_senable`, `plic_spriority`, `plic_sclaim`).
- `xv6utils.elf` — `ElfHeader` and `ProgramHeader` with `pack()`, plus
  `parse_elf_header` and `parse_program_header`; bad or short input raises
  `ElfError`.
- `xv6utils.virtio` — MMIO register offsets and the `VirtqDesc`,
  `VirtqAvail`, `VirtqUsed`, `VirtqUsedElem` and `BlkRequest` structures
  with `pack()` and matching `unpack_*` functions.
- `xv6utils.fmt` — `sprintf`, `fprintf` and `printf` understanding `%d`,
  `%u`, `%x` (with `l`/`ll`), `%p`, `%s` and `%%`; integers are narrowed to
  32 bits and unknown sequences are echoed.
- `xv6utils.umalloc` — `Allocator(limit)`, a first-fit free-list allocator
  over a simulated heap grown with `sbrk`; `malloc` raises `MemoryError`
  when the heap cannot grow, `free` raises `ValueError` for an address that
  is not allocated, and `free_blocks()` lists the free list.
- `xv6utils.ulib` — `atoi`, `strcmp`, `gets` and `stat`.
- `xv6utils.grep` — `match` and `grep`.
- `xv6utils.wc` — `count` returns a `Counts` record; `wc` also prints it.
- `xv6utils.ls` — `fmtname` pads a name to the 14-character entry width;
  `ls` prints a listing.
- `xv6utils.coreutils` — `cat` and the `*_main` entry points.
- `xv6utils.prng` — `do_rand` and the `ParkMiller` minimal-standard
  generator.
- `xv6utils.sh` — `parse_cmd`, `ExecCmd`, `RedirCmd`, `PipeCmd`, `ListCmd`,
  `BackCmd`, `render_bang` and `Shell`; parse errors raise
  `ShellSyntaxError`.

## What it does not do

There is no operating system here: no kernel, scheduler, file-system image
or disk driver. The ELF and virtio modules only encode and decode
structures. The shell does not start external programs or run jobs
concurrently; it only runs the commands in its table, inside the current
process, against the host's files.