# xvtools

Pieces of a small teaching Unix as a plain Python package with no
dependencies.

- **Command-line tools** (`xvtools.grep`, `xvtools.wc`, `xvtools.tools`):
  `grep` with `^ . * $` patterns, `wc`, `cat`, `echo`, `ls`, `mkdir`, `rm`,
  `ln`, `kill` and a hello-world program.
- **Shell parsing** (`xvtools.sh`): `tokenize` splits a command line into
  `Token`s, and `parse_command` turns it into a tree of `ExecCmd`,
  `RedirCmd`, `PipeCmd`, `ListCmd` and `BackCmd` nodes. Words, `<`, `>`,
  `>>`, `|`, `;`, `&` and parentheses are understood; at most nine
  arguments per command.
- **A small `printf`** (`xvtools.printf`): `format`, `fprintf` and `printf`
  understand `%d`, `%l`, `%x`, `%p`, `%s`, `%c` and `%%`, with uppercase
  hexadecimal digits. Unknown sequences are printed as they stand.
- **C-string helpers** (`xvtools.ulib`): `atoi`, `strcmp`, `gets` and the
  `O_RDONLY`, `O_WRONLY`, `O_RDWR`, `O_CREATE`, `O_TRUNC` flags.
- **A first-fit heap** (`xvtools.umalloc.Heap`) on a circular free list of
  16-byte units, with `malloc`, `free`, `free_units()` and an optional size
  limit.
- **An Sv39 page-table model** (`xvtools.vm.PhysicalMemory`,
  `xvtools.vm.PageTable`) with walking, mapping, unmapping, growing,
  shrinking, copying between tables and copying to and from user memory,
  plus the address, PTE and memory-layout helpers in `xvtools.riscv`.
- **ELF headers** (`xvtools.elf`): `ElfHeader` and `ProgramHeader` with
  `parse` and `pack`, and `program_headers` to read the program header
  table of an image.
- **A Park–Miller random number generator** (`xvtools.rand`): `do_rand` and
  the iterable `ParkMiller`.

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

Installing the package adds these commands:

| Command          | What it does                                              |
|------------------|-----------------------------------------------------------|
| `xvt-grep`       | print the lines that match a simple pattern               |
| `xvt-wc`         | print line, word and byte counts                          |
| `xvt-cat`        | copy files (or standard input) to standard output         |
| `xvt-echo`       | print its arguments separated by spaces                   |
| `xvt-ls`         | list names with file type, inode number and size          |
| `xvt-mkdir`      | create directories, stopping at the first failure         |
| `xvt-rm`         | remove files or empty directories                         |
| `xvt-ln`         | create a hard link: `xvt-ln old new`                      |
| `xvt-kill`       | send a kill signal to the given process ids               |
| `xvt-helloworld` | print a greeting                                          |

For example:

```
xvt-grep '^ab*c$' notes.txt
xvt-wc notes.txt
xvt-echo hello world
```

With no file arguments, `xvt-grep`, `xvt-wc` and `xvt-cat` read standard
input, and `xvt-ls` lists the current directory. In `ls` output the type
is 1 for a directory, 2 for a regular file and 3 for anything else.

## Library use

```python
from xvtools.grep import match
from xvtools.printf import format
from xvtools.sh import parse_command
from xvtools.umalloc import Heap
from xvtools.riscv import pg_round_up

match("^ab*c$", "abbbc")        # True
format("%d %x", 42, 255)        # "42 FF"
tree = parse_command("ls > out; cat < out | wc &")
pg_round_up(1)                  # 4096

heap = Heap()
block = heap.malloc(20000)
heap.free(block)
```

The page-table model works on simulated physical memory:

```python
from xvtools.vm import PhysicalMemory, PageTable

mem = PhysicalMemory()
pt = PageTable.create(mem)
size = pt.grow(0, 8192, 0)      # 8192
pt.copyout(100, b"hello\0")
pt.copyinstr(100, 64)           # b"hello"
```

## Errors

- Operations the page-table code treats as fatal, such as remapping a page
  that is already mapped or unmapping one that is not, raise `VmPanic`.
  Running out of physical frames raises `MemoryError`; copying to or from
  an address that is not a mapped user page raises `ValueError`.
- A `Heap` with a limit that cannot grow any further raises `OutOfMemory`;
  freeing a pointer that `malloc` did not return raises `ValueError`.
- Malformed command lines raise `ShellSyntaxError`, whose `leftovers`
  attribute holds any unparsed text.
- Malformed ELF data raises `ElfError`.

## What it does not do

- The shell is a parser only: it builds command trees but does not run
  them, and there is no interactive shell command.
- There is no kernel, scheduler, file system or disk-image builder; the
  page-table model covers user address spaces on simulated memory only.
- The random generator is provided on its own; there is no stress-test
  driver built on it.