"""Layout of ELF executable file headers and program headers."""

import struct
from dataclasses import astuple, dataclass
from typing import ClassVar

ELF_MAGIC = 0x464C457F  # "\x7FELF" read as a little-endian word

ELF_PROG_LOAD = 1

ELF_PROG_FLAG_EXEC = 1
ELF_PROG_FLAG_WRITE = 2
ELF_PROG_FLAG_READ = 4

_ELFHDR = struct.Struct("<I12sHHIQQQIHHHHHH")
_PROGHDR = struct.Struct("<IIQQQQQQ")


class ElfError(ValueError):
    """The data is not a well-formed ELF image."""


@dataclass
class ElfHeader:
    """The ELF file header."""

    magic: int = ELF_MAGIC
    elf: bytes = bytes(12)
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = 0
    phentsize: int = 0
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0

    SIZE: ClassVar[int] = _ELFHDR.size

    @classmethod
    def parse(cls, data):
        """Decode a header from the start of ``data``."""
        data = bytes(data)
        if len(data) < _ELFHDR.size:
            raise ElfError("truncated ELF header")
        header = cls(*_ELFHDR.unpack_from(data))
        if header.magic != ELF_MAGIC:
            raise ElfError("bad ELF magic")
        return header

    def pack(self):
        """Encode the header as little-endian bytes."""
        if len(self.elf) != 12:
            raise ElfError("ELF identification must be 12 bytes")
        try:
            return _ELFHDR.pack(*astuple(self))
        except struct.error as exc:
            raise ElfError(str(exc)) from exc


@dataclass
class ProgramHeader:
    """One entry of the program header table."""

    type: int = 0
    flags: int = 0
    off: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    align: int = 0

    SIZE: ClassVar[int] = _PROGHDR.size

    @property
    def loadable(self):
        """Whether the segment is to be loaded into memory."""
        return self.type == ELF_PROG_LOAD

    @classmethod
    def parse(cls, data):
        """Decode a program header from the start of ``data``."""
        data = bytes(data)
        if len(data) < _PROGHDR.size:
            raise ElfError("truncated program header")
        return cls(*_PROGHDR.unpack_from(data))

    def pack(self):
        """Encode the program header as little-endian bytes."""
        try:
            return _PROGHDR.pack(*astuple(self))
        except struct.error as exc:
            raise ElfError(str(exc)) from exc


def program_headers(data):
    """Return the program headers listed by the ELF image ``data``."""
    data = bytes(data)
    header = ElfHeader.parse(data)
    result = []
    for i in range(header.phnum):
        off = header.phoff + i * ProgramHeader.SIZE
        if off + ProgramHeader.SIZE > len(data):
            raise ElfError("program header table runs past end of image")
        result.append(ProgramHeader.parse(data[off:off + ProgramHeader.SIZE]))
    return result