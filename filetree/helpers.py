# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

import os
import stat
import errno
from enum import Enum
from pathlib import Path
from typing import Iterator

from .errors import FileTreeError, OpenDirError, CloseDirError
from .log import logger

# errors meaning nothing is at the path, same set pathlib treats as "does not exist"
_MISSING_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR, errno.EBADF, errno.ELOOP})

class _EntryType(Enum):
	SYMLINK = 1
	FILE    = 2
	DIR     = 3
	OTHER   = 4

def _entry_type(path:Path, error_type:type[FileTreeError], *, follow_symlinks:bool = False) -> _EntryType|None:
	'''
	Classify `path` with a single stat call. Returns `None` if nothing is there. Any other stat failure is raised as `error_type`, the error of the step that needed to know.

	>>> _entry_type(Path("/no/such/path"), OpenDirError) is None
	True
	'''

	try:
		st = os.stat(path, follow_symlinks=follow_symlinks)
	except OSError as e:
		if e.errno in _MISSING_ERRNOS:
			return None
		raise error_type("Cannot stat", str(path), code=e.errno) from e
	except ValueError:
		# embedded null byte
		return None
	if stat.S_ISLNK(st.st_mode):
		return _EntryType.SYMLINK
	if stat.S_ISREG(st.st_mode):
		return _EntryType.FILE
	if stat.S_ISDIR(st.st_mode):
		return _EntryType.DIR
	return _EntryType.OTHER

def _normalize_mode(mode:int|str) -> int:
	'''
	Converts a permission given as an `int` or an octal string into an `int`.

	>>> oct(_normalize_mode("0755"))
	'0o755'
	>>> oct(_normalize_mode("0o2770"))
	'0o2770'
	>>> _normalize_mode(0o644) == 420
	True
	>>> _normalize_mode("rwx")
	Traceback (most recent call last):
	...
	ValueError: Bad value for mode (expected an octal string): 'rwx'
	'''

	if isinstance(mode, bool) or not isinstance(mode, int|str):
		raise TypeError(f"Bad type for mode (expected int|str): {mode!r}")
	if isinstance(mode, str):
		try:
			mode = int(mode.strip(), 8)
		except ValueError:
			raise ValueError(f"Bad value for mode (expected an octal string): {mode!r}") from None
	if not 0 <= mode <= 0o7777:
		raise ValueError(f"Bad value for mode (expected 0 to 0o7777): {oct(mode)}")
	return mode

def _to_path(val:str|os.PathLike, name:str = "path") -> Path:
	'''
	Coerces `val` into a `Path`.

	>>> _to_path("a/b").name
	'b'
	>>> _to_path(3)
	Traceback (most recent call last):
	...
	TypeError: Bad type for arg 'path' (expected str|PathLike): 3
	'''

	if isinstance(val, Path):
		return val
	if not isinstance(val, str|os.PathLike):
		raise TypeError(f"Bad type for arg '{name}' (expected str|PathLike): {val!r}")
	return Path(os.fspath(val))

class _DirHandle:
	'''
	An open directory stream, used as a context manager. Iterating yields the names of the entries in enumeration order (never "." or "..").

	The stream is closed on every exit path. A failure to close is raised as `CloseDirError` only if no other error is already propagating, so the first error always reaches the caller unchanged.
	'''

	def __init__(self, path:Path):
		self.path = path
		self._it  = None

	def __enter__(self) -> "_DirHandle":
		try:
			self._it = os.scandir(self.path)
		except OSError as e:
			raise OpenDirError("Cannot open directory", str(self.path), code=e.errno) from e
		return self

	def __iter__(self) -> Iterator[str]:
		assert self._it is not None
		while True:
			try:
				entry = next(self._it)
			except StopIteration:
				return
			except OSError as e:
				raise OpenDirError("Cannot read directory", str(self.path), code=e.errno) from e
			yield entry.name

	def __exit__(self, exc_type, exc_val, exc_tb) -> None:
		assert self._it is not None
		try:
			self._it.close()
		except OSError as e:
			if exc_type is None:
				raise CloseDirError("Cannot close directory", str(self.path), code=e.errno) from e
			logger.debug(f"Ignoring close failure on {self.path} after an earlier error: {e}")
		finally:
			self._it = None
