# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

import os
import logging
from dataclasses import dataclass, fields
from typing import Callable

from .config import _TreeConfig
from .operations import _set_permission, _create_directory, _delete, _copy, _check_not_nested
from .helpers import _normalize_mode, _to_path
from .errors import FileTreeError
from .log import logger, _exc_summary

@dataclass(frozen=True)
class OperationResult:
	'''
	Outcome of a `FileTree` operation that did not raise. Truthy on success.

	On failure, `error` holds the descriptive message and `exception` the `FileTreeError` that ended the operation.
	'''

	success   : bool
	error     : str|None = None
	exception : FileTreeError|None = None

	def __bool__(self):
		return self.success

class FileTree:
	'''
	`FileTree` sets permissions on, creates, deletes and copies filesystem trees.

	Every operation either succeeds and returns a truthy `OperationResult`, or fails at the first problem. How a failure is reported depends on the error mode: with `throw_exceptions` the `FileTreeError` is raised, otherwise it is logged and returned inside a falsy `OperationResult`. The mode is set on the object and can be overridden for a single call.

	Example
		>>> import tempfile
		>>> tree = FileTree(throw_exceptions=False)
		>>> with tempfile.TemporaryDirectory() as root:
		...     tree.create_directory(os.path.join(root, "a", "b"), "0750").success
		...     result = tree.delete(os.path.join(root, "missing"))
		...     result.success, result.error.endswith("missing'")
		True
		(False, True)
	'''

	def __init__(self, **kwargs):
		'''
		Collects and validates the default settings of the operations.

		Args
			throw_exceptions  (bool) : Whether failures raise a `FileTreeError` instead of returning a falsy `OperationResult`. (Defaults to `True`.)
			dir_mode       (int|str) : Mode of directories made by `create_directory()` when no mode is given. (Defaults to `0o775`.)
			copy_mode      (int|str) : Mode of directories made by `copy()` when no permissions are given. (Defaults to `0o755`.)
			preserve_metadata (bool) : Whether copied files keep their mode and timestamps. Otherwise only their bytes are copied. (Defaults to `False`.)
			logger          (Logger) : Where records of performed operations go. (Defaults to the "filetree" logger.)
		'''

		self._throw_exceptions  : bool = True
		self._dir_mode          : int = 0o775
		self._copy_mode         : int = 0o755
		self._preserve_metadata : bool = False
		self._logger            : logging.Logger = logger

		for key in kwargs:
			if not hasattr(self, key):
				raise AttributeError(f"FileTree object has no '{key}' attribute.")
			setattr(self, key, kwargs[key])

	# -------------------------------------------------------------------------
	# Operations

	def set_permission(self, path:str|os.PathLike, mode:int|str, *, throw_exceptions:bool|None = None) -> OperationResult:
		'''Apply `mode` to the existing file or directory `path`.'''

		path = _to_path(path)
		mode = _normalize_mode(mode)
		return self._run(
			f"chmod {oct(mode)} {path}",
			lambda config: _set_permission(config, path, mode),
			throw_exceptions,
		)

	def create_directory(self, path:str|os.PathLike, mode:int|str|None = None, recursive:bool = True, *, throw_exceptions:bool|None = None) -> OperationResult:
		'''
		Create the directory `path` with exactly `mode`. Missing ancestors are created with the same mode when `recursive` is set. Succeeds without changes if `path` is already a directory.
		'''

		path = _to_path(path)
		mode = self.dir_mode if mode is None else _normalize_mode(mode)
		return self._run(
			f"mkdir {oct(mode)} {path}",
			lambda config: _create_directory(config, path, mode, recursive=bool(recursive)),
			throw_exceptions,
		)

	def delete(self, path:str|os.PathLike, *, throw_exceptions:bool|None = None) -> OperationResult:
		'''Delete a file or symlink, or a directory with everything under it.'''

		path = _to_path(path)
		return self._run(
			f"delete {path}",
			lambda config: _delete(config, path),
			throw_exceptions,
		)

	def copy(self, source:str|os.PathLike, dest:str|os.PathLike, permissions:int|str|None = None, *, throw_exceptions:bool|None = None) -> OperationResult:
		'''
		Copy a symlink, a file, or a directory tree from `source` to `dest`.

		Symlinks are recreated pointing at the same target string and are never followed. Directories created in `dest` get `permissions`. Entries are copied in directory enumeration order.
		'''

		src = _to_path(source, "source")
		dst = _to_path(dest, "dest")
		mode = self.copy_mode if permissions is None else _normalize_mode(permissions)

		def copy(config: _TreeConfig) -> None:
			_check_not_nested(src, dst)
			_copy(config, src, dst, mode)

		return self._run(f"copy {src} -> {dst}", copy, throw_exceptions)

	def _run(self, summary:str, op:Callable[[_TreeConfig], None], throw_exceptions:bool|None) -> OperationResult:
		'''Performs `op` and reports a failure according to the error mode.'''

		config = self.get_config(throw_exceptions)
		try:
			op(config)
		except FileTreeError as e:
			if config.throw_exceptions:
				raise
			config.logger.error(_exc_summary(e))
			return OperationResult(False, str(e), e)
		config.logger.info(summary)
		return OperationResult(True)

	def get_config(self, throw_exceptions:bool|None = None) -> _TreeConfig:
		'''Freeze the current settings, with an optional error mode override, for one operation.'''

		names = {f.name for f in fields(_TreeConfig)}
		options = {name: getattr(self, name) for name in names}
		if throw_exceptions is not None:
			options["throw_exceptions"] = bool(throw_exceptions)
		return _TreeConfig(**options)

	# -------------------------------------------------------------------------
	# Collected & validated arguments

	@property
	def throw_exceptions(self) -> bool:
		return self._throw_exceptions

	@throw_exceptions.setter
	def throw_exceptions(self, val:bool) -> None:
		if not isinstance(val, bool):
			raise TypeError(f"Bad type for property 'throw_exceptions' (expected bool): {val}")
		self._throw_exceptions = val

	@property
	def dir_mode(self) -> int:
		return self._dir_mode

	@dir_mode.setter
	def dir_mode(self, val:int|str) -> None:
		self._dir_mode = _normalize_mode(val)

	@property
	def copy_mode(self) -> int:
		return self._copy_mode

	@copy_mode.setter
	def copy_mode(self, val:int|str) -> None:
		self._copy_mode = _normalize_mode(val)

	@property
	def preserve_metadata(self) -> bool:
		return self._preserve_metadata

	@preserve_metadata.setter
	def preserve_metadata(self, val:bool) -> None:
		if not isinstance(val, bool):
			raise TypeError(f"Bad type for property 'preserve_metadata' (expected bool): {val}")
		self._preserve_metadata = val

	@property
	def logger(self) -> logging.Logger:
		return self._logger

	@logger.setter
	def logger(self, val:logging.Logger) -> None:
		if not isinstance(val, logging.Logger):
			raise TypeError(f"Bad type for property 'logger' (expected Logger): {val}")
		self._logger = val

# -----------------------------------------------------------------------------
# Module-level shortcuts, each using a new `FileTree`

def set_permission(path:str|os.PathLike, mode:int|str, throw_exceptions:bool = True) -> OperationResult:
	return FileTree(throw_exceptions=throw_exceptions).set_permission(path, mode)

def create_directory(path:str|os.PathLike, mode:int|str = 0o775, recursive:bool = True, throw_exceptions:bool = True) -> OperationResult:
	return FileTree(throw_exceptions=throw_exceptions).create_directory(path, mode, recursive)

def delete(path:str|os.PathLike, throw_exceptions:bool = True) -> OperationResult:
	return FileTree(throw_exceptions=throw_exceptions).delete(path)

def copy(source:str|os.PathLike, dest:str|os.PathLike, permissions:int|str = 0o755, throw_exceptions:bool = True) -> OperationResult:
	return FileTree(throw_exceptions=throw_exceptions).copy(source, dest, permissions)
