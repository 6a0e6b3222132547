# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

import os
import shutil
from pathlib import Path

from .config import _TreeConfig
from .helpers import _DirHandle, _EntryType, _entry_type
from .errors import PathNotFoundError, SourceNotFoundError, PermissionChangeError, MkdirError, DeleteError, RmdirError, SymlinkError, CopyError, DirnameError

# Every function here raises a `FileTreeError` subclass on failure. Converting
# failures into `OperationResult`s according to the error mode is left to `FileTree`.

def _set_permission(config:_TreeConfig, path:Path, mode:int) -> None:
	'''Apply `mode` to an existing file or directory. Symlinks are followed.'''

	if _entry_type(path, PermissionChangeError, follow_symlinks=True) not in (_EntryType.FILE, _EntryType.DIR):
		raise PathNotFoundError("Path not found", str(path))

	try:
		path.chmod(mode)
	except OSError as e:
		raise PermissionChangeError(f"Cannot chmod {oct(mode)}", str(path), code=e.errno) from e

	config.logger.debug(f"P {path} {oct(mode)}")

def _is_dir(path:Path) -> bool:
	return _entry_type(path, MkdirError, follow_symlinks=True) is _EntryType.DIR

def _create_directory(config:_TreeConfig, path:Path, mode:int, recursive:bool = True) -> None:
	'''
	Create the directory `path` (and its missing ancestors if `recursive`) and give it exactly `mode`, regardless of the process umask.

	An existing directory is left untouched. If `mkdir` fails but the directory exists afterwards, another process created it in the meantime and the failure is ignored.
	'''

	if _is_dir(path):
		return

	parent = path.parent

	# stop at the root of the file system, where the parent is the path itself
	if recursive and parent != path and not _is_dir(parent):
		_create_directory(config, parent, mode, recursive=True)

	try:
		path.mkdir(mode)
		config.logger.debug(f"+ {path}{os.sep}")
	except OSError as e:
		try:
			appeared = _is_dir(path)
		except MkdirError:
			appeared = False
		if not appeared:
			raise MkdirError(f"Failed to create directory: {e.strerror}", str(path), code=e.errno) from e
		config.logger.debug(f"Directory appeared while creating it: {path}")

	# mkdir() applies the umask to mode
	_set_permission(config, path, mode)

def _delete(config:_TreeConfig, path:Path) -> None:
	'''Delete a file, a symlink (never its target), or a directory and everything under it. Stops at the first failure.'''

	kind = _entry_type(path, DeleteError)

	if kind in (_EntryType.SYMLINK, _EntryType.FILE):
		try:
			path.unlink()
		except OSError as e:
			raise DeleteError("Cannot delete", str(path), code=e.errno) from e
		config.logger.debug(f"- {path}")
		return

	if kind is not _EntryType.DIR:
		raise PathNotFoundError("Path not found", str(path))

	with _DirHandle(path) as handle:
		for name in handle:
			_delete(config, path / name)

	try:
		path.rmdir()
	except OSError as e:
		raise RmdirError("Cannot remove directory", str(path), code=e.errno) from e
	config.logger.debug(f"- {path}{os.sep}")

def _copy(config:_TreeConfig, src:Path, dst:Path, mode:int) -> None:
	'''
	Copy `src` to `dst`. Symlinks are recreated with the same target string, regular files are copied, and directories are copied recursively. Directories created along the way get `mode`. Stops at the first failure.
	'''

	kind = _entry_type(src, CopyError)

	if kind is _EntryType.SYMLINK:
		_copy_symlink(config, src, dst)
	elif kind is _EntryType.FILE:
		_copy_file(config, src, dst, mode)
	elif kind is _EntryType.DIR:
		_create_directory(config, dst, mode, recursive=True)
		with _DirHandle(src) as handle:
			for name in handle:
				_copy(config, src / name, dst / name, mode)
	else:
		raise SourceNotFoundError("Source not found", str(src))

def _copy_symlink(config:_TreeConfig, src:Path, dst:Path) -> None:
	target_is_directory = _entry_type(src, SymlinkError, follow_symlinks=True) is _EntryType.DIR
	try:
		target = os.readlink(src)
		os.symlink(target, dst, target_is_directory=target_is_directory)
	except OSError as e:
		raise SymlinkError(f"Cannot symlink {src}", str(dst), code=e.errno) from e
	config.logger.debug(f"L {dst} -> {target}")

def _copy_file(config:_TreeConfig, src:Path, dst:Path, mode:int) -> None:
	parent = dst.parent
	if parent == dst:
		raise DirnameError("Cannot get dirname", str(dst))

	_create_directory(config, parent, mode, recursive=True)

	try:
		if config.preserve_metadata:
			shutil.copy2(src, dst)
		else:
			shutil.copyfile(src, dst)
	except OSError as e:
		raise CopyError(f"Cannot copy {src}", str(dst), code=e.errno) from e
	config.logger.debug(f"C {src} -> {dst}")

def _check_not_nested(src:Path, dst:Path) -> None:
	'''Refuse to copy a directory into itself or one of its descendants, where the walk would never end.'''

	if _entry_type(src, CopyError) is not _EntryType.DIR:
		return
	try:
		src_real = src.resolve()
		dst_real = dst.resolve()
	except (OSError, RuntimeError):
		# e.g. a symlink loop at dst, which cannot lie inside src; creating dst reports it
		return
	if dst_real == src_real or dst_real.is_relative_to(src_real):
		raise CopyError(f"Cannot copy a directory into itself: {src}", str(dst))
