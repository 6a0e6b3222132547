# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

import os
import stat
import hashlib
from pathlib import Path

class TempLoggingLevel:
	def __init__(self, logger, level):
		self.logger = logger
		self.level = level
	def __enter__(self):
		self.old_level = self.logger.level
		self.logger.setLevel(self.level)
	def __exit__(self, exc_type, exc_val, exc_tb):
		self.logger.setLevel(self.old_level)

class TempUmask:
	def __init__(self, mask):
		self.mask = mask
	def __enter__(self):
		self.old_mask = os.umask(self.mask)
	def __exit__(self, exc_type, exc_val, exc_tb):
		os.umask(self.old_mask)

def hash_directory(root:Path, *, verbose=False):
	'''Hash relative names, file contents and symlink targets under `root`, in sorted order. Symlinks are never followed.'''
	if verbose:
		print("--- Hash Start ---")
	hasher = hashlib.sha256()
	for dir, dirnames, filenames in os.walk(root):
		dirnames.sort()
		filenames.sort()
		dir_relpath = os.path.relpath(dir, root)
		hasher.update(dir_relpath.encode())
		if verbose:
			print(" "*dir.count(os.sep) + dir_relpath)
		# os.walk lists symlinks to directories in dirnames but does not descend into them
		for file in sorted(filenames + [d for d in dirnames if os.path.islink(os.path.join(dir, d))]):
			file_path = os.path.join(dir, file)
			file_relpath = os.path.relpath(file_path, root)
			hasher.update(file_relpath.encode())
			if verbose:
				print(" "*dir.count(os.sep) + file_relpath)
			if os.path.islink(file_path):
				hasher.update(b"->" + os.readlink(file_path).encode())
			else:
				with open(file_path, "rb") as f:
					while True:
						buf = f.read(4096)
						if not buf:
							break
						hasher.update(buf)
	if verbose:
		print("--- Hash End ---")
	return hasher.hexdigest()

def create_file_structure(root:Path, structure:dict, *, _symlinks:dict|None = None):
	'''Recursively creates a directory structure with files. A `Path` value creates a symlink with that target.'''
	root.mkdir(parents=True, exist_ok=True)
	if _symlinks is not None:
		symlinks = _symlinks
	else:
		symlinks = {}
	for name, content in structure.items():
		file_path = root / name
		if isinstance(content, Path):
			# create symlink
			symlinks[file_path] = content
		elif isinstance(content, dict):
			# create dir
			create_file_structure(file_path, content, _symlinks=symlinks)
		elif content is None:
			# Create an empty file
			file_path.touch()
		else:
			# Create a file with content
			file_path.write_text(content)
	# create symlinks after everything else so their targets exist
	if _symlinks is None:
		for path, target in symlinks.items():
			os.symlink(target, path)

def mode_of(path) -> int:
	return stat.S_IMODE(os.stat(path, follow_symlinks=False).st_mode)

def is_root() -> bool:
	return hasattr(os, "geteuid") and os.geteuid() == 0
