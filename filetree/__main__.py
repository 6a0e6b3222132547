# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

import sys
import logging
import argparse

from .core import FileTree
from .helpers import _normalize_mode
from .log import logger, add_file_handler

class _ArgParser:
	'''Argument parser for when this package is run with arguments instead of imported.'''

	parser = argparse.ArgumentParser(
		prog="filetree",
		description="Set permissions on, create, delete, or copy filesystem trees.",
		epilog="(c) 2025 Joe Walter",
	)

	print_level = parser.add_mutually_exclusive_group()
	print_level.add_argument("-q", action="count", default=None, help="Shorthand for --print-level WARNING (-q) and --print-level CRITICAL (-qq).")
	print_level.add_argument("-p", "--print-level", type=str, default=None, help="Log level for printing to console. (Defaults to INFO.)")

	parser.add_argument("--debug", action="store_true", default=None, help="Shorthand for --print-level DEBUG and --log-level DEBUG. Every single filesystem change is printed.")
	parser.add_argument("--log", metavar="path", type=str, default=None, help="The path of a log file to append to. It will be created if it does not exist.")
	parser.add_argument("--log-level", type=str, default=None, help="Log level for logging to file. (Defaults to DEBUG.)")

	commands = parser.add_subparsers(dest="command", required=True, metavar="command")

	chmod = commands.add_parser("chmod", help="Set the permissions of an existing file or directory.")
	chmod.add_argument("path", help="The file or directory to change.")
	chmod.add_argument("mode", help="Octal mode, e.g. 0755.")

	mkdir = commands.add_parser("mkdir", help="Create a directory with an exact mode.")
	mkdir.add_argument("path", help="The directory to create.")
	mkdir.add_argument("-m", "--mode", type=str, default=None, help="Octal mode of every directory created. (Defaults to 0775.)")
	mkdir.add_argument("--no-parents", action="store_true", default=False, help="Fail instead of creating missing parent directories.")

	rm = commands.add_parser("rm", help="Delete a file, a symlink, or a directory tree.")
	rm.add_argument("path", help="The path to delete.")

	cp = commands.add_parser("cp", help="Copy a file, a symlink, or a directory tree.")
	cp.add_argument("src", help="The path to copy from.")
	cp.add_argument("dst", help="The path to copy to.")
	cp.add_argument("-m", "--mode", type=str, default=None, help="Octal mode of directories created in 'dst'. (Defaults to 0755.)")
	cp.add_argument("--preserve", action="store_true", default=False, help="Keep the mode and timestamps of copied files.")

	@staticmethod
	def parse(args:list[str]) -> argparse.Namespace:
		'''Convert flags specific to the command line into `FileTree` options.'''

		log_levels = {"DEBUG": logging.DEBUG, "INFO":logging.INFO, "WARNING":logging.WARNING, "WARN":logging.WARNING, "ERROR":logging.ERROR, "ERR":logging.ERROR, "CRITICAL":logging.CRITICAL, "CRIT":logging.CRITICAL}

		parsed_args = _ArgParser.parser.parse_args(args)

		if parsed_args.q:
			if parsed_args.q == 1:
				parsed_args.print_level = logging.WARNING
			elif parsed_args.q == 2:
				parsed_args.print_level = logging.CRITICAL
			else:
				parsed_args.print_level = logging.CRITICAL+1
		elif parsed_args.print_level:
			parsed_args.print_level = log_levels[parsed_args.print_level.upper()]
		else:
			parsed_args.print_level = logging.INFO
		del parsed_args.q

		if parsed_args.log_level:
			parsed_args.log_level = log_levels[parsed_args.log_level.upper()]
		else:
			parsed_args.log_level = logging.DEBUG

		if parsed_args.debug:
			parsed_args.print_level = logging.DEBUG
			parsed_args.log_level = logging.DEBUG

		if getattr(parsed_args, "mode", None) is not None:
			parsed_args.mode = _normalize_mode(parsed_args.mode)

		return parsed_args

def main(args:list[str]) -> None:
	'''Run one `FileTree` operation in return-false mode and exit with 0 on success or 1 on failure.'''

	handler_file = None
	old_level = logger.level
	console_handlers = list(logger.handlers)
	old_handler_levels = [handler.level for handler in console_handlers]
	try:
		try:
			parsed_args = _ArgParser.parse(args)
		except (KeyError, TypeError, ValueError) as e:
			logger.critical(e)
			sys.exit(1)

		for handler in console_handlers:
			handler.setLevel(max(handler.level, parsed_args.print_level))
		level = parsed_args.print_level
		if parsed_args.log:
			handler_file = add_file_handler(parsed_args.log, parsed_args.log_level)
			level = min(level, parsed_args.log_level)
		logger.setLevel(level)

		logger.debug(f"{parsed_args=}")

		tree = FileTree(throw_exceptions=False)
		command = parsed_args.command
		if command == "chmod":
			result = tree.set_permission(parsed_args.path, parsed_args.mode)
		elif command == "mkdir":
			result = tree.create_directory(parsed_args.path, parsed_args.mode, recursive=not parsed_args.no_parents)
		elif command == "rm":
			result = tree.delete(parsed_args.path)
		else:
			assert command == "cp"
			tree.preserve_metadata = parsed_args.preserve
			result = tree.copy(parsed_args.src, parsed_args.dst, parsed_args.mode)

		sys.exit(0 if result else 1)

	except KeyboardInterrupt:
		sys.exit(1)
	except Exception as e:
		logger.critical("An unexpected error occurred.", exc_info=True)
		sys.exit(1)
	finally:
		logger.setLevel(old_level)
		for handler, handler_level in zip(console_handlers, old_handler_levels):
			handler.setLevel(handler_level)
		if handler_file is not None:
			logger.removeHandler(handler_file)
			handler_file.close()

def run() -> None:
	main(sys.argv[1:])

if __name__ == "__main__":
	run()
